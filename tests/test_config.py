import dataclasses

import pytest

from binser.config import Config, EndiannessType


def test_default_config_is_little_endian_with_all_checks():
    config = Config()
    assert config.endianness is EndiannessType.LITTLE_ENDIAN
    assert config.check_adapter_errors is True
    assert config.check_data_errors is True


def test_config_is_immutable():
    config = Config()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.check_data_errors = False
    assert config.check_data_errors is True
    assert config == Config()


def test_replace_keeps_other_fields():
    config = dataclasses.replace(Config(), endianness=EndiannessType.BIG_ENDIAN)
    assert config.endianness is EndiannessType.BIG_ENDIAN
    assert config.check_adapter_errors == Config().check_adapter_errors
    assert config.check_data_errors == Config().check_data_errors


def test_configs_compare_by_value():
    assert Config(EndiannessType.BIG_ENDIAN) == Config(endianness=EndiannessType.BIG_ENDIAN)
    assert Config(check_data_errors=False) != Config()


def test_endianness_values_are_byteorder_names():
    big = Config(endianness=EndiannessType.BIG_ENDIAN)
    little = Config()
    assert (258).to_bytes(2, big.endianness.value) == b"\x01\x02"
    assert (258).to_bytes(2, little.endianness.value) == b"\x02\x01"