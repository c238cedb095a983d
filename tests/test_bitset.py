import pytest

from binser.bitset import StdBitset
from binser.buffer import InputBufferAdapter, OutputBufferAdapter, ReaderError


class _BitWriter:
    """Minimal bit-packing writer over an output adapter."""

    bit_packing_enabled = True

    def __init__(self, adapter):
        self.adapter = adapter
        self._scratch = 0
        self._count = 0

    def write_bits(self, value, bits):
        for i in range(bits):
            self._scratch |= ((value >> i) & 1) << self._count
            self._count += 1
            if self._count == 8:
                self.adapter.write_bytes(self._scratch, 1)
                self._scratch = 0
                self._count = 0

    def write_bytes(self, value, size):
        self.write_bits(value % (1 << (8 * size)), 8 * size)

    def flush(self):
        if self._count:
            self.adapter.write_bytes(self._scratch, 1)
            self._scratch = 0
            self._count = 0


class _BitReader:
    """Minimal bit-packing reader over an input adapter."""

    bit_packing_enabled = True

    def __init__(self, adapter):
        self.adapter = adapter
        self._scratch = 0
        self._count = 0

    def read_bits(self, bits):
        value = 0
        for i in range(bits):
            if self._count == 0:
                self._scratch = self.adapter.read_bytes(1)
                self._count = 8
            value |= (self._scratch & 1) << i
            self._scratch >>= 1
            self._count -= 1
        return value

    def read_bytes(self, size):
        return self.read_bits(8 * size)


def _round_trip(bits, size):
    out = OutputBufferAdapter()
    StdBitset().serialize(out, bits, size)
    count = out.written_bytes_count()
    reader = InputBufferAdapter(out.buffer, count)
    result = StdBitset().deserialize(reader, size)
    return result, count, reader


def _bits(size, *positions):
    return [i in positions for i in range(size)]


def test_bitset_smaller_than_ulonglong():
    data = _bits(31, 2, 8, 15, 25, 30)
    result, count, reader = _round_trip(data, 31)
    assert result == data
    assert count == 4
    assert reader.is_completed_successfully()


def test_bitset_smaller_than_ulonglong_all_set():
    data = [True] * 9
    out = OutputBufferAdapter()
    StdBitset().serialize(out, data, 9)
    assert bytes(out.buffer[:out.written_bytes_count()]) == b"\xff\x01"
    result, _, _ = _round_trip(data, 9)
    assert result == data


def test_bitset_larger_than_ulonglong():
    data = _bits(200, 1, 31, 63, 100, 191)
    result, count, reader = _round_trip(data, 200)
    assert result == data
    assert count == 25
    assert reader.is_completed_successfully()


def test_integer_mask_is_accepted():
    result, _, _ = _round_trip((1 << 2) | (1 << 8), 12)
    assert result == _bits(12, 2, 8)


def _bit_packed_round_trip(data, size):
    other_data = 1001
    out = OutputBufferAdapter()
    writer = _BitWriter(out)
    StdBitset().serialize(writer, data, size)
    # a value in the range 1000..1015 takes 4 bits
    writer.write_bits(other_data - 1000, 4)
    writer.flush()
    count = out.written_bytes_count()

    reader = _BitReader(InputBufferAdapter(out.buffer, count))
    result = StdBitset().deserialize(reader, size)
    other_res = reader.read_bits(4) + 1000
    return result, other_res, other_data, count


def test_bitset_smaller_than_ulonglong_bit_packing_enabled():
    data = _bits(12, 2, 9)
    result, other_res, other_data, count = _bit_packed_round_trip(data, 12)
    assert result == data
    assert other_res == other_data
    assert count == 2


def test_bitset_larger_than_ulonglong_bit_packing_enabled():
    data = _bits(204, 1, 100, 191)
    result, other_res, other_data, count = _bit_packed_round_trip(data, 204)
    assert result == data
    assert other_res == other_data
    assert count == 26


def test_wrong_length_is_rejected():
    with pytest.raises(ValueError):
        StdBitset().serialize(OutputBufferAdapter(), [True, False], 3)


def test_mask_too_wide_is_rejected():
    with pytest.raises(ValueError):
        StdBitset().serialize(OutputBufferAdapter(), 1 << 8, 8)


def test_reading_past_end_gives_cleared_bits_and_overflow():
    reader = InputBufferAdapter(b"\xff", 1)
    result = StdBitset().deserialize(reader, 16)
    assert result[8:] == [False] * 8
    assert reader.error == ReaderError.DATA_OVERFLOW