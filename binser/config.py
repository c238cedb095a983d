"""Settings that control byte order and error checking of adapters."""

from dataclasses import dataclass
from enum import Enum


class EndiannessType(Enum):
    """Byte order of data written to or read from an adapter.

    The value of each member is the ``byteorder`` name used by ``int.to_bytes``.
    """

    LITTLE_ENDIAN = "little"
    BIG_ENDIAN = "big"


@dataclass(frozen=True)
class Config:
    """Configuration shared by input and output adapters.

    ``check_adapter_errors`` enables bounds checks when reading from a buffer;
    ``check_data_errors`` enables checks on the data itself, such as size limits.
    Both may be switched off for trusted data.
    """

    endianness: EndiannessType = EndiannessType.LITTLE_ENDIAN
    check_adapter_errors: bool = True
    check_data_errors: bool = True