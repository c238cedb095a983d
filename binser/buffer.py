"""Buffer adapters that read and write raw bytes, and the container size encoding."""

from enum import IntEnum

from .config import Config, EndiannessType

_ADAPTER_DEFAULT_CONFIG = Config(endianness=EndiannessType.BIG_ENDIAN)


class ReaderError(IntEnum):
    """State of an input adapter."""

    NO_ERROR = 0
    READING_ERROR = 1
    DATA_OVERFLOW = 2
    INVALID_DATA = 3
    INVALID_POINTER = 4


class InputBufferAdapter:
    """Reads bytes from the first ``size`` bytes of a bytes-like buffer."""

    def __init__(self, buffer, size=None, config=None):
        if size is None:
            size = len(buffer)
        elif not 0 <= size <= len(buffer):
            raise ValueError(f"size {size} is outside the buffer of length {len(buffer)}")
        self.config = config if config is not None else _ADAPTER_DEFAULT_CONFIG
        self._buffer = buffer
        self._offset = 0
        self._end = size
        self._size = size
        self._overflow_on_end = True
        self._error = ReaderError.NO_ERROR

    def read_buffer(self, size):
        """Read ``size`` raw bytes; past the readable end, zeros are returned."""
        new_offset = self._offset + size
        if new_offset <= self._end:
            data = bytes(self._buffer[self._offset:new_offset])
            self._offset = new_offset
            return data
        if not self.config.check_adapter_errors:
            raise IndexError(f"reading {size} bytes at offset {self._offset} passes the buffer end")
        if self._overflow_on_end:
            self.error = ReaderError.DATA_OVERFLOW
        return bytes(size)

    def read_bytes(self, size):
        """Read an unsigned integer of ``size`` bytes in the configured byte order."""
        return int.from_bytes(self.read_buffer(size), self.config.endianness.value)

    @property
    def read_pos(self):
        """Current read offset; 0 once an error has occurred."""
        if self.config.check_adapter_errors and self._error is not ReaderError.NO_ERROR:
            return 0
        return self._offset

    @read_pos.setter
    def read_pos(self, pos):
        if not self.config.check_adapter_errors:
            self._offset = pos
        elif 0 <= pos <= self._size and self._error is ReaderError.NO_ERROR:
            self._offset = pos
        else:
            self.error = ReaderError.DATA_OVERFLOW

    @property
    def read_end_pos(self):
        """Temporary end of readable data, or 0 when the whole buffer is readable."""
        if self._overflow_on_end:
            return 0
        return self._end

    @read_end_pos.setter
    def read_end_pos(self, pos):
        if not self.config.check_adapter_errors:
            raise ValueError("a read end position needs check_adapter_errors enabled")
        if 0 <= pos <= self._size and self._error is ReaderError.NO_ERROR:
            self._overflow_on_end = pos == 0
            self._end = self._size if pos == 0 else pos
        else:
            self.error = ReaderError.DATA_OVERFLOW

    @property
    def error(self):
        """The first error met while reading."""
        return self._error

    @error.setter
    def error(self, value):
        if self._error is ReaderError.NO_ERROR:
            self._error = ReaderError(value)
            self._end = 0
            self._size = 0
            self._offset = 0

    def is_completed_successfully(self):
        """True when the buffer was read to its end without errors."""
        return self._error is ReaderError.NO_ERROR and self._offset == self._size


class OutputBufferAdapter:
    """Writes bytes into a ``bytearray``, growing it when resizable."""

    def __init__(self, buffer=None, config=None, resizable=True):
        self.buffer = bytearray() if buffer is None else buffer
        self.config = config if config is not None else _ADAPTER_DEFAULT_CONFIG
        self._resizable = resizable
        self._offset = 0
        self._biggest_pos = 0
        if resizable and not self.buffer:
            self._grow()

    def _grow(self):
        current = len(self.buffer)
        new_size = int(current * 1.5) + 128
        new_size -= new_size % 64
        self.buffer.extend(bytes(max(new_size, current) - current))

    def _ensure_capacity(self, end):
        while end > len(self.buffer):
            if not self._resizable:
                raise IndexError(f"position {end} passes the end of a fixed buffer of {len(self.buffer)} bytes")
            self._grow()

    def write_buffer(self, data):
        """Write raw bytes at the current position."""
        new_offset = self._offset + len(data)
        self._ensure_capacity(new_offset)
        self.buffer[self._offset:new_offset] = data
        self._offset = new_offset

    def write_bytes(self, value, size):
        """Write an integer of ``size`` bytes; negative values use two's complement."""
        bits = 8 * size
        if not -(1 << (bits - 1)) <= value < (1 << bits):
            raise OverflowError(f"{value} does not fit in {size} bytes")
        data = (value % (1 << bits)).to_bytes(size, self.config.endianness.value)
        self.write_buffer(data)

    @property
    def write_pos(self):
        """Current write offset."""
        return self._offset

    @write_pos.setter
    def write_pos(self, pos):
        self._biggest_pos = max(self._biggest_pos, self._offset, pos)
        self._ensure_capacity(pos)
        self._offset = pos

    def flush(self):
        """Nothing to flush for an in-memory buffer."""

    def written_bytes_count(self):
        """Number of bytes written, counting the furthest position ever reached."""
        return max(self._offset, self._biggest_pos)


def write_size(adapter, size):
    """Write a container size in 1, 2 or 4 bytes."""
    if size < 0:
        raise ValueError("size cannot be negative")
    if size < 0x80:
        adapter.write_bytes(size, 1)
    elif size < 0x4000:
        adapter.write_bytes((size >> 8) | 0x80, 1)
        adapter.write_bytes(size & 0xFF, 1)
    elif size < 0x40000000:
        adapter.write_bytes((size >> 24) | 0xC0, 1)
        adapter.write_bytes((size >> 16) & 0xFF, 1)
        adapter.write_bytes(size & 0xFFFF, 2)
    else:
        raise ValueError(f"size {size} is too large to encode")


def read_size(adapter, max_size=None):
    """Read a container size; a size over ``max_size`` sets INVALID_DATA and gives 0."""
    high = adapter.read_bytes(1)
    if high < 0x80:
        size = high
    else:
        low = adapter.read_bytes(1)
        if high & 0x40:
            low_word = adapter.read_bytes(2)
            size = ((((high & 0x3F) << 8) | low) << 16) | low_word
        else:
            size = ((high & 0x7F) << 8) | low
    if max_size is not None and adapter.config.check_data_errors and size > max_size:
        adapter.error = ReaderError.INVALID_DATA
        return 0
    return size