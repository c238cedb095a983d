"""Serialization of fixed-size bit sets."""


def _bits_to_list(bits, size):
    if isinstance(bits, int) and not isinstance(bits, bool):
        if bits < 0 or bits >> size:
            raise ValueError(f"{bits} does not fit in a bit set of {size} bits")
        return [bool((bits >> i) & 1) for i in range(size)]
    values = [bool(bit) for bit in bits]
    if len(values) != size:
        raise ValueError(f"expected {size} bits, got {len(values)}")
    return values


class StdBitset:
    """Writes a bit set of ``size`` bits, eight bits per byte, lowest bit first.

    Bits that do not fill a whole byte are written as single bits when the
    adapter has bit packing enabled, and as one more byte otherwise.
    """

    def serialize(self, adapter, bits, size):
        """Write ``bits`` (an int mask or a sequence of truth values) to ``adapter``."""
        values = _bits_to_list(bits, size)
        whole = size // 8
        for start in range(0, whole * 8, 8):
            byte = sum(1 << i for i, bit in enumerate(values[start:start + 8]) if bit)
            adapter.write_bytes(byte, 1)
        leftover = values[whole * 8:]
        if not leftover:
            return
        if getattr(adapter, "bit_packing_enabled", False):
            for bit in leftover:
                adapter.write_bits(1 if bit else 0, 1)
        else:
            byte = sum(1 << i for i, bit in enumerate(leftover) if bit)
            adapter.write_bytes(byte, 1)

    def deserialize(self, adapter, size):
        """Read a bit set of ``size`` bits from ``adapter`` as a list of bools."""
        whole = size // 8
        leftover = size % 8
        result = []
        for _ in range(whole):
            byte = adapter.read_bytes(1)
            result.extend(bool(byte & (1 << i)) for i in range(8))
        if leftover:
            if getattr(adapter, "bit_packing_enabled", False):
                result.extend(adapter.read_bits(1) == 1 for _ in range(leftover))
            else:
                byte = adapter.read_bytes(1)
                result.extend(bool(byte & (1 << i)) for i in range(leftover))
        return result