# binser

`binser` provides the building blocks for writing and reading compact binary data:

- `binser.config`: `EndiannessType` (`LITTLE_ENDIAN`, `BIG_ENDIAN`) and the frozen dataclass `Config`. `Config` holds `endianness`, `check_adapter_errors` and `check_data_errors`. Its default is little endian with both checks on.
- `binser.buffer`:
  - `OutputBufferAdapter(buffer=None, config=None, resizable=True)` writes into a `bytearray`. A resizable buffer grows as needed. A fixed buffer raises `IndexError` when a write passes its end. It has `write_bytes(value, size)`, which writes two's complement for negatives and raises `OverflowError` if the value does not fit. It also has `write_buffer(data)`, the `write_pos` property, `flush()` and `written_bytes_count()`.
  - `InputBufferAdapter(buffer, size=None, config=None)` reads back. It has `read_bytes(size)`, `read_buffer(size)`, the `read_pos` and `read_end_pos` properties, the `error` property (a `ReaderError`) and `is_completed_successfully()`. Reading past the end gives zero bytes and sets `ReaderError.DATA_OVERFLOW`. With `check_adapter_errors` off it raises `IndexError` instead.
  - When no config is given, both adapters use big-endian byte order.
  - `write_size(adapter, size)` and `read_size(adapter, max_size=None)` handle the variable-length size prefix. The prefix takes 1 byte below 128, 2 bytes below 16384 and 4 bytes below 2**30. If a size read is over `max_size`, `read_size` sets `ReaderError.INVALID_DATA` and returns 0.
- `binser.traits`: `container_size`, `resize_container(container, new_size, factory=int)`, `grow_buffer` and `text_length`. `text_length` counts a `str` whole and treats other sequences as NUL-terminated.
- `binser.bitset`: `StdBitset`. Its `serialize(adapter, bits, size)` takes an int mask or a sequence of truth values. Its `deserialize(adapter, size)` returns a list of bools. Bits are written eight per byte, lowest bit first. Leftover bits are written one by one if the adapter has `bit_packing_enabled` and provides `write_bits`/`read_bits`. Otherwise they go in one extra byte.
- `binser.context`:
  - `AdapterWithContext(adapter, context=None)` has `context(kind)`, `context_or_none(kind)`, `adapter()` and `has_context`. A tuple context is searched for its first element of the requested type. `context` raises `ContextError` when nothing matches.
  - `SerializeRegistry` picks a class's serialize function: a registered free function or the class's own `serialize` method. Use `register(cls, func=None)` (also usable as a decorator), `select(cls, selection)` and `resolve(cls)`. `resolve` raises `TypeError` when both kinds exist and no `SerializeFunctionSelection` was chosen.
  - `create_default(cls)` builds an instance with its no-argument constructor.
- `binser.polymorphism`: `PolymorphicContext(hierarchy=None)`.
  - `hierarchy` maps a class to its direct subclasses.
  - Use `register_bases(*bases)` or `register_branch(base, derived)`, then `serialize(ser, base, obj)` and `deserialize(des, base, obj=None)`.
  - On the wire the concrete class is written as its index among the classes registered under `base`, followed by the object.
  - An unknown index sets `ReaderError.INVALID_POINTER`.
  - `handler_for(base, obj)` and `clear()` are also available.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from binser.buffer import InputBufferAdapter, OutputBufferAdapter, write_size, read_size
from binser.config import Config

buf = bytearray()
out = OutputBufferAdapter(buf, Config(), True)
write_size(out, 3)
out.write_bytes(8745, 4)
out.flush()

count = out.written_bytes_count()
inp = InputBufferAdapter(buf, count, Config())
assert read_size(inp, 10) == 3
assert inp.read_bytes(4) == 8745
assert inp.is_completed_successfully()
```

## What it does not do

The package has no serializer or deserializer object that walks a data structure for you.
There is no `object()`/`container()`/`text()` front end, no stream adapters, no bit-packing adapter, and no extensions for maps, sets, smart pointers or variants.

`PolymorphicContext.serialize` and `deserialize` expect the caller to pass an object that has an `adapter()` method returning a buffer adapter and an `object(obj)` method that writes or reads `obj`. `StdBitset` uses bit packing only when the caller's adapter provides it.