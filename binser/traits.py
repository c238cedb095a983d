"""Helpers that describe how containers, buffers and text are sized and resized."""

from collections import deque
from collections.abc import MutableSequence

_NUL_ITEMS = (0, "\0", b"\0")


def container_size(container):
    """Number of elements in ``container``.

    Containers without ``len`` (for example singly linked or lazily produced
    sequences) are counted by walking them, which consumes one-shot iterators.
    """
    try:
        return len(container)
    except TypeError:
        return sum(1 for _ in container)


def resize_container(container, new_size, factory=int):
    """Resize a mutable sequence in place to ``new_size`` elements.

    New elements are made by calling ``factory``; surplus elements are dropped
    from the end. Returns the container.
    """
    if new_size < 0:
        raise ValueError(f"cannot resize to a negative size {new_size}")
    if isinstance(container, deque):
        while len(container) > new_size:
            container.pop()
    elif isinstance(container, MutableSequence):
        del container[new_size:]
    else:
        raise TypeError(f"{type(container).__name__} cannot be resized")
    missing = new_size - len(container)
    if missing > 0:
        container.extend(factory() for _ in range(missing))
    return container


def grow_buffer(buffer):
    """Enlarge a ``bytearray`` used as an output buffer; return its new length.

    Small buffers grow quickly, and sizes are kept to whole 64-byte cache lines.
    """
    current = len(buffer)
    new_size = int(current * 1.5) + 128
    new_size -= new_size % 64
    new_size = max(new_size, current)
    buffer.extend(bytes(new_size - current))
    return new_size


def text_length(value):
    """Length of the text held in ``value``.

    A ``str`` counts all of its characters. A bytes-like value or any other
    sequence is treated as a NUL-terminated character array, so its text ends
    at the first NUL item, or at its end if there is none.
    """
    if isinstance(value, str):
        return len(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        data = bytes(value)
        end = data.find(0)
        return len(data) if end < 0 else end
    for position, item in enumerate(value):
        if item in _NUL_ITEMS:
            return position
    return container_size(value)