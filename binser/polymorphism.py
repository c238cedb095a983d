"""Serialization of objects through a base class, with the concrete type chosen at run time."""

import inspect
from dataclasses import dataclass

from .buffer import ReaderError, read_size, write_size
from .context import create_default


@dataclass(frozen=True)
class _PolymorphicHandler:
    """Creates and processes objects of one concrete class seen through a base class."""

    base: type
    derived: type

    def create(self):
        """Make a new default instance of the concrete class."""
        return create_default(self.derived)

    def process(self, ser, obj):
        """Pass ``obj`` to the serializer or deserializer as an object."""
        ser.object(obj)


class PolymorphicContext:
    """Registry of base-to-derived class relations used to (de)serialize by base class.

    ``hierarchy`` maps a class to the classes that derive *directly* from it.
    On the wire a derived class is written as its index in the list of classes
    registered under the base, so both sides must register the same hierarchy.
    """

    def __init__(self, hierarchy=None):
        self._hierarchy = dict(hierarchy) if hierarchy is not None else {}
        self._handlers = {}
        self._derived_by_base = {}

    def clear(self):
        """Forget every registered relation."""
        self._handlers.clear()
        self._derived_by_base.clear()

    def _children(self, cls):
        return tuple(self._hierarchy.get(cls, ()))

    def _add(self, base, derived):
        if not inspect.isabstract(derived):
            self._add_to_map(base, derived)
        children = self._children(derived)
        for child in children:
            if not (isinstance(child, type) and issubclass(child, derived)):
                raise TypeError(f"{child!r} listed as a child of {derived.__name__} does not derive from it")
            self._add(base, child)
        # each child's own branch is registered after all of its siblings
        for child in reversed(children):
            self._add(child, child)

    def _add_to_map(self, base, derived):
        key = (base, derived)
        if key in self._handlers:
            return
        self._handlers[key] = _PolymorphicHandler(base, derived)
        self._derived_by_base.setdefault(base, []).append(derived)

    def register_bases(self, *args):
        """Register each given base class with every class below it in the hierarchy."""
        for base in args:
            self._add(base, base)

    def register_branch(self, base, derived):
        """Register a single relation from ``base`` to the concrete class ``derived``."""
        if not issubclass(derived, base):
            raise TypeError(f"{derived.__name__} does not derive from {base.__name__}")
        if inspect.isabstract(derived):
            raise TypeError(f"{derived.__name__} is abstract")
        self._add_to_map(base, derived)

    def handler_for(self, base, obj):
        """Return the handler for the concrete type of ``obj`` seen through ``base``."""
        try:
            return self._handlers[(base, type(obj))]
        except KeyError:
            raise LookupError(
                f"{type(obj).__name__} is not registered as derived from {base.__name__}"
            ) from None

    def serialize(self, ser, base, obj):
        """Write the index of ``obj``'s concrete type under ``base``, then the object."""
        handler = self.handler_for(base, obj)
        index = self._derived_by_base[base].index(type(obj))
        write_size(ser.adapter(), index)
        handler.process(ser, obj)

    def deserialize(self, des, base, obj=None):
        """Read an object seen through ``base`` and return it.

        ``obj`` is reused when it already has the concrete type that was read;
        otherwise a new instance is created. An unknown type index sets
        INVALID_POINTER on the adapter and ``obj`` is returned unchanged.
        """
        try:
            derived_list = self._derived_by_base[base]
        except KeyError:
            raise LookupError(f"{base.__name__} is not registered as a base class") from None
        adapter = des.adapter()
        index = read_size(adapter)
        if index >= len(derived_list):
            adapter.error = ReaderError.INVALID_POINTER
            return obj
        derived = derived_list[index]
        handler = self._handlers[(base, derived)]
        if obj is None or type(obj) is not derived:
            obj = handler.create()
        handler.process(des, obj)
        return obj