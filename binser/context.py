"""Serializer state: adapter with optional context, and selection of serialize functions."""

from enum import Enum


class ContextError(LookupError):
    """Raised when a requested context value is not available."""


class AdapterWithContext:
    """Holds an adapter together with an optional user context.

    A context may be a single object or a tuple of objects. When it is a
    tuple, lookups search its elements for the first one that is an instance
    of the requested kind; otherwise the context itself is checked.
    """

    def __init__(self, adapter, context=None):
        self._adapter = adapter
        self._context = context

    @property
    def has_context(self):
        """True when a context was given."""
        return self._context is not None

    def _find(self, kind):
        ctx = self._context
        if ctx is None:
            return None
        if isinstance(ctx, tuple):
            return next((item for item in ctx if isinstance(item, kind)), None)
        return ctx if isinstance(ctx, kind) else None

    def context(self, kind):
        """Return the context value of type ``kind``; raise ContextError if absent."""
        found = self._find(kind)
        if found is None:
            if self._context is None:
                raise ContextError("no context is defined")
            raise ContextError(f"context holds no value of type {kind.__name__}")
        return found

    def context_or_none(self, kind):
        """Return the context value of type ``kind``, or None if absent."""
        return self._find(kind)

    def adapter(self):
        """The underlying input or output adapter."""
        return self._adapter


class SerializeFunctionSelection(Enum):
    """Which serialize function to use for a type that has both kinds."""

    AUTO = 0
    NON_MEMBER = 1
    MEMBER = 2


def _call_member(s, obj):
    obj.serialize(s)


class SerializeRegistry:
    """Maps classes to serialize functions.

    A class is serialized either by a free function ``func(s, obj)`` registered
    for it or one of its bases (the most derived registration wins), or by its
    own ``serialize(self, s)`` method. When both exist the choice is ambiguous
    and must be made explicitly with :meth:`select`.
    """

    def __init__(self):
        self._functions = {}
        self._selections = {}

    def register(self, cls, func=None):
        """Register ``func`` as the free serialize function of ``cls``.

        Without ``func`` this returns a decorator.
        """
        if func is None:
            def decorator(f):
                self._functions[cls] = f
                return f
            return decorator
        self._functions[cls] = func
        return func

    def select(self, cls, selection):
        """Choose which kind of serialize function is used for exactly ``cls``."""
        self._selections[cls] = SerializeFunctionSelection(selection)

    def _free_function(self, cls):
        return next((self._functions[k] for k in cls.__mro__ if k in self._functions), None)

    def resolve(self, cls):
        """Return a callable ``(s, obj)`` that serializes instances of ``cls``."""
        free = self._free_function(cls)
        has_member = callable(getattr(cls, "serialize", None))
        selection = self._selections.get(cls, SerializeFunctionSelection.AUTO)
        if selection is SerializeFunctionSelection.NON_MEMBER:
            if free is None:
                raise TypeError(f"no free serialize function is registered for {cls.__name__}")
            return free
        if selection is SerializeFunctionSelection.MEMBER:
            if not has_member:
                raise TypeError(f"{cls.__name__} has no serialize method")
            return _call_member
        if free is not None and has_member:
            raise TypeError(
                f"{cls.__name__} has both a serialize method and a free serialize function; "
                "select one explicitly"
            )
        if free is not None:
            return free
        if has_member:
            return _call_member
        raise TypeError(f"no serialize function is defined for {cls.__name__}")


def create_default(cls):
    """Create an instance of ``cls`` with its no-argument constructor."""
    try:
        return cls()
    except TypeError as exc:
        raise TypeError(f"{cls.__name__} cannot be created without arguments") from exc