"""Compact binary serialization building blocks: buffer adapters, size prefixes, bit sets, contexts and polymorphic dispatch."""

__version__ = "0.1.0"