"""Adapters that load declarations from outside sources."""

from typealgebra.adapters.reflection import declare_class, type_of

__all__ = ["declare_class", "type_of"]
