"""Union, intersection, nullable and flexible types with a four-valued subtyping relation."""

__version__ = "0.1.0"
