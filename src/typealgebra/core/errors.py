"""Error types for the type algebra."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typealgebra.core.types import Constructor, Type


class TypeAlgebraError(Exception):
    """Base class for type algebra failures."""


class InvalidFlexibleBounds(TypeAlgebraError):
    """Flexible type whose upper bound is not a supertype of its lower bound."""

    def __init__(self, lower: Type, upper: Type):
        self.lower = lower
        self.upper = upper
        super().__init__(f"Invalid flexible bounds: {upper} is not a supertype of {lower}")


class UnresolvedDeclaration(TypeAlgebraError):
    """Constructor is missing from the declaration registry, or has no such supertype."""

    def __init__(self, constructor: Constructor, target: Constructor | None = None):
        self.constructor = constructor
        self.target = target
        if target is None:
            message = f"No declaration for {constructor}"
        else:
            message = f"{constructor} has no declared supertype with constructor {target}"
        super().__init__(message)


class UnreachableTypeShape(TypeAlgebraError):
    """Dispatch over the closed type sum met a shape it does not know."""

    def __init__(self, operation: str, *shapes: object):
        self.operation = operation
        self.shapes = shapes
        rendered = ", ".join(type(shape).__name__ for shape in shapes)
        super().__init__(f"Unrecognized type shape in {operation}: {rendered}")


class ArityMismatch(TypeAlgebraError):
    """Generic constructor applied to the wrong number of arguments."""

    def __init__(self, constructor: Constructor, expected: int, actual: int):
        self.constructor = constructor
        self.expected = expected
        self.actual = actual
        super().__init__(f"{constructor} expects {expected} type argument(s), got {actual}")


class NormalizationDiverged(TypeAlgebraError):
    """Fixpoint iteration did not settle within the configured step limit."""

    def __init__(self, t: Type, steps: int):
        self.t = t
        self.steps = steps
        super().__init__(f"Normalization of {t} did not reach a fixpoint after {steps} steps")
