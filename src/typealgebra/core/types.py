"""Type representations: the closed sum of type shapes and projections."""

from __future__ import annotations

from dataclasses import dataclass


class Type:
    """Base class for types.

    The set of shapes is closed: ``Constructor``, ``TypeApplication``,
    ``Union``, ``Intersection``, ``Nullable`` and ``Flexible``. Operations
    over types live in their own modules and dispatch with ``match``.
    """


@dataclass(frozen=True)
class Constructor(Type):
    """Nominal leaf: a named type symbol."""

    name: str

    def __str__(self) -> str:
        return self.name


ANY = Constructor("Any")
NOTHING = Constructor("Nothing")


@dataclass(frozen=True)
class Projection:
    """Use-site bounds of one type argument.

    ``out_bound == in_bound`` is invariant, ``in_bound == BOTTOM`` is
    ``out T``, ``out_bound == TOP`` is ``in T``; both extremes at once is ``*``.
    """

    out_bound: Type
    in_bound: Type

    @property
    def is_star(self) -> bool:
        return self.out_bound == TOP and self.in_bound == BOTTOM

    @property
    def is_invariant(self) -> bool:
        return self.out_bound == self.in_bound

    @property
    def is_covariant(self) -> bool:
        return self.in_bound == BOTTOM

    @property
    def is_contravariant(self) -> bool:
        return self.out_bound == TOP

    def __str__(self) -> str:
        if self.is_invariant:
            return str(self.out_bound)
        if self.is_star:
            return "*"
        if self.is_covariant:
            return f"out {self.out_bound}"
        if self.is_contravariant:
            return f"in {self.in_bound}"
        return f"{{in {self.in_bound}, out {self.out_bound}}}"


@dataclass(frozen=True)
class TypeApplication(Type):
    """Generic constructor instantiated with projection arguments: C<p1, ..., pn>."""

    constructor: Constructor
    args: tuple[Projection, ...]

    def __str__(self) -> str:
        args_str = ", ".join(str(arg) for arg in self.args)
        return f"{self.constructor}<{args_str}>"


@dataclass(frozen=True)
class Union(Type):
    """Union of member types: a | b | ..."""

    args: frozenset[Type]

    def __str__(self) -> str:
        return " | ".join(_render_members(self.args))


@dataclass(frozen=True)
class Intersection(Type):
    """Intersection of member types: a & b & ..."""

    args: frozenset[Type]

    def __str__(self) -> str:
        return " & ".join(_render_members(self.args))


@dataclass(frozen=True)
class Nullable(Type):
    """Base type unioned with null: T?"""

    base: Type

    def __str__(self) -> str:
        match self.base:
            case Constructor() | TypeApplication() | Nullable():
                return f"{self.base}?"
            case _:
                return f"({self.base})?"


@dataclass(frozen=True)
class Flexible(Type):
    """Range type lower..upper, used for platform types."""

    lower: Type
    upper: Type

    def __str__(self) -> str:
        return f"{_render_operand(self.lower)}..{_render_operand(self.upper)}"


TOP = Nullable(ANY)
BOTTOM = NOTHING
STAR = Projection(TOP, BOTTOM)


def _render_operand(t: Type) -> str:
    match t:
        case Union() | Intersection() | Flexible():
            return f"({t})"
        case _:
            return str(t)


def _render_members(args: frozenset[Type]) -> list[str]:
    # Member sets are unordered; sort so renderings are stable across runs.
    return sorted(_render_operand(arg) for arg in args)
