"""Substitution of constructors by projections throughout a type."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from typealgebra.core.errors import UnreachableTypeShape
from typealgebra.core.normalize import normalize
from typealgebra.core.types import (
    Constructor,
    Flexible,
    Intersection,
    Nullable,
    Projection,
    Type,
    TypeApplication,
    Union,
)

if TYPE_CHECKING:
    from typealgebra.core.environment import TypingEnvironment


def replace(env: TypingEnvironment, t: Type, what: Constructor, with_what: Projection | Type) -> Type:
    """Replace every occurrence of ``what`` in ``t``.

    A plain type replacement is treated as an invariant projection.
    """
    if not isinstance(with_what, Projection):
        with_what = Projection(with_what, with_what)
    return substitute(env, t, {what: with_what})


def substitute(env: TypingEnvironment, t: Type, mapping: Mapping[Constructor, Projection]) -> Type:
    """Simultaneously replace several constructors, then renormalize.

    Occurrences reached through out bounds take the projection's out bound;
    occurrences reached through in bounds take its in bound. Polarity flips
    at every nested in bound.
    """
    if not mapping:
        return t
    return normalize(env, _substitute(t, mapping, positive=True))


def _substitute(t: Type, mapping: Mapping[Constructor, Projection], positive: bool) -> Type:
    match t:
        case Constructor():
            projection = mapping.get(t)
            if projection is None:
                return t
            return projection.out_bound if positive else projection.in_bound
        case TypeApplication(constructor, args):
            return TypeApplication(constructor, tuple(_substitute_projection(arg, mapping, positive) for arg in args))
        case Union(args):
            return Union(frozenset(_substitute(arg, mapping, positive) for arg in args))
        case Intersection(args):
            return Intersection(frozenset(_substitute(arg, mapping, positive) for arg in args))
        case Nullable(base):
            return Nullable(_substitute(base, mapping, positive))
        case Flexible(lower, upper):
            return Flexible(_substitute(lower, mapping, positive), _substitute(upper, mapping, positive))
        case _:
            raise UnreachableTypeShape("replace", t)


def _substitute_projection(arg: Projection, mapping: Mapping[Constructor, Projection], positive: bool) -> Projection:
    if arg.is_star:
        return arg
    return Projection(
        _substitute(arg.out_bound, mapping, positive),
        _substitute(arg.in_bound, mapping, not positive),
    )
