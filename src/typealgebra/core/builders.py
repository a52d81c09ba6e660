"""Public constructors: build types already in normal form."""

from __future__ import annotations

from typing import TYPE_CHECKING

from typealgebra.core.normalize import normalize
from typealgebra.core.types import (
    BOTTOM,
    TOP,
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


def union(env: TypingEnvironment, *types: Type) -> Type:
    return normalize(env, Union(frozenset(types)))


def intersect(env: TypingEnvironment, *types: Type) -> Type:
    return normalize(env, Intersection(frozenset(types)))


def nullable(env: TypingEnvironment, t: Type) -> Type:
    return normalize(env, Nullable(t))


def flexible(env: TypingEnvironment, lower: Type, upper: Type) -> Type:
    return normalize(env, Flexible(lower, upper))


def apply(env: TypingEnvironment, constructor: Constructor, *args: Projection | Type) -> Type:
    """Instantiate ``constructor``; plain types are taken as invariant arguments."""
    projections = tuple(arg if isinstance(arg, Projection) else invariant(arg) for arg in args)
    return normalize(env, TypeApplication(constructor, projections))


def out(t: Type) -> Projection:
    return Projection(t, BOTTOM)


def in_(t: Type) -> Projection:
    return Projection(TOP, t)


def invariant(t: Type) -> Projection:
    return Projection(t, t)
