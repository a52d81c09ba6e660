"""Subtyping relation between normalized types."""

from __future__ import annotations

from typing import TYPE_CHECKING

from typealgebra.core.errors import UnreachableTypeShape
from typealgebra.core.relation import SubtypingRelation, Variance
from typealgebra.core.types import (
    NOTHING,
    STAR,
    Constructor,
    Flexible,
    Intersection,
    Nullable,
    Type,
    TypeApplication,
    Union,
)

if TYPE_CHECKING:
    from typealgebra.core.environment import TypingEnvironment

SUBTYPE = SubtypingRelation.SUBTYPE
SUPERTYPE = SubtypingRelation.SUPERTYPE
EQUIVALENT = SubtypingRelation.EQUIVALENT
UNRELATED = SubtypingRelation.UNRELATED


def subtyping_relation(env: TypingEnvironment, this: Type, that: Type) -> SubtypingRelation:
    """Relation of ``this`` to ``that`` under ``env``.

    Operands are expected in normal form. Mixed shapes are resolved in a fixed
    order: flexible, nullable, union, intersection, then constructors and
    applications. When only the right operand has the deciding shape, the
    comparison is made from its side and inverted.
    """
    match this, that:
        case Flexible(lower, upper), _:
            return subtyping_relation(env, lower, that) | subtyping_relation(env, upper, that)
        case _, Flexible():
            return subtyping_relation(env, that, this).invert()
        case Nullable(base), Nullable(other):
            return subtyping_relation(env, base, other)
        case Nullable(base), _:
            # a nullable type is never below a non-nullable one
            if SUPERTYPE in subtyping_relation(env, base, that):
                return SUPERTYPE
            return UNRELATED
        case _, Nullable():
            return subtyping_relation(env, that, this).invert()
        case Union(), _:
            return _union_relation(env, this, that)
        case _, Union():
            return _union_relation(env, that, this).invert()
        case Intersection(), _:
            return _intersection_relation(env, this, that)
        case _, Intersection():
            return _intersection_relation(env, that, this).invert()
        case Constructor(), Constructor():
            return env.constructor_relation(this, that)
        case Constructor(), TypeApplication():
            return _constructor_relation(env, this, that)
        case TypeApplication(), Constructor():
            return _constructor_relation(env, that, this).invert()
        case TypeApplication(), TypeApplication():
            return _application_relation(env, this, that)
        case _:
            raise UnreachableTypeShape("subtyping_relation", this, that)


def is_subtype(env: TypingEnvironment, this: Type, that: Type) -> bool:
    return SUBTYPE in subtyping_relation(env, this, that)


def is_supertype(env: TypingEnvironment, this: Type, that: Type) -> bool:
    return SUPERTYPE in subtyping_relation(env, this, that)


def is_equivalent(env: TypingEnvironment, this: Type, that: Type) -> bool:
    return subtyping_relation(env, this, that) is EQUIVALENT


def _union_relation(env: TypingEnvironment, union: Union, that: Type) -> SubtypingRelation:
    members = union.args
    match that:
        case Union(others):
            if members == others:
                return EQUIVALENT
            supertype = all(any(is_supertype(env, m, o) for m in members) for o in others)
            subtype = all(any(is_subtype(env, m, o) for o in others) for m in members)
        case _:
            supertype = any(is_supertype(env, m, that) for m in members)
            subtype = all(is_subtype(env, m, that) for m in members)
    return SubtypingRelation.from_flags(subtype, supertype)


def _intersection_relation(env: TypingEnvironment, intersection: Intersection, that: Type) -> SubtypingRelation:
    members = intersection.args
    match that:
        case Intersection(others):
            if members == others:
                return EQUIVALENT
            subtype = all(any(is_subtype(env, m, o) for m in members) for o in others)
            supertype = all(any(is_supertype(env, m, o) for o in others) for m in members)
        case _:
            subtype = any(is_subtype(env, m, that) for m in members)
            supertype = all(is_supertype(env, m, that) for m in members)
    return SubtypingRelation.from_flags(subtype, supertype)


def _constructor_relation(env: TypingEnvironment, this: Constructor, that: TypeApplication) -> SubtypingRelation:
    nominal = env.constructor_relation(this, that.constructor)
    match nominal:
        case SubtypingRelation.SUPERTYPE | SubtypingRelation.UNRELATED:
            return nominal
        case SubtypingRelation.EQUIVALENT:
            # a bare generic constructor stands for its star projection
            raw = TypeApplication(that.constructor, (STAR,) * len(that.args))
            return _application_relation(env, raw, that)
        case _:
            if this == NOTHING:
                return SUBTYPE
            supertype = env.effective_supertype(this, that.constructor)
            if SUBTYPE in subtyping_relation(env, supertype, that):
                return SUBTYPE
            return UNRELATED


def _application_relation(env: TypingEnvironment, this: TypeApplication, that: TypeApplication) -> SubtypingRelation:
    nominal = env.constructor_relation(this.constructor, that.constructor)
    match nominal:
        case SubtypingRelation.EQUIVALENT:
            return _arguments_relation(env, this, that)
        case SubtypingRelation.SUPERTYPE:
            projected = env.supertype_as(that, this.constructor)
            return subtyping_relation(env, this, projected) & SUPERTYPE
        case SubtypingRelation.SUBTYPE:
            return _application_relation(env, that, this).invert()
        case _:
            return UNRELATED


def _arguments_relation(env: TypingEnvironment, this: TypeApplication, that: TypeApplication) -> SubtypingRelation:
    """Position-wise comparison of arguments of the same constructor.

    Out bounds compare directly, in bounds compare inverted; a covariant
    parameter only looks at out bounds and a contravariant one only at in bounds.
    """
    if len(this.args) != len(that.args):
        return UNRELATED
    result = EQUIVALENT
    for index, (left, right) in enumerate(zip(this.args, that.args)):
        variance = env.declsite_variance(this.constructor, index)
        if variance is not Variance.CONTRAVARIANT:
            result &= subtyping_relation(env, left.out_bound, right.out_bound)
        if variance is not Variance.COVARIANT:
            result &= subtyping_relation(env, left.in_bound, right.in_bound).invert()
        if result is UNRELATED:
            return UNRELATED
    return result
