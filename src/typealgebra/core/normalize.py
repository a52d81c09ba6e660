"""Normalization of compound types to canonical form.

Two passes are composed per step:

- structural rules, independent of any declared hierarchy (flattening,
  pushing nullability and flexibility outwards, merging applications of
  the same constructor, distributing intersection over union);
- subtyping-aware rules, which consult the environment (dropping union
  members implied by others, validating flexible bounds).

``make_normalized`` performs one step on a node whose children are already
in normal form; ``normalize`` repeats it until nothing changes.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from loguru import logger

from typealgebra.core.errors import ArityMismatch, InvalidFlexibleBounds, NormalizationDiverged, UnreachableTypeShape
from typealgebra.core.relation import SubtypingRelation
from typealgebra.core.subtyping import is_subtype, is_supertype, subtyping_relation
from typealgebra.core.types import (
    ANY,
    NOTHING,
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


def normalize(env: TypingEnvironment, t: Type) -> Type:
    """Normalize ``t`` to a fixpoint under ``env``.

    Raises:
        InvalidFlexibleBounds: A flexible type's upper bound is not above its lower bound.
        ArityMismatch: A declared generic is applied to the wrong number of arguments.
        NormalizationDiverged: No fixpoint within ``max_normalization_steps``.
    """
    limit = env.settings.max_normalization_steps
    current = t
    for step in range(1, limit + 1):
        following = make_normalized(env, current)
        if following == current:
            if step > 2:
                logger.debug("normalize.fixpoint steps={} result={}", step, current)
            return current
        current = following
    logger.debug("normalize.diverged steps={} input={}", limit, t)
    raise NormalizationDiverged(t, limit)


def make_normalized(env: TypingEnvironment, t: Type) -> Type:
    """One normalization step.

    Children are brought to normal form first, then one structural rule is
    applied to the node. Only a node that is structurally stable goes through
    the subtyping-aware pass, so the environment is never asked about
    half-rebuilt operands.
    """
    node = _normalize_children(env, t)
    structural = normalize_with_structure(env, node)
    if structural != node:
        return structural
    return normalize_with_subtyping(env, node)


def _normalize_children(env: TypingEnvironment, t: Type) -> Type:
    match t:
        case Constructor():
            return t
        case TypeApplication(constructor, args):
            return TypeApplication(
                constructor,
                tuple(Projection(normalize(env, arg.out_bound), normalize(env, arg.in_bound)) for arg in args),
            )
        case Union(args):
            return Union(frozenset(normalize(env, arg) for arg in args))
        case Intersection(args):
            return Intersection(frozenset(normalize(env, arg) for arg in args))
        case Nullable(base):
            return Nullable(normalize(env, base))
        case Flexible(lower, upper):
            return Flexible(normalize(env, lower), normalize(env, upper))
        case _:
            raise UnreachableTypeShape("normalize", t)


def normalize_with_structure(env: TypingEnvironment, t: Type) -> Type:
    """Apply the first matching structural rule to ``t``."""
    match t:
        case Constructor():
            return t
        case TypeApplication(constructor, args):
            if not args:
                return constructor
            expected = env.arity(constructor)
            if expected is not None and expected != len(args):
                raise ArityMismatch(constructor, expected, len(args))
            return t
        case Nullable(Nullable() as base):
            return base
        case Nullable(Flexible(lower, upper)):
            return Flexible(Nullable(lower), Nullable(upper))
        case Nullable():
            return t
        case Flexible(lower, upper):
            if lower == upper:
                return lower
            # flexible ranges never nest: keep the outermost ends
            if isinstance(lower, Flexible):
                lower = lower.lower
            if isinstance(upper, Flexible):
                upper = upper.upper
            return Flexible(lower, upper)
        case Union(args):
            return _union_structure(args)
        case Intersection(args):
            return _intersection_structure(args)
        case _:
            raise UnreachableTypeShape("normalize_with_structure", t)


def _flatten(args: Iterable[Type], kind: type[Union] | type[Intersection]) -> set[Type]:
    members: set[Type] = set()
    for arg in args:
        if isinstance(arg, kind):
            members.update(arg.args)
        else:
            members.add(arg)
    return members


def _split_flexible(members: set[Type], kind: type[Union] | type[Intersection]) -> Type | None:
    flexible = {m for m in members if isinstance(m, Flexible)}
    if not flexible:
        return None
    rest = members - flexible
    return Flexible(
        kind(frozenset(rest | {f.lower for f in flexible})),
        kind(frozenset(rest | {f.upper for f in flexible})),
    )


def _merge_applications(
    members: set[Type],
    merge_out: type[Union] | type[Intersection],
    merge_in: type[Union] | type[Intersection],
) -> set[Type]:
    """Fold applications sharing a constructor into one, combining projections position-wise."""
    groups: dict[Constructor, list[TypeApplication]] = {}
    result: set[Type] = set()
    for member in members:
        if isinstance(member, TypeApplication):
            groups.setdefault(member.constructor, []).append(member)
        else:
            result.add(member)

    for constructor, apps in groups.items():
        arities = {len(app.args) for app in apps}
        if len(apps) == 1 or len(arities) != 1:
            result.update(apps)
            continue
        args = tuple(
            Projection(
                merge_out(frozenset(app.args[index].out_bound for app in apps)),
                merge_in(frozenset(app.args[index].in_bound for app in apps)),
            )
            for index in range(arities.pop())
        )
        result.add(TypeApplication(constructor, args))
    return result


def _rebuild(members: set[Type], kind: type[Union] | type[Intersection]) -> Type:
    if len(members) == 1:
        return next(iter(members))
    return kind(frozenset(members))


def _union_structure(args: frozenset[Type]) -> Type:
    members = _flatten(args, Union)
    if not members:
        return NOTHING
    if len(members) == 1:
        return next(iter(members))

    flexible = _split_flexible(members, Union)
    if flexible is not None:
        return flexible

    nullable = {m for m in members if isinstance(m, Nullable)}
    if nullable:
        rest = members - nullable
        return Nullable(Union(frozenset(rest | {n.base for n in nullable})))

    return _rebuild(_merge_applications(members, Union, Intersection), Union)


def _intersection_structure(args: frozenset[Type]) -> Type:
    members = _flatten(args, Intersection)
    if not members:
        return ANY
    if len(members) == 1:
        return next(iter(members))

    flexible = _split_flexible(members, Intersection)
    if flexible is not None:
        return flexible

    nullable = {m for m in members if isinstance(m, Nullable)}
    if nullable:
        bases = {n.base for n in nullable}
        if nullable == members:
            return Nullable(Intersection(frozenset(bases)))
        # a non-nullable member already excludes null
        return Intersection(frozenset((members - nullable) | bases))

    unions = [m for m in members if isinstance(m, Union)]
    if unions:
        rest = members.difference(unions)
        return Union(
            frozenset(
                Intersection(frozenset(rest | set(combination)))
                for combination in itertools.product(*(union.args for union in unions))
            )
        )

    return _rebuild(_merge_applications(members, Intersection, Union), Intersection)


def normalize_with_subtyping(env: TypingEnvironment, t: Type) -> Type:
    """Simplify ``t`` using the environment's subtyping relation."""
    match t:
        case Union(args):
            return _rebuild(_prune(args, lambda kept, candidate: is_supertype(env, kept, candidate)), Union)
        case Intersection(args):
            return _rebuild(_prune(args, lambda kept, candidate: is_subtype(env, kept, candidate)), Intersection)
        case Flexible(lower, upper):
            if SubtypingRelation.SUPERTYPE not in subtyping_relation(env, upper, lower):
                logger.debug("normalize.invalid_flexible lower={} upper={}", lower, upper)
                raise InvalidFlexibleBounds(lower, upper)
            return t
        case Constructor() | TypeApplication() | Nullable():
            return t
        case _:
            raise UnreachableTypeShape("normalize_with_subtyping", t)


def _prune(args: frozenset[Type], covers: Callable[[Type, Type], bool]) -> set[Type]:
    """Keep only members not covered by another member.

    ``covers(a, b)`` means ``b`` is redundant next to ``a``. Members are
    visited in rendering order so that among equivalent members the same
    representative always survives.
    """
    kept: list[Type] = []
    for candidate in sorted(args, key=str):
        if any(covers(member, candidate) for member in kept):
            continue
        kept = [member for member in kept if not covers(candidate, member)]
        kept.append(candidate)
    return set(kept)
