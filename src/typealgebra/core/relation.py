"""Subtyping relation lattice and declaration-site variance."""

from __future__ import annotations

from enum import Enum


class SubtypingRelation(Enum):
    """Four-valued outcome of comparing two types.

    ``a | b`` joins two pieces of evidence (either may hold), ``a & b`` meets
    them (both must hold), and ``q in r`` asks whether ``r`` implies ``q``.
    """

    SUBTYPE = "subtype"
    SUPERTYPE = "supertype"
    EQUIVALENT = "equivalent"
    UNRELATED = "unrelated"

    def invert(self) -> SubtypingRelation:
        match self:
            case SubtypingRelation.SUBTYPE:
                return SubtypingRelation.SUPERTYPE
            case SubtypingRelation.SUPERTYPE:
                return SubtypingRelation.SUBTYPE
            case _:
                return self

    def __or__(self, that: SubtypingRelation) -> SubtypingRelation:
        if self is that:
            return self
        if SubtypingRelation.EQUIVALENT in (self, that):
            return SubtypingRelation.EQUIVALENT
        if self is SubtypingRelation.UNRELATED:
            return that
        if that is SubtypingRelation.UNRELATED:
            return self
        # subtype | supertype
        return SubtypingRelation.EQUIVALENT

    def __and__(self, that: SubtypingRelation) -> SubtypingRelation:
        if self is that:
            return self
        if self is SubtypingRelation.EQUIVALENT:
            return that
        if that is SubtypingRelation.EQUIVALENT:
            return self
        return SubtypingRelation.UNRELATED

    def __contains__(self, that: SubtypingRelation) -> bool:
        return self is that or self is SubtypingRelation.EQUIVALENT or that is SubtypingRelation.UNRELATED

    @staticmethod
    def from_flags(subtype: bool, supertype: bool) -> SubtypingRelation:
        """Fold two directional facts into a single relation."""
        if subtype and supertype:
            return SubtypingRelation.EQUIVALENT
        if subtype:
            return SubtypingRelation.SUBTYPE
        if supertype:
            return SubtypingRelation.SUPERTYPE
        return SubtypingRelation.UNRELATED


class Variance(Enum):
    """Declaration-site variance of a type parameter."""

    COVARIANT = "out"
    CONTRAVARIANT = "in"
    INVARIANT = ""
