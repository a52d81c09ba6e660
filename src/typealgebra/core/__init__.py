"""Core algebra: types, relation lattice, environments, normalization and subtyping."""

from typealgebra.core.builders import apply, flexible, in_, intersect, invariant, nullable, out, union
from typealgebra.core.environment import (
    DeclEnvironment,
    EmptyEnvironment,
    TypeDeclaration,
    TypeParameter,
    TypingEnvironment,
)
from typealgebra.core.errors import (
    ArityMismatch,
    InvalidFlexibleBounds,
    NormalizationDiverged,
    TypeAlgebraError,
    UnreachableTypeShape,
    UnresolvedDeclaration,
)
from typealgebra.core.normalize import make_normalized, normalize
from typealgebra.core.relation import SubtypingRelation, Variance
from typealgebra.core.substitution import replace, substitute
from typealgebra.core.subtyping import is_equivalent, is_subtype, is_supertype, subtyping_relation
from typealgebra.core.types import (
    ANY,
    BOTTOM,
    NOTHING,
    STAR,
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

__all__ = [
    # Types
    "Type",
    "Constructor",
    "TypeApplication",
    "Union",
    "Intersection",
    "Nullable",
    "Flexible",
    "Projection",
    "ANY",
    "NOTHING",
    "TOP",
    "BOTTOM",
    "STAR",
    # Lattice
    "SubtypingRelation",
    "Variance",
    # Environments
    "TypingEnvironment",
    "EmptyEnvironment",
    "DeclEnvironment",
    "TypeDeclaration",
    "TypeParameter",
    # Operations
    "normalize",
    "make_normalized",
    "subtyping_relation",
    "is_subtype",
    "is_supertype",
    "is_equivalent",
    "replace",
    "substitute",
    # Builders
    "union",
    "intersect",
    "nullable",
    "flexible",
    "apply",
    "out",
    "in_",
    "invariant",
    # Errors
    "TypeAlgebraError",
    "InvalidFlexibleBounds",
    "UnresolvedDeclaration",
    "UnreachableTypeShape",
    "ArityMismatch",
    "NormalizationDiverged",
]
