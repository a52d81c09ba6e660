"""Reference scenarios shown by the CLI."""

from __future__ import annotations

from dataclasses import dataclass

from typealgebra.config.settings import AlgebraSettings
from typealgebra.core.builders import apply, flexible, intersect, nullable, out, union
from typealgebra.core.environment import DeclEnvironment, EmptyEnvironment, TypeDeclaration, TypeParameter
from typealgebra.core.relation import SubtypingRelation, Variance
from typealgebra.core.subtyping import subtyping_relation
from typealgebra.core.types import NOTHING, STAR, Constructor, Nullable, Type, TypeApplication, Union

T = Constructor("T")
TT = Constructor("TT")
A = Constructor("A")
E = Constructor("E")
LIST = Constructor("List")
MUTABLE_LIST = Constructor("MutableList")


@dataclass(frozen=True)
class Scenario:
    """One expression with the value it must produce."""

    label: str
    actual: Type | SubtypingRelation
    expected: Type | SubtypingRelation

    @property
    def passed(self) -> bool:
        return self.actual == self.expected


def collections_environment(settings: AlgebraSettings | None = None) -> DeclEnvironment:
    """Declaration environment with ``List<out E>`` and ``MutableList<E> : List<E>``."""
    env = DeclEnvironment(settings)
    env.declare(TypeDeclaration(LIST, (TypeParameter(E, Variance.COVARIANT),)))
    env.declare(
        TypeDeclaration(
            MUTABLE_LIST,
            (TypeParameter(E),),
            frozenset({TypeApplication(LIST, (out(E),))}),
        )
    )
    return env


def build_scenarios(settings: AlgebraSettings | None = None) -> list[Scenario]:
    env = EmptyEnvironment(settings)
    a_out_t = apply(env, A, out(T))
    decls = collections_environment(settings)
    list_tt = apply(decls, LIST, TT)
    mutable_list_tt = apply(decls, MUTABLE_LIST, TT)

    return [
        Scenario("T | A<out T>", union(env, T, a_out_t), Union(frozenset({T, a_out_t}))),
        Scenario(
            "T | A<out T> | T?",
            union(env, T, a_out_t, nullable(env, T)),
            Nullable(Union(frozenset({T, a_out_t}))),
        ),
        Scenario("A<*> | A<T>", union(env, apply(env, A, STAR), apply(env, A, T)), apply(env, A, STAR)),
        Scenario("A<*> & A<T>", intersect(env, apply(env, A, STAR), apply(env, A, T)), apply(env, A, T)),
        Scenario(
            "T rel (T | Nothing?)",
            subtyping_relation(env, T, union(env, T, nullable(env, NOTHING))),
            SubtypingRelation.SUBTYPE,
        ),
        Scenario(
            "(T | Nothing?) rel T?",
            subtyping_relation(env, union(env, T, nullable(env, NOTHING)), nullable(env, T)),
            SubtypingRelation.EQUIVALENT,
        ),
        Scenario("(T?)?", nullable(env, nullable(env, T)), nullable(env, T)),
        Scenario("(TT..TT?) & T", intersect(env, flexible(env, TT, nullable(env, TT)), T), intersect(env, TT, T)),
        Scenario(
            "List<TT> rel MutableList<TT>",
            subtyping_relation(decls, list_tt, mutable_list_tt),
            SubtypingRelation.SUPERTYPE,
        ),
        Scenario("List<TT> | MutableList<TT>", union(decls, list_tt, mutable_list_tt), list_tt),
    ]


def sample_types(settings: AlgebraSettings | None = None) -> tuple[DeclEnvironment, dict[str, Type]]:
    """Environment plus sample types keyed by their rendering."""
    env = collections_environment(settings)
    samples = [
        T,
        TT,
        NOTHING,
        nullable(env, T),
        nullable(env, NOTHING),
        apply(env, A, T),
        apply(env, A, out(T)),
        apply(env, A, STAR),
        apply(env, LIST, TT),
        apply(env, LIST, out(TT)),
        apply(env, MUTABLE_LIST, TT),
        union(env, T, TT),
        intersect(env, T, TT),
        flexible(env, T, nullable(env, T)),
    ]
    return env, {str(sample): sample for sample in samples}
