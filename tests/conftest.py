"""Test configuration and shared fixtures."""

import pytest

from typealgebra.config.settings import AlgebraSettings
from typealgebra.core.builders import out
from typealgebra.core.environment import DeclEnvironment, EmptyEnvironment, TypeDeclaration, TypeParameter
from typealgebra.core.relation import Variance
from typealgebra.core.types import Constructor, TypeApplication

E = Constructor("E")


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep TYPEALGEBRA_* variables from the host out of the tests."""
    monkeypatch.delenv("TYPEALGEBRA_MAX_NORMALIZATION_STEPS", raising=False)
    monkeypatch.delenv("TYPEALGEBRA_TRANSITIVE_SUBTYPING", raising=False)
    monkeypatch.delenv("TYPEALGEBRA_LOG_FILTER", raising=False)


@pytest.fixture
def env() -> EmptyEnvironment:
    return EmptyEnvironment(AlgebraSettings())


@pytest.fixture
def collections() -> DeclEnvironment:
    """List<out E>, invariant MutableList<E> : List<E>, contravariant Sink<in E>."""
    decls = DeclEnvironment(AlgebraSettings())
    decls.declare(TypeDeclaration(Constructor("List"), (TypeParameter(E, Variance.COVARIANT),)))
    decls.declare(
        TypeDeclaration(
            Constructor("MutableList"),
            (TypeParameter(E),),
            frozenset({TypeApplication(Constructor("List"), (out(E),))}),
        )
    )
    decls.declare(TypeDeclaration(Constructor("Sink"), (TypeParameter(E, Variance.CONTRAVARIANT),)))
    return decls
