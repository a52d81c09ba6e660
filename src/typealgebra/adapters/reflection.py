"""Declare Python classes in a declaration environment.

Classes become constructors named by their ``__qualname__``, ``TypeVar``
parameters carry their declared variance, and subscripted generic bases
become supertypes expressed in terms of the class's own parameters::

    T_co = TypeVar("T_co", covariant=True)

    class Source(Generic[T_co]): ...
    class Box(Source[E]): ...

    declare_class(env, Box)  # declares Source<out T_co> and Box<E> : Source<E>
"""

from __future__ import annotations

import types
import typing
from typing import Any, ForwardRef, Generic, Protocol, TypeVar, get_args, get_origin

from loguru import logger

from typealgebra.core.builders import invariant
from typealgebra.core.environment import DeclEnvironment, TypeDeclaration, TypeParameter
from typealgebra.core.errors import UnresolvedDeclaration
from typealgebra.core.normalize import normalize
from typealgebra.core.relation import Variance
from typealgebra.core.types import ANY, NOTHING, TOP, Constructor, Nullable, Type, TypeApplication, Union

_SKIPPED_BASES = (object, Generic, Protocol)
_UNION_ORIGINS = (typing.Union, types.UnionType)


def declare_class(env: DeclEnvironment, cls: type) -> Constructor:
    """Declare ``cls`` and, first, every class it inherits from."""
    return _ClassInjector(env).declare(cls)


def type_of(env: DeclEnvironment, annotation: Any) -> Type:
    """Normalized type of an annotation, declaring the classes it mentions."""
    return normalize(env, _ClassInjector(env).type_of(annotation))


class _ClassInjector:
    def __init__(self, env: DeclEnvironment):
        self.env = env
        self._in_progress: set[Constructor] = set()

    def declare(self, cls: type) -> Constructor:
        if cls is object:
            return ANY
        constructor = Constructor(cls.__qualname__)
        if constructor in self.env or constructor in self._in_progress:
            return constructor

        self._in_progress.add(constructor)
        try:
            params = tuple(self.parameter(tv) for tv in cls.__dict__.get("__parameters__", ()))
            supertypes = frozenset(self.supertype(base) for base in _bases(cls) if not _is_skipped(base))
            self.env.declare(TypeDeclaration(constructor, params, supertypes))
        finally:
            self._in_progress.discard(constructor)
        logger.debug("reflection.declared class={} constructor={}", cls, constructor)
        return constructor

    def parameter(self, tv: TypeVar) -> TypeParameter:
        if tv.__covariant__:
            variance = Variance.COVARIANT
        elif tv.__contravariant__:
            variance = Variance.CONTRAVARIANT
        else:
            variance = Variance.INVARIANT
        bounds = frozenset() if tv.__bound__ is None else frozenset({self.type_of(tv.__bound__)})
        return TypeParameter(Constructor(tv.__name__), variance, bounds)

    def supertype(self, base: Any) -> Constructor | TypeApplication:
        result = self.type_of(base)
        if not isinstance(result, (Constructor, TypeApplication)):
            raise UnresolvedDeclaration(Constructor(repr(base)))
        return result

    def type_of(self, tp: Any) -> Type:
        if tp is Any:
            return TOP
        if tp is None or tp is type(None):
            return Nullable(NOTHING)
        if isinstance(tp, TypeVar):
            return Constructor(tp.__name__)
        if isinstance(tp, ForwardRef):
            return Constructor(tp.__forward_arg__)
        if isinstance(tp, str):
            return Constructor(tp)

        origin = get_origin(tp)
        if origin in _UNION_ORIGINS:
            return self._union_of(get_args(tp))
        if origin is not None:
            if not (isinstance(origin, type) and issubclass(origin, Generic)):
                raise UnresolvedDeclaration(Constructor(getattr(origin, "__qualname__", repr(origin))))
            constructor = self.declare(origin)
            return TypeApplication(constructor, tuple(invariant(self.type_of(arg)) for arg in get_args(tp)))
        if isinstance(tp, type):
            return self.declare(tp)
        raise UnresolvedDeclaration(Constructor(repr(tp)))

    def _union_of(self, args: tuple[Any, ...]) -> Type:
        has_none = any(arg is type(None) for arg in args)
        members = frozenset(self.type_of(arg) for arg in args if arg is not type(None))
        result: Type = next(iter(members)) if len(members) == 1 else Union(members)
        return Nullable(result) if has_none else result


def _bases(cls: type) -> tuple[Any, ...]:
    # __orig_bases__ must come from the class itself, not be inherited
    return cls.__dict__.get("__orig_bases__", cls.__bases__)


def _is_skipped(base: Any) -> bool:
    origin = get_origin(base) or base
    return origin in _SKIPPED_BASES
