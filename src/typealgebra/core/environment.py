"""Typing environments: the nominal hierarchy the algebra is evaluated against."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field

from loguru import logger

from typealgebra.config.settings import AlgebraSettings, load_settings
from typealgebra.core.errors import ArityMismatch, UnresolvedDeclaration
from typealgebra.core.normalize import normalize
from typealgebra.core.relation import SubtypingRelation, Variance
from typealgebra.core.substitution import substitute
from typealgebra.core.types import ANY, NOTHING, Constructor, Type, TypeApplication


@dataclass(frozen=True)
class TypeParameter:
    """Formal type parameter of a declaration."""

    constructor: Constructor
    variance: Variance = Variance.INVARIANT
    bounds: frozenset[Type] = field(default_factory=frozenset)

    def __str__(self) -> str:
        prefix = f"{self.variance.value} " if self.variance is not Variance.INVARIANT else ""
        return f"{prefix}{self.constructor}"


@dataclass(frozen=True)
class TypeDeclaration:
    """Declared constructor with its parameters and direct supertypes.

    Supertypes are written in terms of the declaration's own parameters,
    e.g. ``MutableList<E>`` declares ``List<E>``.
    """

    constructor: Constructor
    params: tuple[TypeParameter, ...] = ()
    supertypes: frozenset[Constructor | TypeApplication] = field(default_factory=frozenset)

    def __str__(self) -> str:
        head = str(self.constructor)
        if self.params:
            head += "<" + ", ".join(str(p) for p in self.params) + ">"
        if self.supertypes:
            head += " : " + ", ".join(sorted(str(s) for s in self.supertypes))
        return head


def head_constructor(t: Constructor | TypeApplication) -> Constructor:
    match t:
        case TypeApplication(constructor):
            return constructor
        case _:
            return t


class TypingEnvironment(ABC):
    """Capability surface consulted by normalization and subtyping."""

    def __init__(self, settings: AlgebraSettings | None = None):
        self.settings = settings if settings is not None else load_settings()

    @staticmethod
    def default_relation(this: Constructor, that: Constructor) -> SubtypingRelation:
        """Relation derivable without declarations: identity and the Any/Nothing extremes."""
        if this == that:
            return SubtypingRelation.EQUIVALENT
        if this == ANY or that == NOTHING:
            return SubtypingRelation.SUPERTYPE
        if this == NOTHING or that == ANY:
            return SubtypingRelation.SUBTYPE
        return SubtypingRelation.UNRELATED

    @abstractmethod
    def constructor_relation(self, this: Constructor, that: Constructor) -> SubtypingRelation:
        """Nominal relation between two leaf constructors."""

    @abstractmethod
    def effective_supertype(self, constructor: Constructor, target: Constructor) -> Type:
        """Supertype of ``constructor`` whose head is ``target``, in terms of its own parameters."""

    @abstractmethod
    def remap_type_arguments(self, supertype: Type, subtype: TypeApplication) -> Type:
        """Specialize ``supertype`` to the actual arguments of ``subtype``."""

    @abstractmethod
    def declsite_variance(self, constructor: Constructor, index: int) -> Variance:
        """Declared variance of parameter ``index`` of ``constructor``."""

    def arity(self, constructor: Constructor) -> int | None:
        """Declared parameter count, or None when the constructor is not declared."""
        return None

    def supertype_as(self, subtype: Constructor | TypeApplication, target: Constructor) -> Type:
        """Express ``subtype`` as an instantiation of its ancestor ``target``."""
        match subtype:
            case TypeApplication(constructor):
                supertype = self.effective_supertype(constructor, target)
                return self.remap_type_arguments(supertype, subtype)
            case _:
                return self.effective_supertype(subtype, target)


class EmptyEnvironment(TypingEnvironment):
    """Environment with no declarations: only Any and Nothing are related to other constructors."""

    def constructor_relation(self, this: Constructor, that: Constructor) -> SubtypingRelation:
        return self.default_relation(this, that)

    def effective_supertype(self, constructor: Constructor, target: Constructor) -> Type:
        if target == ANY:
            return ANY
        raise UnresolvedDeclaration(constructor, target)

    def remap_type_arguments(self, supertype: Type, subtype: TypeApplication) -> Type:
        return supertype

    def declsite_variance(self, constructor: Constructor, index: int) -> Variance:
        return Variance.INVARIANT


class DeclEnvironment(TypingEnvironment):
    """Environment backed by a registry of type declarations.

    Registration must happen before any query that mentions the declared
    constructor. Writers are serialized; readers do not lock.
    """

    def __init__(self, settings: AlgebraSettings | None = None):
        super().__init__(settings)
        self._decls: dict[Constructor, TypeDeclaration] = {}
        self._lock = threading.Lock()

    def declare(self, decl: TypeDeclaration) -> Constructor:
        for supertype in decl.supertypes:
            if not isinstance(supertype, (Constructor, TypeApplication)):
                raise ValueError(f"Supertype of {decl.constructor} must be a constructor or application: {supertype}")
        with self._lock:
            self._decls[decl.constructor] = decl
        logger.debug(
            "env.declare constructor={} params={} supertypes={}",
            decl.constructor,
            len(decl.params),
            len(decl.supertypes),
        )
        return decl.constructor

    def __contains__(self, constructor: object) -> bool:
        return constructor in self._decls

    def get(self, constructor: Constructor) -> TypeDeclaration | None:
        return self._decls.get(constructor)

    def declaration(self, constructor: Constructor) -> TypeDeclaration:
        decl = self._decls.get(constructor)
        if decl is None:
            raise UnresolvedDeclaration(constructor)
        return decl

    def declarations(self) -> list[TypeDeclaration]:
        return list(self._decls.values())

    def ancestors(self, constructor: Constructor) -> frozenset[Constructor]:
        """Constructors reachable through declared supertypes.

        With ``transitive_subtyping`` disabled only direct supertypes count.
        """
        decl = self._decls.get(constructor)
        if decl is None:
            return frozenset()
        direct = {head_constructor(s) for s in decl.supertypes}
        if not self.settings.transitive_subtyping:
            return frozenset(direct)

        seen: set[Constructor] = set()
        queue = deque(direct)
        while queue:
            current = queue.popleft()
            if current in seen:
                continue
            seen.add(current)
            parent = self._decls.get(current)
            if parent is not None:
                queue.extend(head_constructor(s) for s in parent.supertypes)
        return frozenset(seen)

    def constructor_relation(self, this: Constructor, that: Constructor) -> SubtypingRelation:
        relation = self.default_relation(this, that)
        if relation is not SubtypingRelation.UNRELATED:
            return relation
        if that in self.ancestors(this):
            return SubtypingRelation.SUBTYPE
        if this in self.ancestors(that):
            return SubtypingRelation.SUPERTYPE
        return SubtypingRelation.UNRELATED

    def effective_supertype(self, constructor: Constructor, target: Constructor) -> Type:
        if target == ANY:
            return ANY
        decl = self.declaration(constructor)
        supertypes = sorted(decl.supertypes, key=str)
        for supertype in supertypes:
            if head_constructor(supertype) == target:
                return normalize(self, supertype)

        if self.settings.transitive_subtyping:
            for supertype in supertypes:
                parent = head_constructor(supertype)
                if target not in self.ancestors(parent):
                    continue
                inherited = self.effective_supertype(parent, target)
                match supertype:
                    case TypeApplication():
                        return self.remap_type_arguments(inherited, supertype)
                    case _:
                        return inherited

        raise UnresolvedDeclaration(constructor, target)

    def remap_type_arguments(self, supertype: Type, subtype: TypeApplication) -> Type:
        params = self.declaration(subtype.constructor).params
        if len(params) != len(subtype.args):
            raise ArityMismatch(subtype.constructor, len(params), len(subtype.args))
        mapping = {param.constructor: arg for param, arg in zip(params, subtype.args)}
        return substitute(self, supertype, mapping)

    def declsite_variance(self, constructor: Constructor, index: int) -> Variance:
        decl = self._decls.get(constructor)
        if decl is None or index >= len(decl.params):
            return Variance.INVARIANT
        return decl.params[index].variance

    def arity(self, constructor: Constructor) -> int | None:
        decl = self._decls.get(constructor)
        if decl is None:
            return None
        return len(decl.params)
