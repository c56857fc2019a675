"""Persistent term and type variable scopes.

An environment is a scope chain: the bindings introduced by one scope plus
a reference to the enclosing environment. Extending never touches the
parent, so closures keep seeing the scope they were checked in.

Type variables get a flat scope of their own, since a type parameter may
have to be renamed to keep it apart from an outer one of the same name.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tinyts.subst import FreshNames
    from tinyts.types import Type


@dataclass(frozen=True)
class TypeEnv:
    """Immutable mapping from variable names to types."""

    bindings: Mapping[str, Type] = field(default_factory=lambda: MappingProxyType({}))
    parent: TypeEnv | None = None

    @classmethod
    def of(cls, bindings: Mapping[str, Type] | None = None) -> TypeEnv:
        """Create a root environment from a plain mapping."""
        return cls(MappingProxyType(dict(bindings or {})))

    def lookup(self, name: str) -> Type | None:
        """Find the innermost binding of ``name``; None when unbound."""
        env: TypeEnv | None = self
        while env is not None:
            if name in env.bindings:
                return env.bindings[name]
            env = env.parent
        return None

    def extend(self, name: str, ty: Type) -> TypeEnv:
        """Return a child environment binding ``name`` to ``ty``."""
        return TypeEnv(MappingProxyType({name: ty}), self)

    def extend_many(self, bindings: Iterable[tuple[str, Type]]) -> TypeEnv:
        """Return a child environment with all ``bindings`` in one scope.

        Later pairs win over earlier ones with the same name.
        """
        return TypeEnv(MappingProxyType(dict(bindings)), self)

    def names(self) -> Iterator[str]:
        """Yield every visible name once, innermost scope first."""
        seen: set[str] = set()
        env: TypeEnv | None = self
        while env is not None:
            for name in env.bindings:
                if name not in seen:
                    seen.add(name)
                    yield name
            env = env.parent

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None


@dataclass(frozen=True)
class TypeScope:
    """Type variables in scope while checking a term.

    ``renames`` maps each visible type parameter, as written, to the name it
    carries in synthesized types. ``names`` holds every name synthesized
    types may mention, including those of shadowed parameters.
    """

    renames: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    names: frozenset[str] = frozenset()

    @classmethod
    def of(cls, names: Iterable[str] = ()) -> TypeScope:
        """Create a scope of ambient names that keep their spelling."""
        ambient = frozenset(names)
        return cls(MappingProxyType({name: name for name in ambient}), ambient)

    def bind(
        self,
        written: Sequence[str],
        fresh: FreshNames,
    ) -> tuple[TypeScope, tuple[str, ...]]:
        """Enter the binder ``written``; return the inner scope and new names.

        A parameter keeps its spelling unless some type in scope already
        uses that name, in which case it gets a fresh one.
        """
        taken = set(self.names) | set(self.renames)
        renames = dict(self.renames)
        result: list[str] = []
        for name in written:
            new = fresh.fresh(name, taken) if name in self.names else name
            taken.add(new)
            renames[name] = new
            result.append(new)
        inner = TypeScope(MappingProxyType(renames), self.names | set(result))
        return inner, tuple(result)
