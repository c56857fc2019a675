"""Type representation for the checkers.

Every variant is a frozen dataclass registered under its wire tag. The
closed union ``Type`` is what the relation engine and the checker dispatch
on; ``TypeNode`` is the runtime base used for ``isinstance`` checks.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar, TypeAlias, dataclass_transform


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class TypeNode:
    """Base for type definitions."""

    tag: ClassVar[str]
    registry: ClassVar[dict[str, type[TypeNode]]] = {}

    def __init_subclass__(cls, tag: str | None = None, **kwargs: Any) -> None:
        """Register type subclass with automatic tag derivation."""
        super().__init_subclass__(**kwargs)
        dataclass(frozen=True)(cls)
        cls.tag = tag if tag is not None else cls.__name__.removesuffix("Type")

        if (existing := TypeNode.registry.get(cls.tag)) and existing is not cls:
            msg = (
                f"Tag '{cls.tag}' already registered to {existing}. "
                "Choose a different tag."
            )
            raise ValueError(msg)

        TypeNode.registry[cls.tag] = cls


@dataclass(frozen=True)
class Param:
    """A named, annotated function parameter."""

    name: str
    type: Type


@dataclass(frozen=True)
class PropertyType:
    """A named field of an object type."""

    name: str
    type: Type


class BooleanType(TypeNode, tag="Boolean"):
    """Boolean type."""


class NumberType(TypeNode, tag="Number"):
    """Number type."""


class FuncType(TypeNode, tag="Func"):
    """Function type: (x: number) => boolean."""

    params: tuple[Param, ...]
    ret_type: Type


class ObjectType(TypeNode, tag="Object"):
    """Structural object type: { foo: number; bar: boolean }.

    Field names are unique; their order is kept for display only.
    """

    props: tuple[PropertyType, ...]

    def get(self, name: str) -> PropertyType | None:
        """Look up a field by name."""
        for prop in self.props:
            if prop.name == name:
                return prop
        return None


class TypeAbsType(TypeNode, tag="TypeAbs"):
    """Universally quantified type: <T, U>(x: T, y: U) => T."""

    type_params: tuple[str, ...]
    body: Type


class TypeVarType(TypeNode, tag="TypeVar"):
    """Reference to a name bound by an enclosing TypeAbs or Rec."""

    name: str


class RecType(TypeNode, tag="Rec"):
    """Equi-recursive type: ``body`` may refer to ``name`` as the whole type."""

    name: str
    body: Type


Type: TypeAlias = (
    BooleanType
    | NumberType
    | FuncType
    | ObjectType
    | TypeAbsType
    | TypeVarType
    | RecType
)


# =============================================================================
# Type name formatting: Type -> str
# =============================================================================


def _show_params(params: tuple[Param, ...]) -> str:
    return ", ".join(f"{p.name}: {type_show(p.type)}" for p in params)


def _show_props(props: tuple[PropertyType, ...]) -> str:
    if not props:
        return "{}"
    return "{ " + "; ".join(f"{p.name}: {type_show(p.type)}" for p in props) + " }"


_TYPE_FORMATTERS: dict[type[TypeNode], Callable[[Any], str]] = {
    BooleanType: lambda _: "boolean",
    NumberType: lambda _: "number",
    FuncType: lambda t: f"({_show_params(t.params)}) => {type_show(t.ret_type)}",
    ObjectType: lambda t: _show_props(t.props),
    TypeAbsType: lambda t: f"<{', '.join(t.type_params)}>{type_show(t.body)}",
    TypeVarType: lambda t: t.name,
    RecType: lambda t: f"rec {t.name}. {type_show(t.body)}",
}


def type_show(ty: Type) -> str:
    """Get a human-readable, TypeScript-like rendering of a type."""
    if formatter := _TYPE_FORMATTERS.get(type(ty)):
        return formatter(ty)
    return ty.tag
