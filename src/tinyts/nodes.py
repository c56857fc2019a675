"""Core term node infrastructure with automatic registration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, dataclass_transform


@dataclass(frozen=True)
class Position:
    """A line/column pair in source text (both 1-based)."""

    line: int
    column: int


@dataclass(frozen=True)
class Location:
    """Source span attached to a term by the parser."""

    start: Position
    end: Position

    def describe(self) -> str:
        """Human-readable description of the span."""
        return (
            f"{self.start.line}:{self.start.column}-"
            f"{self.end.line}:{self.end.column}"
        )


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class TermNode:
    """Base for term nodes.

    Subclasses become frozen dataclasses and register themselves under their
    wire tag. The optional ``loc`` is opaque to the checker and excluded from
    equality.
    """

    tag: ClassVar[str]
    registry: ClassVar[dict[str, type[TermNode]]] = {}

    loc: Location | None = field(
        default=None,
        kw_only=True,
        compare=False,
        repr=False,
    )

    def __init_subclass__(cls, tag: str | None = None, **kwargs: Any) -> None:
        """Register term subclass with automatic tag derivation."""
        super().__init_subclass__(**kwargs)
        dataclass(frozen=True)(cls)
        cls.tag = tag if tag is not None else cls.__name__.lower()

        if (existing := TermNode.registry.get(cls.tag)) and existing is not cls:
            msg = (
                f"Tag '{cls.tag}' already registered to {existing}. "
                "Choose a different tag."
            )
            raise ValueError(msg)

        TermNode.registry[cls.tag] = cls
