"""Diagnostics raised by the checker and the type relation engine.

Every user-facing kind derives from ``TypeCheckError`` and carries the
offending node so a caller can point at its source location. Checking is
fail-fast: the first error raised unwinds straight to the caller.

``UnboundTypeVariable`` is deliberately outside that hierarchy. It signals a
broken invariant (a type variable nobody bound), not a mistake in the
checked program.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, NoReturn

from tinyts.nodes import TermNode
from tinyts.types import type_show

if TYPE_CHECKING:
    from tinyts.nodes import Location
    from tinyts.types import Type, TypeNode

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class TypeCheckError(Exception):
    """Base class for type checking errors."""

    node: TermNode | TypeNode

    @property
    def message(self) -> str:
        """Short description of the failure."""
        return "type error"

    @property
    def location(self) -> Location | None:
        """Source span of the offending term, when the parser provided one."""
        if isinstance(self.node, TermNode):
            return self.node.loc
        return None

    def format(self) -> str:
        """Format the error for display."""
        if self.location is None:
            return self.message
        return f"{self.location.describe()}: {self.message}"

    def __str__(self) -> str:
        return self.format()


@dataclass(eq=False)
class BooleanExpected(TypeCheckError):
    """A condition did not synthesize ``boolean``."""

    actual: Type

    @property
    def message(self) -> str:
        return f"boolean expected, got {type_show(self.actual)}"


@dataclass(eq=False)
class NumberExpected(TypeCheckError):
    """An operand of ``+`` did not synthesize ``number``."""

    actual: Type
    side: str

    @property
    def message(self) -> str:
        return f"number expected on the {self.side}, got {type_show(self.actual)}"


@dataclass(eq=False)
class BranchTypeMismatch(TypeCheckError):
    """The branches of a conditional have different types."""

    then_type: Type
    else_type: Type

    @property
    def message(self) -> str:
        return (
            "then and else have different types: "
            f"{type_show(self.then_type)} vs {type_show(self.else_type)}"
        )


@dataclass(eq=False)
class UnknownVariable(TypeCheckError):
    """A variable is not bound in the environment."""

    name: str

    @property
    def message(self) -> str:
        return f"unknown variable: {self.name}"


@dataclass(eq=False)
class WrongReturnType(TypeCheckError):
    """A body does not have the declared return type."""

    expected: Type
    actual: Type

    @property
    def message(self) -> str:
        return (
            f"wrong return type: expected {type_show(self.expected)}, "
            f"got {type_show(self.actual)}"
        )


@dataclass(eq=False)
class FunctionExpected(TypeCheckError):
    """A callee is not a function."""

    actual: Type

    @property
    def message(self) -> str:
        return f"function expected, got {type_show(self.actual)}"


@dataclass(eq=False)
class ArityMismatch(TypeCheckError):
    """Wrong number of arguments or type arguments."""

    expected: int
    actual: int
    what: str = "arguments"

    @property
    def message(self) -> str:
        return (
            f"wrong number of {self.what}: expected {self.expected}, "
            f"got {self.actual}"
        )


@dataclass(eq=False)
class ParameterTypeMismatch(TypeCheckError):
    """An argument is not compatible with its parameter."""

    index: int
    expected: Type
    actual: Type

    @property
    def message(self) -> str:
        return (
            f"parameter type mismatch: [{self.index}]: "
            f"expected {type_show(self.expected)}, got {type_show(self.actual)}"
        )


@dataclass(eq=False)
class ObjectExpected(TypeCheckError):
    """A property access on something that is not an object."""

    actual: Type

    @property
    def message(self) -> str:
        return f"object expected, got {type_show(self.actual)}"


@dataclass(eq=False)
class UnknownProperty(TypeCheckError):
    """A property access names a field the object type lacks."""

    name: str
    object_type: Type

    @property
    def message(self) -> str:
        return f"unknown property: {self.name} on {type_show(self.object_type)}"


@dataclass(eq=False)
class TypeAbstractionExpected(TypeCheckError):
    """A type application on something that is not generic."""

    actual: Type

    @property
    def message(self) -> str:
        return f"type abstraction expected, got {type_show(self.actual)}"


@dataclass(eq=False)
class UnsupportedTerm(TypeCheckError):
    """A term outside the language accepted by the active dialect."""

    dialect: str

    @property
    def message(self) -> str:
        return f"'{self.node.tag}' is not supported by the {self.dialect} checker"


class InternalError(Exception):
    """An engine invariant was violated."""


class UnboundTypeVariable(InternalError):
    """A type variable was met with no enclosing binder for it."""

    def __init__(self, name: str, node: TermNode | TypeNode | None = None) -> None:
        super().__init__(f"unknown type variable: {name}")
        self.name = name
        self.node = node


class IllFormedType(InternalError):
    """A recursive type whose body is just its own name."""


def fail(error: TypeCheckError) -> NoReturn:
    """Abort the current check with ``error``."""
    logger.debug("type check failed: %s", error.format())
    raise error
