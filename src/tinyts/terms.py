"""Term variants of the checked expression languages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from tinyts.nodes import TermNode
from tinyts.types import Param, Type


@dataclass(frozen=True)
class PropertyTerm:
    """A named field initializer of an object literal."""

    name: str
    term: Term


class TrueLit(TermNode, tag="true"):
    """The literal ``true``."""


class FalseLit(TermNode, tag="false"):
    """The literal ``false``."""


class NumberLit(TermNode, tag="number"):
    """A numeric literal."""

    n: float


class Add(TermNode, tag="add"):
    """``left + right``."""

    left: Term
    right: Term


class If(TermNode, tag="if"):
    """``cond ? thn : els``."""

    cond: Term
    thn: Term
    els: Term


class Var(TermNode, tag="var"):
    """A variable reference."""

    name: str


class Func(TermNode, tag="func"):
    """Function literal ``(x: T, ...) => body`` with an optional return type."""

    params: tuple[Param, ...]
    body: Term
    ret_type: Type | None = None


class Call(TermNode, tag="call"):
    """``func(args...)``."""

    func: Term
    args: tuple[Term, ...]


class Seq(TermNode, tag="seq"):
    """``body; rest``: evaluates ``body`` for effect, yields ``rest``."""

    body: Term
    rest: Term


class Let(TermNode, tag="const"):
    """``const name = init; rest``. The binding is not visible in ``init``."""

    name: str
    init: Term
    rest: Term


class ObjectNew(TermNode, tag="objectNew"):
    """Object literal ``{ a: t1, b: t2 }``."""

    props: tuple[PropertyTerm, ...]


class ObjectGet(TermNode, tag="objectGet"):
    """Property access ``obj.prop_name``."""

    obj: Term
    prop_name: str


class RecFunc(TermNode, tag="recFunc"):
    """Named function visible to its own body and to ``rest``.

    The return type is mandatory: the function's type must exist before its
    body is checked.
    """

    func_name: str
    params: tuple[Param, ...]
    ret_type: Type
    body: Term
    rest: Term


class TypeAbs(TermNode, tag="typeAbs"):
    """Type abstraction ``<T, U>body``."""

    type_params: tuple[str, ...]
    body: Term


class TypeApp(TermNode, tag="typeApp"):
    """Type application ``type_abs<A, B>``."""

    type_abs: Term
    type_args: tuple[Type, ...]


Term: TypeAlias = (
    TrueLit
    | FalseLit
    | NumberLit
    | Add
    | If
    | Var
    | Func
    | Call
    | Seq
    | Let
    | ObjectNew
    | ObjectGet
    | RecFunc
    | TypeAbs
    | TypeApp
)
