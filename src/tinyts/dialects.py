"""The family of checked languages.

Each dialect is the core language plus one feature. A dialect fixes which
term variants the checker accepts and which relation decides whether an
argument fits its parameter.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from tinyts.nodes import TermNode
from tinyts.relation import Relation
from tinyts.terms import (
    Add,
    Call,
    FalseLit,
    Func,
    If,
    Let,
    NumberLit,
    ObjectGet,
    ObjectNew,
    RecFunc,
    Seq,
    TrueLit,
    TypeAbs,
    TypeApp,
    Var,
)


@dataclass(frozen=True)
class Dialect:
    """Checker configuration: accepted terms and argument relation."""

    name: str
    terms: frozenset[type[TermNode]]
    argument_relation: Relation = Relation.EQUIVALENCE

    def accepts(self, term: TermNode) -> bool:
        """Whether ``term``'s variant belongs to this language."""
        return type(term) in self.terms

    @property
    def subtyping(self) -> bool:
        """Whether arguments may be subtypes of their parameters."""
        return self.argument_relation is Relation.SUBTYPE

    def with_subtyping(self) -> Dialect:
        """The same language, passing arguments by subtyping."""
        return replace(
            self,
            name=f"{self.name}+sub",
            argument_relation=Relation.SUBTYPE,
        )


ARITH = Dialect("arith", frozenset({TrueLit, FalseLit, NumberLit, Add, If}))

BASIC = Dialect("basic", ARITH.terms | {Var, Func, Call, Seq, Let})

OBJ = Dialect("obj", BASIC.terms | {ObjectNew, ObjectGet})

SUB = Dialect("sub", OBJ.terms, Relation.SUBTYPE)

RECFUNC = Dialect("recfunc", OBJ.terms | {RecFunc})

POLY = Dialect("poly", BASIC.terms | {TypeAbs, TypeApp})

# Recursive types need no new terms: they enter through annotations.
REC = Dialect("rec", RECFUNC.terms)

FULL = Dialect("full", REC.terms | POLY.terms)

DIALECTS: dict[str, Dialect] = {
    d.name: d for d in (ARITH, BASIC, OBJ, SUB, RECFUNC, POLY, REC, FULL)
}
