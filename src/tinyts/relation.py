"""Type equivalence and structural subtyping.

Both relations are decided by one structural recursion over a pair of types,
dispatching on the shape of the right-hand side:

- primitives match only themselves;
- functions compare arity, then parameters (contravariantly when
  subtyping) and return types (covariantly); parameter names never matter;
- objects compare fields by name; subtyping allows extra fields on the left
  (width) and subtypes in shared fields (depth);
- generic types must agree on arity, and their bodies are compared with the
  i-th parameter on one side corresponding to the i-th on the other;
- type variables are equal when they refer to corresponding binders.

Recursive types are compared coinductively. Before a ``RecType`` is
unfolded, the unexpanded pair is pushed on the path of visited pairs; meeting
a pair alpha-equal to one already on the path proves it.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TypeAlias, assert_never

from tinyts.errors import UnboundTypeVariable
from tinyts.subst import FreshNames, simplify
from tinyts.types import (
    BooleanType,
    FuncType,
    NumberType,
    ObjectType,
    RecType,
    Type,
    TypeAbsType,
    TypeVarType,
    type_show,
)

logger = logging.getLogger(__name__)


class Relation(enum.Enum):
    """Which relation a comparator decides."""

    EQUIVALENCE = "=="
    SUBTYPE = "<:"


@dataclass(frozen=True)
class Correspondence:
    """Pairs up binders of the left and right type during a comparison.

    Each side maps a type variable name to the binder it refers to. Binders
    introduced together by ``bind`` share a token, so ``T`` on the left and
    ``U`` on the right correspond exactly when both resolve to that token.
    Ambient names (already in scope before the comparison) are their own
    tokens on both sides.

    With ``free_by_name`` set, names bound on neither side compare by
    spelling instead of raising; the visited-pair memo relies on this.
    """

    left: Mapping[str, object] = field(default_factory=dict)
    right: Mapping[str, object] = field(default_factory=dict)
    free_by_name: bool = False

    @classmethod
    def identity(cls, names: Iterable[str] = ()) -> Correspondence:
        """Correspondence where every ambient name stands for itself."""
        tokens = {name: name for name in names}
        return cls(tokens, dict(tokens))

    def bind(self, lefts: Sequence[str], rights: Sequence[str]) -> Correspondence:
        """Extend with ``lefts[i]`` corresponding to ``rights[i]``."""
        tokens = [object() for _ in lefts]
        return Correspondence(
            {**self.left, **dict(zip(lefts, tokens, strict=True))},
            {**self.right, **dict(zip(rights, tokens, strict=True))},
            self.free_by_name,
        )

    def flipped(self) -> Correspondence:
        """The same correspondence seen from the other side."""
        return Correspondence(self.right, self.left, self.free_by_name)

    def corresponds(self, left: str, right: str) -> bool:
        """Whether ``left`` and ``right`` refer to corresponding binders.

        Raises:
            UnboundTypeVariable: If either name is bound on neither side
                and ``free_by_name`` is off.

        """
        if self.free_by_name:
            return self.left.get(left, left) == self.right.get(right, right)
        if left not in self.left:
            raise UnboundTypeVariable(left)
        if right not in self.right:
            raise UnboundTypeVariable(right)
        return self.left[left] == self.right[right]


def alpha_equal(ty1: Type, ty2: Type, corr: Correspondence | None = None) -> bool:
    """Structural equality up to renaming of bound names.

    Recursive types are not unfolded: two ``RecType`` values are equal when
    their bodies are, with the two bound names corresponding.
    """
    if corr is None:
        corr = Correspondence(free_by_name=True)
    match ty2:
        case BooleanType() | NumberType():
            return type(ty1) is type(ty2)
        case FuncType(params=params2, ret_type=ret2):
            if not isinstance(ty1, FuncType) or len(ty1.params) != len(params2):
                return False
            return all(
                alpha_equal(p1.type, p2.type, corr)
                for p1, p2 in zip(ty1.params, params2, strict=True)
            ) and alpha_equal(ty1.ret_type, ret2, corr)
        case ObjectType(props=props2):
            if not isinstance(ty1, ObjectType) or len(ty1.props) != len(props2):
                return False
            for prop2 in props2:
                prop1 = ty1.get(prop2.name)
                if prop1 is None or not alpha_equal(prop1.type, prop2.type, corr):
                    return False
            return True
        case TypeAbsType(type_params=params2, body=body2):
            if not isinstance(ty1, TypeAbsType):
                return False
            if len(ty1.type_params) != len(params2):
                return False
            return alpha_equal(ty1.body, body2, corr.bind(ty1.type_params, params2))
        case RecType(name=name2, body=body2):
            if not isinstance(ty1, RecType):
                return False
            return alpha_equal(ty1.body, body2, corr.bind([ty1.name], [name2]))
        case TypeVarType(name=name2):
            if not isinstance(ty1, TypeVarType):
                return False
            return corr.corresponds(ty1.name, name2)
        case _:
            assert_never(ty2)


_Seen: TypeAlias = tuple[tuple[Type, Type], ...]


class TypeComparator:
    """Decides equivalence or subtyping between two types.

    The comparator owns the fresh-name counter used when unfolding recursive
    types, so a single instance belongs to a single checking session.
    """

    def __init__(
        self,
        relation: Relation = Relation.EQUIVALENCE,
        fresh: FreshNames | None = None,
    ) -> None:
        self.relation = relation
        self._fresh = fresh or FreshNames()

    def holds(self, ty1: Type, ty2: Type, bound: Iterable[str] = ()) -> bool:
        """Check ``ty1 == ty2`` or ``ty1 <: ty2``.

        Args:
            ty1: Left-hand type (the subtype when subtyping).
            ty2: Right-hand type (the supertype when subtyping).
            bound: Type variable names in scope around both types.

        Returns:
            True if the relation holds.

        Raises:
            UnboundTypeVariable: If either type references a type variable
                that is neither bound inside it nor listed in ``bound``.

        """
        result = self._relate(ty1, ty2, Correspondence.identity(bound), ())
        logger.debug(
            "%s %s %s -> %s",
            type_show(ty1),
            self.relation.value,
            type_show(ty2),
            result,
        )
        return result

    def _relate(  # noqa: PLR0911
        self,
        ty1: Type,
        ty2: Type,
        corr: Correspondence,
        seen: _Seen,
    ) -> bool:
        for seen1, seen2 in seen:
            if alpha_equal(seen1, ty1) and alpha_equal(seen2, ty2):
                return True

        if isinstance(ty1, RecType):
            pushed = (*seen, (ty1, ty2))
            return self._relate(simplify(ty1, self._fresh), ty2, corr, pushed)
        if isinstance(ty2, RecType):
            pushed = (*seen, (ty1, ty2))
            return self._relate(ty1, simplify(ty2, self._fresh), corr, pushed)

        match ty2:
            case BooleanType() | NumberType():
                return type(ty1) is type(ty2)
            case FuncType():
                if not isinstance(ty1, FuncType):
                    return False
                return self._relate_funcs(ty1, ty2, corr, seen)
            case ObjectType():
                if not isinstance(ty1, ObjectType):
                    return False
                return self._relate_objects(ty1, ty2, corr, seen)
            case TypeAbsType(type_params=params2, body=body2):
                if not isinstance(ty1, TypeAbsType):
                    return False
                if len(ty1.type_params) != len(params2):
                    return False
                inner = corr.bind(ty1.type_params, params2)
                return self._relate(ty1.body, body2, inner, seen)
            case TypeVarType(name=name2):
                if not isinstance(ty1, TypeVarType):
                    return False
                return corr.corresponds(ty1.name, name2)
            case _:
                assert_never(ty2)

    def _relate_funcs(
        self,
        ty1: FuncType,
        ty2: FuncType,
        corr: Correspondence,
        seen: _Seen,
    ) -> bool:
        if len(ty1.params) != len(ty2.params):
            return False
        for p1, p2 in zip(ty1.params, ty2.params, strict=True):
            if self.relation is Relation.SUBTYPE:
                # Parameters are contravariant.
                ok = self._relate(p2.type, p1.type, corr.flipped(), seen)
            else:
                ok = self._relate(p1.type, p2.type, corr, seen)
            if not ok:
                return False
        return self._relate(ty1.ret_type, ty2.ret_type, corr, seen)

    def _relate_objects(
        self,
        ty1: ObjectType,
        ty2: ObjectType,
        corr: Correspondence,
        seen: _Seen,
    ) -> bool:
        # Equal counts plus every right field on the left means equal field sets.
        if self.relation is Relation.EQUIVALENCE and len(ty1.props) != len(ty2.props):
            return False
        for prop2 in ty2.props:
            prop1 = ty1.get(prop2.name)
            if prop1 is None or not self._relate(prop1.type, prop2.type, corr, seen):
                return False
        return True


def type_eq(
    ty1: Type,
    ty2: Type,
    bound: Iterable[str] = (),
    fresh: FreshNames | None = None,
) -> bool:
    """Check that two types are equivalent."""
    return TypeComparator(Relation.EQUIVALENCE, fresh).holds(ty1, ty2, bound)


def subtype(
    ty1: Type,
    ty2: Type,
    bound: Iterable[str] = (),
    fresh: FreshNames | None = None,
) -> bool:
    """Check that ``ty1`` is a subtype of ``ty2``."""
    return TypeComparator(Relation.SUBTYPE, fresh).holds(ty1, ty2, bound)
