"""Capture-avoiding substitution over types.

``substitute`` replaces the free occurrences of one type variable. Under a
binder (``TypeAbsType`` or ``RecType``) that binds the same name it stops,
since the name is shadowed there. Under any other binder it first renames the
bound names to fresh ones, so a replacement mentioning those names cannot be
captured:

    substitute(<U>T, "T", U)  ==  <U1>U     (never <U>U)

Fresh names come from a ``FreshNames`` counter owned by the caller's
session, so concurrent sessions never share state.
"""

from __future__ import annotations

import itertools
import string
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, assert_never

from tinyts.errors import ArityMismatch, IllFormedType, UnboundTypeVariable
from tinyts.types import (
    BooleanType,
    FuncType,
    NumberType,
    ObjectType,
    Param,
    PropertyType,
    RecType,
    Type,
    TypeAbsType,
    TypeVarType,
)

if TYPE_CHECKING:
    from tinyts.nodes import TermNode


class FreshNames:
    """Monotonic generator of type variable names for one checking session."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def fresh(self, base: str, avoid: Iterable[str] = ()) -> str:
        """Return ``<base><n>`` for the next ``n`` not colliding with ``avoid``.

        Trailing digits of ``base`` are dropped first, so renaming ``U1``
        yields ``U2`` rather than ``U12``.
        """
        stem = base.rstrip(string.digits) or base
        taken = set(avoid)
        while True:
            candidate = f"{stem}{next(self._counter)}"
            if candidate not in taken:
                return candidate


def free_type_vars(ty: Type) -> frozenset[str]:
    """Names referenced by ``ty`` that no binder inside ``ty`` binds."""
    match ty:
        case BooleanType() | NumberType():
            return frozenset()
        case FuncType(params=params, ret_type=ret_type):
            result = free_type_vars(ret_type)
            for param in params:
                result |= free_type_vars(param.type)
            return result
        case ObjectType(props=props):
            return frozenset().union(*(free_type_vars(p.type) for p in props))
        case TypeAbsType(type_params=type_params, body=body):
            if name in type_params:
                return ty
            new_params, new_body = _rename_binders(
                type_params, body, type_var_names(rep), fresh,
            )
            return TypeAbsType(new_params, _substitute(new_body, name, rep, fresh))
        case RecType(name=bound, body=body):
            if bound == name:
                return ty
            (new_name,), new_body = _rename_binders(
                (bound,), body, type_var_names(rep), fresh,
            )
            return RecType(new_name, _substitute(new_body, name, rep, fresh))
        case TypeVarType(name=name):
            return frozenset({name})
        case _:
            assert_never(ty)


def type_var_names(ty: Type) -> frozenset[str]:
    """Every type variable name in ``ty``, bound or free."""
    match ty:
        case BooleanType() | NumberType():
            return frozenset()
        case FuncType(params=params, ret_type=ret_type):
            result = type_var_names(ret_type)
            for param in params:
                result |= type_var_names(param.type)
            return result
        case ObjectType(props=props):
            return frozenset().union(*(type_var_names(p.type) for p in props))
        case TypeAbsType(type_params=type_params, body=body):
            return type_var_names(body) | frozenset(type_params)
        case RecType(name=name, body=body):
            return type_var_names(body) | {name}
        case TypeVarType(name=name):
            return frozenset({name})
        case _:
            assert_never(ty)


def substitute(
    ty: Type,
    name: str,
    replacement: Type,
    fresh: FreshNames | None = None,
) -> Type:
    """Replace free occurrences of ``name`` in ``ty`` with ``replacement``."""
    return _substitute(ty, name, replacement, fresh or FreshNames())


def _substitute(ty: Type, name: str, rep: Type, fresh: FreshNames) -> Type:
    match ty:
        case BooleanType() | NumberType():
            return ty
        case FuncType(params=params, ret_type=ret_type):
            return FuncType(
                tuple(
                    Param(p.name, _substitute(p.type, name, rep, fresh))
                    for p in params
                ),
                _substitute(ret_type, name, rep, fresh),
            )
        case ObjectType(props=props):
            return ObjectType(
                tuple(
                    PropertyType(p.name, _substitute(p.type, name, rep, fresh))
                    for p in props
                ),
            )
        case TypeAbsType(type_params=type_params, body=body):
            if name in type_params:
                return ty
            new_params, new_body = _rename_binders(
                type_params, body, type_var_names(rep), fresh,
            )
            return TypeAbsType(new_params, _substitute(new_body, name, rep, fresh))
        case RecType(name=bound, body=body):
            if bound == name:
                return ty
            (new_name,), new_body = _rename_binders(
                (bound,), body, type_var_names(rep), fresh,
            )
            return RecType(new_name, _substitute(new_body, name, rep, fresh))
        case TypeVarType(name=var_name):
            return rep if var_name == name else ty
        case _:
            assert_never(ty)


def _rename_binders(
    names: Sequence[str],
    body: Type,
    avoid: Iterable[str],
    fresh: FreshNames,
) -> tuple[tuple[str, ...], Type]:
    """Alpha-rename the binder ``names`` of ``body`` to fresh names."""
    taken = set(avoid) | type_var_names(body) | set(names)
    renamed: list[str] = []
    for old in names:
        new = fresh.fresh(old, taken)
        taken.add(new)
        body = _substitute(body, old, TypeVarType(new), fresh)
        renamed.append(new)
    return tuple(renamed), body


def instantiate(
    type_abs: TypeAbsType,
    type_args: Sequence[Type],
    fresh: FreshNames | None = None,
    node: TermNode | None = None,
) -> Type:
    """Apply a generic type to ``type_args``, returning the instantiated body.

    Raises:
        ArityMismatch: If the number of type arguments differs from the
            number of type parameters.

    """
    if len(type_args) != len(type_abs.type_params):
        raise ArityMismatch(
            node if node is not None else type_abs,
            expected=len(type_abs.type_params),
            actual=len(type_args),
            what="type arguments",
        )
    fresh = fresh or FreshNames()
    params: Sequence[str] = type_abs.type_params
    body = type_abs.body

    # Substitution runs one parameter at a time; an argument mentioning a
    # later parameter's name must not be rewritten by that later step.
    arg_names = frozenset().union(*(free_type_vars(a) for a in type_args))
    if arg_names & set(params):
        params, body = _rename_binders(params, body, arg_names, fresh)

    for param, arg in zip(params, type_args, strict=True):
        body = _substitute(body, param, arg, fresh)
    return body


def unfold(rec: RecType, fresh: FreshNames | None = None) -> Type:
    """One fixed-point step: ``rec X. body`` becomes ``body[X := rec X. body]``."""
    return substitute(rec.body, rec.name, rec, fresh)


def simplify(ty: Type, fresh: FreshNames | None = None) -> Type:
    """Unfold ``ty`` until its head is no longer a recursive type."""
    fresh = fresh or FreshNames()
    _ensure_contractive(ty)
    while isinstance(ty, RecType):
        ty = unfold(ty, fresh)
    return ty


def _ensure_contractive(ty: Type) -> None:
    names: list[str] = []
    head = ty
    while isinstance(head, RecType):
        names.append(head.name)
        head = head.body
    if isinstance(head, TypeVarType) and head.name in names:
        msg = f"recursive type {head.name} is not contractive"
        raise IllFormedType(msg)


def ensure_well_formed(
    ty: Type,
    bound: Iterable[str] = (),
    node: TermNode | None = None,
) -> None:
    """Check that every type variable in ``ty`` is bound.

    Names in ``bound`` are the type variables already in lexical scope.

    Raises:
        UnboundTypeVariable: If ``ty`` references a name nothing binds.
        IllFormedType: If a recursive type is its own bare body.

    """
    unbound = free_type_vars(ty) - frozenset(bound)
    if unbound:
        raise UnboundTypeVariable(min(unbound), node)
    _check_recursive_types(ty)


def _check_recursive_types(ty: Type) -> None:
    match ty:
        case BooleanType() | NumberType() | TypeVarType():
            return
        case FuncType(params=params, ret_type=ret_type):
            for param in params:
                _check_recursive_types(param.type)
            _check_recursive_types(ret_type)
        case ObjectType(props=props):
            for prop in props:
                _check_recursive_types(prop.type)
        case TypeAbsType(body=body):
            _check_recursive_types(body)
        case RecType(body=body):
            _ensure_contractive(ty)
            _check_recursive_types(body)
        case _:
            assert_never(ty)
