"""Type synthesis for terms.

The checker walks a term once, synthesizing a type for every sub-term and
asking the relation engine wherever two types must agree. It stops at the
first inconsistency by raising a ``TypeCheckError``.

Example usage:
    from tinyts import typecheck
    from tinyts.terms import Add, NumberLit

    typecheck(Add(NumberLit(1), NumberLit(2)))  # NumberType()
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import assert_never

from tinyts.dialects import FULL, Dialect
from tinyts.env import TypeEnv, TypeScope
from tinyts.errors import (
    ArityMismatch,
    BooleanExpected,
    BranchTypeMismatch,
    FunctionExpected,
    NumberExpected,
    ObjectExpected,
    ParameterTypeMismatch,
    TypeAbstractionExpected,
    UnknownProperty,
    UnknownVariable,
    UnsupportedTerm,
    WrongReturnType,
    fail,
)
from tinyts.relation import Relation, TypeComparator
from tinyts.subst import FreshNames, ensure_well_formed, instantiate, simplify
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
    Term,
    TrueLit,
    TypeAbs,
    TypeApp,
    Var,
)
from tinyts.types import (
    BooleanType,
    FuncType,
    NumberType,
    ObjectType,
    Param,
    PropertyType,
    Type,
    TypeAbsType,
    TypeVarType,
    type_show,
)

logger = logging.getLogger(__name__)


class Checker:
    """Synthesizes types for the terms of one dialect.

    A checker owns the fresh-name counter shared by its substitutions and
    comparisons; use one instance per checking session.
    """

    def __init__(
        self,
        dialect: Dialect = FULL,
        fresh: FreshNames | None = None,
    ) -> None:
        self.dialect = dialect
        self._fresh = fresh or FreshNames()
        self._equivalence = TypeComparator(Relation.EQUIVALENCE, self._fresh)
        self._arguments = TypeComparator(dialect.argument_relation, self._fresh)

    def check(
        self,
        term: Term,
        env: TypeEnv | Mapping[str, Type] | None = None,
        bound: Iterable[str] = (),
    ) -> Type:
        """Synthesize the type of ``term``.

        Args:
            term: The term to check.
            env: Types of the free variables of ``term``.
            bound: Type variable names already in scope.

        Returns:
            The synthesized type.

        Raises:
            TypeCheckError: At the first inconsistency found.

        """
        if not isinstance(env, TypeEnv):
            env = TypeEnv.of(env)
        result = self._check(term, env, TypeScope.of(bound))
        logger.debug("%s: %s", term.tag, type_show(result))
        return result

    def _check(  # noqa: C901, PLR0911, PLR0912
        self,
        t: Term,
        env: TypeEnv,
        scope: TypeScope,
    ) -> Type:
        if not self.dialect.accepts(t):
            fail(UnsupportedTerm(t, self.dialect.name))

        match t:
            case TrueLit() | FalseLit():
                return BooleanType()
            case NumberLit():
                return NumberType()
            case Add(left=left, right=right):
                for side, operand in (("left", left), ("right", right)):
                    ty = self._check(operand, env, scope)
                    if not isinstance(self._shape(ty), NumberType):
                        fail(NumberExpected(operand, ty, side))
                return NumberType()
            case If(cond=cond, thn=thn, els=els):
                cond_ty = self._check(cond, env, scope)
                if not isinstance(self._shape(cond_ty), BooleanType):
                    fail(BooleanExpected(cond, cond_ty))
                thn_ty = self._check(thn, env, scope)
                els_ty = self._check(els, env, scope)
                if not self._equivalence.holds(thn_ty, els_ty, scope.names):
                    fail(BranchTypeMismatch(t, thn_ty, els_ty))
                return thn_ty
            case Var(name=name):
                ty = env.lookup(name)
                if ty is None:
                    fail(UnknownVariable(t, name))
                return ty
            case Func(params=params, body=body, ret_type=ret_type):
                return self._check_func(t, params, body, ret_type, env, scope)
            case Call(func=func, args=args):
                return self._check_call(t, func, args, env, scope)
            case Seq(body=body, rest=rest):
                self._check(body, env, scope)
                return self._check(rest, env, scope)
            case Let(name=name, init=init, rest=rest):
                init_ty = self._check(init, env, scope)
                return self._check(rest, env.extend(name, init_ty), scope)
            case ObjectNew(props=props):
                return ObjectType(
                    tuple(
                        PropertyType(p.name, self._check(p.term, env, scope))
                        for p in props
                    ),
                )
            case ObjectGet(obj=obj, prop_name=prop_name):
                obj_ty = self._check(obj, env, scope)
                shape = self._shape(obj_ty)
                if not isinstance(shape, ObjectType):
                    fail(ObjectExpected(obj, obj_ty))
                prop = shape.get(prop_name)
                if prop is None:
                    fail(UnknownProperty(t, prop_name, obj_ty))
                return prop.type
            case RecFunc():
                return self._check_rec_func(t, env, scope)
            case TypeAbs(type_params=type_params, body=body):
                inner, names = scope.bind(type_params, self._fresh)
                return TypeAbsType(names, self._check(body, env, inner))
            case TypeApp(type_abs=type_abs, type_args=type_args):
                abs_ty = self._check(type_abs, env, scope)
                shape = self._shape(abs_ty)
                if not isinstance(shape, TypeAbsType):
                    fail(TypeAbstractionExpected(type_abs, abs_ty))
                if len(type_args) != len(shape.type_params):
                    fail(
                        ArityMismatch(
                            t,
                            expected=len(shape.type_params),
                            actual=len(type_args),
                            what="type arguments",
                        ),
                    )
                args = [self._annotation(arg, scope, t) for arg in type_args]
                return instantiate(shape, args, self._fresh, t)
            case _:
                assert_never(t)

    def _check_func(
        self,
        t: Func,
        params: tuple[Param, ...],
        body: Term,
        ret_type: Type | None,
        env: TypeEnv,
        scope: TypeScope,
    ) -> Type:
        params = self._annotate_params(params, scope, t)
        inner = env.extend_many((p.name, p.type) for p in params)
        body_ty = self._check(body, inner, scope)
        if ret_type is None:
            return FuncType(params, body_ty)
        ret_type = self._annotation(ret_type, scope, t)
        if not self._equivalence.holds(ret_type, body_ty, scope.names):
            fail(WrongReturnType(t, ret_type, body_ty))
        return FuncType(params, ret_type)

    def _check_call(
        self,
        t: Call,
        func: Term,
        args: tuple[Term, ...],
        env: TypeEnv,
        scope: TypeScope,
    ) -> Type:
        func_ty = self._check(func, env, scope)
        shape = self._shape(func_ty)
        if not isinstance(shape, FuncType):
            fail(FunctionExpected(func, func_ty))
        if len(args) != len(shape.params):
            fail(ArityMismatch(t, expected=len(shape.params), actual=len(args)))
        for i, (arg, param) in enumerate(zip(args, shape.params, strict=True)):
            arg_ty = self._check(arg, env, scope)
            if not self._arguments.holds(arg_ty, param.type, scope.names):
                fail(ParameterTypeMismatch(arg, i, param.type, arg_ty))
        return shape.ret_type

    def _check_rec_func(self, t: RecFunc, env: TypeEnv, scope: TypeScope) -> Type:
        params = self._annotate_params(t.params, scope, t)
        ret_type = self._annotation(t.ret_type, scope, t)

        func_ty = FuncType(params, ret_type)
        inner = env.extend(t.func_name, func_ty).extend_many(
            (p.name, p.type) for p in params
        )
        body_ty = self._check(t.body, inner, scope)
        if not self._equivalence.holds(ret_type, body_ty, scope.names):
            fail(WrongReturnType(t, ret_type, body_ty))
        # ``rest`` sees the parameters too, with the function name bound again.
        return self._check(t.rest, inner.extend(t.func_name, func_ty), scope)

    def _annotate_params(
        self,
        params: tuple[Param, ...],
        scope: TypeScope,
        node: Term,
    ) -> tuple[Param, ...]:
        return tuple(
            Param(p.name, self._annotation(p.type, scope, node)) for p in params
        )

    def _annotation(self, ty: Type, scope: TypeScope, node: Term) -> Type:
        """Check a written type and rename its type variables into scope."""
        ensure_well_formed(ty, scope.renames, node)
        renamed = {name: new for name, new in scope.renames.items() if name != new}
        if not renamed:
            return ty
        # Instantiation renames all the variables at once.
        return instantiate(
            TypeAbsType(tuple(renamed), ty),
            [TypeVarType(new) for new in renamed.values()],
            self._fresh,
            node,
        )

    def _shape(self, ty: Type) -> Type:
        """Unfold recursive types so the head constructor is visible."""
        return simplify(ty, self._fresh)


def typecheck(
    term: Term,
    env: TypeEnv | Mapping[str, Type] | None = None,
    bound: Iterable[str] = (),
    *,
    dialect: Dialect = FULL,
) -> Type:
    """Type check a term with a fresh checker.

    Example:
        typecheck(Func((Param("x", BooleanType()),), Var("x")))
        # FuncType((Param("x", BooleanType()),), BooleanType())

    """
    return Checker(dialect).check(term, env, bound)
