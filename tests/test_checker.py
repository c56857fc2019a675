"""Tests for the checker, end to end over every dialect."""

import pytest

from tinyts.checker import Checker, typecheck
from tinyts.dialects import BASIC, OBJ, POLY, REC, RECFUNC, SUB, Dialect
from tinyts.env import TypeEnv
from tinyts.errors import (
    ArityMismatch,
    BooleanExpected,
    BranchTypeMismatch,
    FunctionExpected,
    NumberExpected,
    ObjectExpected,
    ParameterTypeMismatch,
    TypeAbstractionExpected,
    UnboundTypeVariable,
    UnknownProperty,
    UnknownVariable,
    UnsupportedTerm,
    WrongReturnType,
)
from tinyts.nodes import Location, Position
from tinyts.relation import type_eq
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
    PropertyTerm,
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
    RecType,
    Type,
    TypeAbsType,
    TypeVarType,
)

NUM = NumberType()
BOOL = BooleanType()
T = TypeVarType("T")
U = TypeVarType("U")


def params(**types: Type) -> tuple[Param, ...]:
    """Build a parameter list from keyword arguments."""
    return tuple(Param(name, ty) for name, ty in types.items())


def obj_type(**fields: Type) -> ObjectType:
    """Build an object type from keyword fields."""
    return ObjectType(tuple(PropertyType(name, ty) for name, ty in fields.items()))


def obj_new(**fields: Term) -> ObjectNew:
    """Build an object literal from keyword fields."""
    return ObjectNew(tuple(PropertyTerm(name, term) for name, term in fields.items()))


def lets(*bindings: tuple[str, Term], body: Term) -> Term:
    """Chain ``const`` bindings around ``body``."""
    for name, init in reversed(bindings):
        body = Let(name, init, body)
    return body


class TestBasics:
    """Tests for literals, arithmetic and conditionals."""

    def test_literals(self) -> None:
        assert typecheck(TrueLit()) == BOOL
        assert typecheck(FalseLit()) == BOOL
        assert typecheck(NumberLit(42)) == NUM

    def test_add(self) -> None:
        # 1 + 2
        assert typecheck(Add(NumberLit(1), NumberLit(2))) == NUM

    def test_add_left_operand_checked(self) -> None:
        operand = TrueLit()
        with pytest.raises(NumberExpected) as exc_info:
            typecheck(Add(operand, NumberLit(2)))
        assert exc_info.value.side == "left"
        assert exc_info.value.node is operand

    def test_add_right_operand_checked(self) -> None:
        with pytest.raises(NumberExpected) as exc_info:
            typecheck(Add(NumberLit(1), FalseLit()))
        assert exc_info.value.side == "right"
        assert exc_info.value.actual == BOOL

    def test_if(self) -> None:
        # if true then 1 else 2
        assert typecheck(If(TrueLit(), NumberLit(1), NumberLit(2))) == NUM

    def test_if_condition_must_be_boolean(self) -> None:
        with pytest.raises(BooleanExpected):
            typecheck(If(NumberLit(1), NumberLit(1), NumberLit(2)))

    def test_if_branches_must_agree(self) -> None:
        term = If(TrueLit(), NumberLit(1), FalseLit())
        with pytest.raises(BranchTypeMismatch) as exc_info:
            typecheck(term)
        assert exc_info.value.node is term
        assert exc_info.value.then_type == NUM
        assert exc_info.value.else_type == BOOL


class TestFunctions:
    """Tests for variables, functions, calls and bindings."""

    def test_identity_function(self) -> None:
        # (x: boolean) => x
        term = Func(params(x=BOOL), Var("x"))
        assert typecheck(term) == FuncType(params(x=BOOL), BOOL)

    def test_call_with_wrong_argument(self) -> None:
        # ((x: boolean) => x)(42)
        arg = NumberLit(42)
        term = Call(Func(params(x=BOOL), Var("x")), (arg,))
        with pytest.raises(ParameterTypeMismatch) as exc_info:
            typecheck(term)
        assert exc_info.value.index == 0
        assert exc_info.value.expected == BOOL
        assert exc_info.value.actual == NUM
        assert exc_info.value.node is arg

    def test_call(self) -> None:
        term = Call(Func(params(x=NUM, y=NUM), Add(Var("x"), Var("y"))), (
            NumberLit(1),
            NumberLit(2),
        ))
        assert typecheck(term) == NUM

    def test_call_arity(self) -> None:
        term = Call(Func(params(x=NUM), Var("x")), ())
        with pytest.raises(ArityMismatch) as exc_info:
            typecheck(term)
        assert exc_info.value.expected == 1
        assert exc_info.value.actual == 0

    def test_call_non_function(self) -> None:
        with pytest.raises(FunctionExpected):
            typecheck(Call(NumberLit(1), ()))

    def test_unknown_variable(self) -> None:
        with pytest.raises(UnknownVariable) as exc_info:
            typecheck(Var("nope"))
        assert exc_info.value.name == "nope"

    def test_environment_supplied(self) -> None:
        assert typecheck(Var("x"), {"x": NUM}) == NUM
        assert typecheck(Var("x"), TypeEnv.of({"x": BOOL})) == BOOL

    def test_closure_sees_outer_binding(self) -> None:
        # const y = 1; (x: number) => x + y
        term = Let("y", NumberLit(1), Func(params(x=NUM), Add(Var("x"), Var("y"))))
        assert typecheck(term) == FuncType(params(x=NUM), NUM)

    def test_parameter_shadows_outer(self) -> None:
        term = Let("x", NumberLit(1), Func(params(x=BOOL), Var("x")))
        assert typecheck(term) == FuncType(params(x=BOOL), BOOL)

    def test_seq_result_is_rest(self) -> None:
        assert typecheck(Seq(NumberLit(1), TrueLit())) == BOOL

    def test_seq_first_still_checked(self) -> None:
        with pytest.raises(UnknownVariable):
            typecheck(Seq(Var("missing"), TrueLit()))

    def test_let_not_recursive(self) -> None:
        with pytest.raises(UnknownVariable):
            typecheck(Let("x", Var("x"), Var("x")))

    def test_let_binds_rest(self) -> None:
        term = lets(
            ("add", Func(params(x=NUM, y=NUM), Add(Var("x"), Var("y")))),
            body=Call(Var("add"), (NumberLit(1), NumberLit(2))),
        )
        assert typecheck(term) == NUM

    def test_declared_return_type(self) -> None:
        # (n: number): number => 42
        term = Func(params(n=NUM), NumberLit(42), NUM)
        assert typecheck(term) == FuncType(params(n=NUM), NUM)

    def test_wrong_declared_return_type(self) -> None:
        # (n: number): boolean => 42
        term = Func(params(n=NUM), NumberLit(42), BOOL)
        with pytest.raises(WrongReturnType) as exc_info:
            typecheck(term)
        assert exc_info.value.expected == BOOL
        assert exc_info.value.actual == NUM

    def test_higher_order(self) -> None:
        # const twice = (f: (x: number) => number, x: number) => f(f(x));
        # twice((x: number) => x + 1, 1)
        inc_ty = FuncType(params(x=NUM), NUM)
        term = lets(
            (
                "twice",
                Func(
                    params(f=inc_ty, x=NUM),
                    Call(Var("f"), (Call(Var("f"), (Var("x"),)),)),
                ),
            ),
            body=Call(
                Var("twice"),
                (Func(params(y=NUM), Add(Var("y"), NumberLit(1))), NumberLit(1)),
            ),
        )
        assert typecheck(term) == NUM


class TestObjects:
    """Tests for object literals and property access."""

    def test_object_literal(self) -> None:
        term = obj_new(foo=NumberLit(1), bar=TrueLit())
        assert typecheck(term) == obj_type(foo=NUM, bar=BOOL)

    def test_property_access(self) -> None:
        # const x = { foo: 1, bar: true }; x.foo
        x_val = obj_new(foo=NumberLit(1), bar=TrueLit())
        term = Let("x", x_val, ObjectGet(Var("x"), "foo"))
        assert typecheck(term, dialect=OBJ) == NUM

    def test_unknown_property(self) -> None:
        term = ObjectGet(obj_new(foo=NumberLit(1)), "bar")
        with pytest.raises(UnknownProperty) as exc_info:
            typecheck(term)
        assert exc_info.value.name == "bar"

    def test_property_of_non_object(self) -> None:
        with pytest.raises(ObjectExpected):
            typecheck(ObjectGet(NumberLit(1), "foo"))

    def test_equivalence_rejects_wider_argument(self) -> None:
        term = lets(
            ("f", Func(params(x=obj_type(foo=NUM)), ObjectGet(Var("x"), "foo"))),
            ("x", obj_new(foo=NumberLit(1), bar=TrueLit())),
            body=Call(Var("f"), (Var("x"),)),
        )
        with pytest.raises(ParameterTypeMismatch):
            typecheck(term, dialect=OBJ)


class TestSubtyping:
    """Tests for the subtyping dialect."""

    def test_wider_argument_accepted(self) -> None:
        # const f = (x: { foo: number }) => x.foo;
        # const x = { foo: 1, bar: true };
        # f(x);
        term = lets(
            ("f", Func(params(x=obj_type(foo=NUM)), ObjectGet(Var("x"), "foo"))),
            ("x", obj_new(foo=NumberLit(1), bar=TrueLit())),
            body=Call(Var("f"), (Var("x"),)),
        )
        assert typecheck(term, dialect=SUB) == NUM

    def test_function_argument_with_narrower_result_rejected(self) -> None:
        # const f = (g: () => { foo: number; bar: boolean }) => g().bar;
        # const g = () => ({ foo: 456 });
        # f(g);
        g_ty = FuncType((), obj_type(foo=NUM, bar=BOOL))
        term = lets(
            ("f", Func(params(g=g_ty), ObjectGet(Call(Var("g"), ()), "bar"))),
            ("g", Func((), obj_new(foo=NumberLit(456)))),
            body=Call(Var("f"), (Var("g"),)),
        )
        with pytest.raises(ParameterTypeMismatch):
            typecheck(term, dialect=SUB)

    def test_depth_subtyping(self) -> None:
        # const x = { foo: 123, bar: { x: 456, y: true } };
        # const f = (x: { foo: number; bar: { x: number } }) => x.bar.x;
        # const g = (x: { foo: number; bar: { y: boolean } }) => x.bar.y;
        # f(x); g(x);
        x_val = obj_new(foo=NumberLit(123), bar=obj_new(x=NumberLit(456), y=TrueLit()))
        f_param = obj_type(foo=NUM, bar=obj_type(x=NUM))
        g_param = obj_type(foo=NUM, bar=obj_type(y=BOOL))
        term = lets(
            ("x", x_val),
            ("f", Func(params(x=f_param), ObjectGet(ObjectGet(Var("x"), "bar"), "x"))),
            ("g", Func(params(x=g_param), ObjectGet(ObjectGet(Var("x"), "bar"), "y"))),
            body=Seq(Call(Var("f"), (Var("x"),)), Call(Var("g"), (Var("x"),))),
        )
        assert typecheck(term, dialect=SUB) == BOOL

    def test_branches_still_need_equal_types(self) -> None:
        wide = obj_new(a=NumberLit(1), b=TrueLit())
        term = If(TrueLit(), wide, obj_new(a=NumberLit(2)))
        with pytest.raises(BranchTypeMismatch):
            typecheck(term, dialect=SUB)

    def test_with_subtyping(self) -> None:
        dialect = RECFUNC.with_subtyping()
        assert dialect.subtyping
        assert not RECFUNC.subtyping
        term = Call(
            Func(params(x=obj_type(foo=NUM)), ObjectGet(Var("x"), "foo")),
            (obj_new(foo=NumberLit(1), bar=TrueLit()),),
        )
        assert typecheck(term, dialect=dialect) == NUM


class TestRecursiveFunctions:
    """Tests for self-referential function definitions."""

    def test_recursive_function(self) -> None:
        # function f(x: number): number { return f(x); }; f
        f_ty = FuncType(params(x=NUM), NUM)
        term = RecFunc("f", params(x=NUM), NUM, Call(Var("f"), (Var("x"),)), Var("f"))
        assert typecheck(term, dialect=RECFUNC) == f_ty

    def test_recursive_call_in_rest(self) -> None:
        # function f(x: number): number { return f(x); }; f(0)
        term = RecFunc(
            "f",
            params(x=NUM),
            NUM,
            Call(Var("f"), (Var("x"),)),
            Call(Var("f"), (NumberLit(0),)),
        )
        assert typecheck(term, dialect=RECFUNC) == NUM

    def test_wrong_return_type(self) -> None:
        term = RecFunc("f", params(x=NUM), BOOL, Add(Var("x"), NumberLit(1)), Var("f"))
        with pytest.raises(WrongReturnType) as exc_info:
            typecheck(term, dialect=RECFUNC)
        assert exc_info.value.expected == BOOL
        assert exc_info.value.actual == NUM

    def test_parameters_visible_in_rest(self) -> None:
        term = RecFunc("f", params(x=NUM), NUM, Var("x"), Var("x"))
        assert typecheck(term, dialect=RECFUNC) == NUM

    def test_function_name_rebound_for_rest(self) -> None:
        # function f(f: boolean): number { return f ? 1 : 2; }; f(true)
        term = RecFunc(
            "f",
            params(f=BOOL),
            NUM,
            If(Var("f"), NumberLit(1), NumberLit(2)),
            Call(Var("f"), (TrueLit(),)),
        )
        assert typecheck(term, dialect=RECFUNC) == NUM


class TestRecursiveTypes:
    """Tests for equi-recursive types flowing through the checker."""

    def test_number_stream(self) -> None:
        # type NumStream = { num: number; rest: () => NumStream };
        # function numbers(n: number): NumStream {
        #     return { num: n, rest: () => numbers(n + 1) };
        # }
        # const ns1 = numbers(1);
        # const ns2 = (ns1.rest)();
        # const ns3 = (ns2.rest)();
        # ns3
        stream = RecType(
            "NumStream",
            obj_type(num=NUM, rest=FuncType((), TypeVarType("NumStream"))),
        )
        body = obj_new(
            num=Var("n"),
            rest=Func((), Call(Var("numbers"), (Add(Var("n"), NumberLit(1)),))),
        )
        rest = lets(
            ("ns1", Call(Var("numbers"), (NumberLit(1),))),
            ("ns2", Call(ObjectGet(Var("ns1"), "rest"), ())),
            ("ns3", Call(ObjectGet(Var("ns2"), "rest"), ())),
            body=Var("ns3"),
        )
        term = RecFunc("numbers", params(n=NUM), stream, body, rest)
        result = typecheck(term, dialect=REC)
        assert type_eq(result, stream)

    def test_projection_through_recursive_type(self) -> None:
        stream = RecType(
            "S",
            obj_type(num=NUM, rest=FuncType((), TypeVarType("S"))),
        )
        term = ObjectGet(Call(ObjectGet(Var("s"), "rest"), ()), "num")
        assert typecheck(term, {"s": stream}, dialect=REC) == NUM

    def test_recursive_function_type_callable(self) -> None:
        # rec F. (x: number) => F, applied twice
        looping = RecType("F", FuncType(params(x=NUM), TypeVarType("F")))
        term = Call(Call(Var("g"), (NumberLit(1),)), (NumberLit(2),))
        assert type_eq(typecheck(term, {"g": looping}, dialect=REC), looping)


class TestPolymorphism:
    """Tests for type abstraction and application."""

    def test_generic_function(self) -> None:
        # <T>(x: T) => true
        term = TypeAbs(("T",), Func(params(x=T), TrueLit()))
        expected = TypeAbsType(("T",), FuncType(params(x=T), BOOL))
        assert typecheck(term, dialect=POLY) == expected

    def test_generic_argument(self) -> None:
        # const f = (g: <T>(x: T) => boolean) => true;
        # const g = <T>(x: T) => true;
        # f(g);
        g_ty = TypeAbsType(("T",), FuncType(params(x=T), BOOL))
        term = lets(
            ("f", Func(params(g=g_ty), TrueLit())),
            ("g", TypeAbs(("T",), Func(params(x=T), TrueLit()))),
            body=Call(Var("f"), (Var("g"),)),
        )
        assert typecheck(term, dialect=POLY) == BOOL

    def test_alpha_renamed_generic_argument(self) -> None:
        g_ty = TypeAbsType(("T",), FuncType(params(x=T), BOOL))
        term = lets(
            ("f", Func(params(g=g_ty), TrueLit())),
            ("g", TypeAbs(("U",), Func(params(y=U), TrueLit()))),
            body=Call(Var("f"), (Var("g"),)),
        )
        assert typecheck(term, dialect=POLY) == BOOL

    def test_instantiation(self) -> None:
        # const f = <T>(x: T) => x; f<number>
        term = Let(
            "f",
            TypeAbs(("T",), Func(params(x=T), Var("x"))),
            TypeApp(Var("f"), (NUM,)),
        )
        assert typecheck(term, dialect=POLY) == FuncType(params(x=NUM), NUM)

    def test_instantiation_under_function_type(self) -> None:
        # const f = <T>(g: (x: T) => T) => true; f<number>
        term = Let(
            "f",
            TypeAbs(("T",), Func(params(g=FuncType(params(x=T), T)), TrueLit())),
            TypeApp(Var("f"), (NUM,)),
        )
        expected = FuncType(params(g=FuncType(params(x=NUM), NUM)), BOOL)
        assert typecheck(term, dialect=POLY) == expected

    def test_shadowing_binder_left_alone(self) -> None:
        # const f = <T>(arg1: T, arg2: <T>(x: T) => boolean) => true; f<number>
        inner = TypeAbsType(("T",), FuncType(params(x=T), BOOL))
        term = Let(
            "f",
            TypeAbs(("T",), Func(params(arg1=T, arg2=inner), TrueLit())),
            TypeApp(Var("f"), (NUM,)),
        )
        expected = FuncType(params(arg1=NUM, arg2=inner), BOOL)
        assert typecheck(term, dialect=POLY) == expected

    def test_capture_avoided_on_instantiation(self) -> None:
        # const f = <T>(arg1: T, arg2: <U>(x: T, y: U) => boolean) => true;
        # const bar = <U>() => f<U>;
        inner = TypeAbsType(("U",), FuncType(params(x=T, y=U), BOOL))
        term = lets(
            ("f", TypeAbs(("T",), Func(params(arg1=T, arg2=inner), TrueLit()))),
            ("bar", TypeAbs(("U",), Func((), TypeApp(Var("f"), (U,))))),
            body=Var("bar"),
        )
        u1 = TypeVarType("U1")
        expected = TypeAbsType(
            ("U",),
            FuncType(
                (),
                FuncType(
                    params(
                        arg1=U,
                        arg2=TypeAbsType(("U1",), FuncType(params(x=U, y=u1), BOOL)),
                    ),
                    BOOL,
                ),
            ),
        )
        assert typecheck(term, dialect=POLY) == expected

    def test_generic_branches(self) -> None:
        # const select = <T>(cond: boolean, x: T, y: T) => cond ? x : y;
        term = TypeAbs(
            ("T",),
            Func(params(cond=BOOL, x=T, y=T), If(Var("cond"), Var("x"), Var("y"))),
        )
        expected = TypeAbsType(("T",), FuncType(params(cond=BOOL, x=T, y=T), T))
        assert typecheck(term, dialect=POLY) == expected

    def test_distinct_type_variables_differ(self) -> None:
        term = TypeAbs(
            ("T", "U"),
            Func(params(cond=BOOL, x=T, y=U), If(Var("cond"), Var("x"), Var("y"))),
        )
        with pytest.raises(BranchTypeMismatch):
            typecheck(term, dialect=POLY)

    def test_type_application_of_non_generic(self) -> None:
        with pytest.raises(TypeAbstractionExpected):
            typecheck(TypeApp(TrueLit(), (NUM,)), dialect=POLY)

    def test_type_argument_count(self) -> None:
        term = TypeApp(TypeAbs(("T",), Func(params(x=T), Var("x"))), (NUM, BOOL))
        with pytest.raises(ArityMismatch) as exc_info:
            typecheck(term, dialect=POLY)
        assert exc_info.value.what == "type arguments"

    def test_unbound_annotation(self) -> None:
        with pytest.raises(UnboundTypeVariable) as exc_info:
            typecheck(Func(params(x=T), Var("x")), dialect=POLY)
        assert exc_info.value.name == "T"

    def test_ambient_type_variables(self) -> None:
        term = Func(params(x=T), Var("x"))
        assert typecheck(term, bound=["T"], dialect=POLY) == FuncType(params(x=T), T)

    def test_shadowing_type_parameter_renamed(self) -> None:
        # <T>(x: T) => <T>(y: T) => x
        t1 = TypeVarType("T1")
        term = TypeAbs(
            ("T",),
            Func(params(x=T), TypeAbs(("T",), Func(params(y=T), Var("x")))),
        )
        expected = TypeAbsType(
            ("T",),
            FuncType(params(x=T), TypeAbsType(("T1",), FuncType(params(y=t1), T))),
        )
        assert typecheck(term, dialect=POLY) == expected

    def test_shadowing_type_parameter_distinct(self) -> None:
        # <T>(c: boolean, x: T) => <T>(y: T) => c ? x : y
        inner = TypeAbs(
            ("T",),
            Func(params(y=T), If(Var("c"), Var("x"), Var("y"))),
        )
        term = TypeAbs(("T",), Func(params(c=BOOL, x=T), inner))
        with pytest.raises(BranchTypeMismatch):
            typecheck(term, dialect=POLY)

    def test_written_name_does_not_capture_renamed_one(self) -> None:
        # <T>(x: T) => <T>(y: T) => <T1>(z: T1) => x
        t1, t2 = TypeVarType("T1"), TypeVarType("T2")
        innermost = TypeAbs(("T1",), Func(params(z=t1), Var("x")))
        term = TypeAbs(
            ("T",),
            Func(params(x=T), TypeAbs(("T",), Func(params(y=T), innermost))),
        )
        expected = TypeAbsType(
            ("T",),
            FuncType(
                params(x=T),
                TypeAbsType(
                    ("T1",),
                    FuncType(
                        params(y=t1),
                        TypeAbsType(("T2",), FuncType(params(z=t2), T)),
                    ),
                ),
            ),
        )
        assert typecheck(term, dialect=POLY) == expected

    def test_type_argument_refers_to_shadowing_parameter(self) -> None:
        # <T>(x: T) => <T>(id: <U>(u: U) => U) => id<T>
        u = TypeVarType("U")
        id_ty = TypeAbsType(("U",), FuncType(params(u=u), u))
        term = TypeAbs(
            ("T",),
            Func(
                params(x=T),
                TypeAbs(("T",), Func(params(id=id_ty), TypeApp(Var("id"), (T,)))),
            ),
        )
        t1 = TypeVarType("T1")
        inner_ty = FuncType(params(id=id_ty), FuncType(params(u=t1), t1))
        expected = TypeAbsType(
            ("T",),
            FuncType(params(x=T), TypeAbsType(("T1",), inner_ty)),
        )
        assert type_eq(typecheck(term, dialect=POLY), expected)


class TestDialects:
    """Tests for dialect restrictions and checker reuse."""

    def test_unsupported_term(self) -> None:
        term = obj_new(foo=NumberLit(1))
        with pytest.raises(UnsupportedTerm) as exc_info:
            typecheck(term, dialect=BASIC)
        assert exc_info.value.dialect == "basic"

    def test_nested_unsupported_term(self) -> None:
        term = Let("f", TypeAbs(("T",), TrueLit()), TrueLit())
        with pytest.raises(UnsupportedTerm):
            typecheck(term, dialect=RECFUNC)

    def test_custom_dialect(self) -> None:
        tiny = Dialect("tiny", frozenset({NumberLit, Add}))
        assert typecheck(Add(NumberLit(1), NumberLit(2)), dialect=tiny) == NUM
        with pytest.raises(UnsupportedTerm):
            typecheck(TrueLit(), dialect=tiny)

    def test_checker_reusable(self) -> None:
        checker = Checker(POLY)
        assert checker.check(NumberLit(1)) == NUM
        assert checker.check(TrueLit()) == BOOL


class TestDiagnostics:
    """Tests for error formatting."""

    def test_location_in_message(self) -> None:
        span = Location(Position(1, 1), Position(1, 5))
        with pytest.raises(UnknownVariable) as exc_info:
            typecheck(Var("x", loc=span))
        assert exc_info.value.location == span
        assert str(exc_info.value) == "1:1-1:5: unknown variable: x"

    def test_types_rendered(self) -> None:
        term = Call(Func(params(x=BOOL), Var("x")), (NumberLit(42),))
        with pytest.raises(ParameterTypeMismatch) as exc_info:
            typecheck(term)
        assert exc_info.value.message == (
            "parameter type mismatch: [0]: expected boolean, got number"
        )
