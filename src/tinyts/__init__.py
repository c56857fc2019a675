"""tinyts - Static type checkers for small TypeScript-like languages."""

from tinyts.checker import (
    Checker,
    typecheck,
)
from tinyts.codecs import (
    from_builtins,
    to_builtins,
)
from tinyts.dialects import (
    ARITH,
    BASIC,
    DIALECTS,
    FULL,
    OBJ,
    POLY,
    REC,
    RECFUNC,
    SUB,
    Dialect,
)
from tinyts.env import TypeEnv, TypeScope
from tinyts.errors import (
    ArityMismatch,
    BooleanExpected,
    BranchTypeMismatch,
    FunctionExpected,
    IllFormedType,
    InternalError,
    NumberExpected,
    ObjectExpected,
    ParameterTypeMismatch,
    TypeAbstractionExpected,
    TypeCheckError,
    UnboundTypeVariable,
    UnknownProperty,
    UnknownVariable,
    UnsupportedTerm,
    WrongReturnType,
)
from tinyts.formats.json import (
    from_json,
    load_json,
    to_json,
)
from tinyts.nodes import (
    Location,
    Position,
    TermNode,
)
from tinyts.relation import (
    Relation,
    TypeComparator,
    alpha_equal,
    subtype,
    type_eq,
)
from tinyts.subst import (
    FreshNames,
    instantiate,
    simplify,
    substitute,
    unfold,
)
from tinyts.types import (
    TypeNode,
    type_show,
)

__all__ = [
    # Dialects
    "ARITH",
    "BASIC",
    "DIALECTS",
    "FULL",
    "OBJ",
    "POLY",
    "REC",
    "RECFUNC",
    "SUB",
    # Errors
    "ArityMismatch",
    "BooleanExpected",
    "BranchTypeMismatch",
    # Checking
    "Checker",
    "Dialect",
    # Substitution
    "FreshNames",
    "FunctionExpected",
    "IllFormedType",
    "InternalError",
    # Core types
    "Location",
    "NumberExpected",
    "ObjectExpected",
    "ParameterTypeMismatch",
    "Position",
    # Relations
    "Relation",
    "TermNode",
    "TypeAbstractionExpected",
    "TypeCheckError",
    "TypeComparator",
    "TypeEnv",
    "TypeScope",
    "TypeNode",
    "UnboundTypeVariable",
    "UnknownProperty",
    "UnknownVariable",
    "UnsupportedTerm",
    "WrongReturnType",
    "alpha_equal",
    # Serialization
    "from_builtins",
    "from_json",
    "instantiate",
    "load_json",
    "simplify",
    "substitute",
    "subtype",
    "to_builtins",
    "to_json",
    "type_eq",
    "type_show",
    "typecheck",
    "unfold",
]
