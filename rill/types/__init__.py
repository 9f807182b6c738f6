"""Syntax, value and environment types for Rill."""

from rill.types.nil import Nil, NilType
from rill.types.expr import Expr, Number, StringLit, Ident, Array, Call
from rill.types.values import (
    FunctionOp,
    MacroOp,
    NativeFunction,
    NativeMacro,
    UserFunction,
    is_number,
    type_name,
)
from rill.types.environment import Environment

__all__ = [
    "Nil",
    "NilType",
    "Expr",
    "Number",
    "StringLit",
    "Ident",
    "Array",
    "Call",
    "FunctionOp",
    "MacroOp",
    "NativeFunction",
    "NativeMacro",
    "UserFunction",
    "is_number",
    "type_name",
    "Environment",
]
