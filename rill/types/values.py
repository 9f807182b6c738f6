"""Runtime values that are not plain Python types.

Numbers, strings and arrays are `int`, `str` and `list`; `Nil` is a
singleton. Native operations are identified by members of a closed
enumeration rather than by Python callables, so values stay comparable and
printable; the dispatch tables live in rill.builtin.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from rill import Value
from rill.types.expr import Expr
from rill.types.nil import NilType


class FunctionOp(Enum):
    """Native operations called with evaluated arguments."""

    PLUS = "plus"
    MINUS = "minus"
    TIMES = "times"
    DIV = "div"
    ID = "id"


class MacroOp(Enum):
    """Native operations called with unevaluated argument syntax."""

    LET = "let"
    DEF = "def"
    SCOPE = "scope"


@dataclass(frozen=True)
class NativeFunction:
    op: FunctionOp

    @property
    def name(self) -> str:
        return self.op.value

    def __str__(self) -> str:
        return f"<native function {self.name}>"


@dataclass(frozen=True)
class NativeMacro:
    op: MacroOp

    @property
    def name(self) -> str:
        return self.op.value

    def __str__(self) -> str:
        return f"<native macro {self.name}>"


@dataclass(frozen=True)
class UserFunction:
    """A parameter list and a body; no defining environment is captured."""

    params: tuple[str, ...]
    body: Expr

    def __str__(self) -> str:
        return "<function (" + " ".join(self.params) + ")>"


def is_number(value: Value) -> bool:
    # bool is an int subclass but never a Rill number
    return isinstance(value, int) and not isinstance(value, bool)


def type_name(value: Value) -> str:
    """Name of a value's kind, for error messages."""
    if isinstance(value, NilType):
        return "nil"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, NativeFunction):
        return "native function"
    if isinstance(value, NativeMacro):
        return "native macro"
    if isinstance(value, UserFunction):
        return "function"
    return type(value).__name__
