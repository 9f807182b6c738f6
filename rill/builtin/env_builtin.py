"""Native functions for the Rill runtime environment.

Each native function takes the current environment and the list of already
evaluated arguments. `NATIVE_FUNCTIONS` maps every FunctionOp to its
implementation; `register` binds them (and `nil`) into a root environment.
"""
from __future__ import annotations

from typing import Callable

from rill import Value
from rill.errors import ArityError, DivisionByZeroError, TypeMismatchError
from rill.types.environment import Environment
from rill.types.nil import Nil
from rill.types.values import FunctionOp, NativeFunction, is_number, type_name

NativeFn = Callable[[Environment, list[Value]], Value]


def _check_numbers(name: str, args: list[Value]) -> None:
    for arg in args:
        if not is_number(arg):
            raise TypeMismatchError(f"all arguments to {name} must be numbers, got {type_name(arg)}")


# -------------------------------
# Arithmetic
# -------------------------------
def plus(env: Environment, args: list[Value]) -> Value:
    """Return the sum of all arguments; (plus) is 0."""
    _check_numbers("plus", args)
    return sum(args)


def minus(env: Environment, args: list[Value]) -> Value:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    if not args:
        raise ArityError("minus requires at least 1 argument")
    _check_numbers("minus", args)
    if len(args) == 1:
        return -args[0]
    result = args[0]
    for x in args[1:]:
        result -= x
    return result


def times(env: Environment, args: list[Value]) -> Value:
    """Return the product of all arguments; (times) is 1."""
    _check_numbers("times", args)
    result = 1
    for x in args:
        result *= x
    return result


def _truncating_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def div(env: Environment, args: list[Value]) -> Value:
    """Divide the first number by each of the rest, truncating toward zero."""
    if not args:
        raise ArityError("div requires at least 1 argument")
    _check_numbers("div", args)
    if len(args) == 1:
        args = [1, args[0]]
    result = args[0]
    for x in args[1:]:
        if x == 0:
            raise DivisionByZeroError("division by zero")
        result = _truncating_div(result, x)
    return result


def identity(env: Environment, args: list[Value]) -> Value:
    if len(args) != 1:
        raise ArityError(f"id requires exactly 1 argument, got {len(args)}")
    return args[0]


NATIVE_FUNCTIONS: dict[FunctionOp, NativeFn] = {
    FunctionOp.PLUS: plus,
    FunctionOp.MINUS: minus,
    FunctionOp.TIMES: times,
    FunctionOp.DIV: div,
    FunctionOp.ID: identity,
}


def call_native(fn: NativeFunction, args: list[Value], env: Environment) -> Value:
    return NATIVE_FUNCTIONS[fn.op](env, args)


def register(env: Environment) -> None:
    """Register all native functions and constants into the given environment."""
    env.update({op.value: NativeFunction(op) for op in FunctionOp})
    env.define("nil", Nil)
