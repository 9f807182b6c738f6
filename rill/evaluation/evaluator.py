"""Core evaluator for the Rill interpreter.

`evaluate(expr, env)` reduces an expression tree to a value. It is a pure
function of its inputs except for binding macros writing into `env`.
Evaluation recurses on the host stack; there is no tail-call elimination.
"""

from __future__ import annotations

from rill import Value
from rill.errors import TypeMismatchError
from rill.evaluation.apply import apply_function_call, apply_macro_call
from rill.types.environment import Environment
from rill.types.expr import Array, Call, Expr, Ident, Number, StringLit


def evaluate(expr: Expr, env: Environment) -> Value:
    match expr:
        case Number(value=value):
            return value
        case StringLit(text=text):
            return text
        case Ident(name=name, is_bind_marker=True):
            # Bind markers evaluate to the identifier's own text
            return name
        case Ident(name=name):
            return env.lookup(name)
        case Array(items=items):
            return [evaluate(item, env) for item in items]
        case Call(is_macro=True):
            return apply_macro_call(expr, env, evaluate)
        case Call():
            return apply_function_call(expr, env, evaluate)
    raise TypeMismatchError(f"cannot evaluate {expr!r}")
