"""Native macros for Rill.

A native macro receives its arguments as unevaluated syntax together with the
current environment and the evaluator, and decides for itself what to
evaluate. `let` and `def` write into the current frame; `scope` opens a child
frame for the length of its body.
"""

from __future__ import annotations

import logging
from typing import Callable

from rill import EvaluatorFn, Value
from rill.errors import ArityError, TypeMismatchError
from rill.types.environment import Environment
from rill.types.expr import Array, Call, Expr, Ident
from rill.types.nil import Nil
from rill.types.values import MacroOp, NativeMacro, UserFunction, type_name

_logger = logging.getLogger("rill.builtin")

NativeMacroFn = Callable[[list[Expr], Environment, EvaluatorFn], Value]


def _binding_name(form: str, expr: Expr, env: Environment, evaluate_fn: EvaluatorFn) -> str:
    """Resolve the name a binding macro should bind.

    A bare identifier names itself; anything else (including `@name`) is
    evaluated and must produce a string.
    """
    if isinstance(expr, Ident) and not expr.is_bind_marker:
        return expr.name
    name = evaluate_fn(expr, env)
    if not isinstance(name, str):
        raise TypeMismatchError(f"{form} expects a name, got {type_name(name)}")
    return name


def _bind(form: str, name: str, value: Value, env: Environment) -> Value:
    previous = env.define(name, value)
    if _logger.isEnabledFor(logging.DEBUG):
        if previous is None:
            _logger.debug("%s %s at depth %d", form, name, env.depth)
        else:
            _logger.debug("%s %s at depth %d (was %r)", form, name, env.depth, previous)
    return value


def _parameter_names(params: Expr) -> tuple[str, ...]:
    """(x y z) or [x y z] -> ("x", "y", "z")."""
    if isinstance(params, Call) and not params.is_macro:
        names = [params.func_name]
        items = params.args
    elif isinstance(params, Array):
        names = []
        items = params.items
    else:
        raise TypeMismatchError(f"def expects a parameter list, got {params}")
    for item in items:
        if not isinstance(item, Ident):
            raise TypeMismatchError(f"parameter names must be identifiers, got {item}")
        names.append(item.name)
    return tuple(names)


def let_macro(args: list[Expr], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    """(:let name value) -> bind name in the current frame, return the value."""
    if len(args) != 2:
        raise ArityError(f"let requires exactly 2 arguments, got {len(args)}")
    name_expr, value_expr = args
    name = _binding_name("let", name_expr, env, evaluate_fn)
    return _bind("let", name, evaluate_fn(value_expr, env), env)


def def_macro(args: list[Expr], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    """
    (:def name value)          same as let
    (:def name (params) body)  bind a user function and return it

    The body is kept as syntax; it is evaluated only when the function is
    called, in a frame linked to the caller's environment.
    """
    if len(args) == 2:
        name_expr, value_expr = args
        name = _binding_name("def", name_expr, env, evaluate_fn)
        return _bind("def", name, evaluate_fn(value_expr, env), env)
    if len(args) == 3:
        name_expr, params, body = args
        name = _binding_name("def", name_expr, env, evaluate_fn)
        fn = UserFunction(_parameter_names(params), body)
        return _bind("def", name, fn, env)
    raise ArityError(f"def requires 2 or 3 arguments, got {len(args)}")


def scope_macro(args: list[Expr], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    """(:scope e1 ... en) -> evaluate in a fresh child frame, return en (or nil)."""
    result: Value = Nil
    with env.child() as frame:
        for expr in args:
            result = evaluate_fn(expr, frame)
    return result


NATIVE_MACROS: dict[MacroOp, NativeMacroFn] = {
    MacroOp.LET: let_macro,
    MacroOp.DEF: def_macro,
    MacroOp.SCOPE: scope_macro,
}


def call_macro(macro: NativeMacro, args: list[Expr], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    return NATIVE_MACROS[macro.op](args, env, evaluate_fn)


def register(env: Environment) -> None:
    """Register all native macros into the given environment."""
    env.update({op.value: NativeMacro(op) for op in MacroOp})
