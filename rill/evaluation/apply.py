"""Application engine for Rill.

Call sites come in two closed conventions, chosen at parse time by the `:`
sigil on the callee:

- function calls evaluate every argument left to right in the caller's
  environment, then dispatch to a native function or a user function;
- macro calls hand the raw argument syntax to a native macro.

User functions are dynamically scoped: the call frame's outer link is the
caller's environment, not the environment where the function was defined,
so free names in the body resolve at the call site.
"""

from __future__ import annotations

import logging

from rill import EvaluatorFn, Value
from rill.builtin.env_builtin import call_native
from rill.builtin.macro_builtin import call_macro
from rill.errors import TypeMismatchError
from rill.types.environment import Environment
from rill.types.expr import Call
from rill.types.values import NativeFunction, NativeMacro, UserFunction, type_name

_logger = logging.getLogger("rill.evaluation")


def apply_user_function(
    fn: UserFunction,
    args: list[Value],
    caller_env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Bind the i-th argument to the i-th parameter and evaluate the body.

    Arity is not checked: surplus arguments are ignored and parameters with
    no argument stay unbound in the call frame.
    """
    if len(args) != len(fn.params) and _logger.isEnabledFor(logging.DEBUG):
        _logger.debug("%s called with %d argument(s)", fn, len(args))
    with caller_env.child() as frame:
        for name, value in zip(fn.params, args):
            frame.define(name, value)
        return evaluate_fn(fn.body, frame)


def apply(
    head: NativeFunction | UserFunction,
    args: list[Value],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Apply a native or user function to already evaluated arguments."""
    if isinstance(head, UserFunction):
        return apply_user_function(head, args, env, evaluate_fn)
    if isinstance(head, NativeFunction):
        return call_native(head, args, env)
    raise TypeMismatchError(f"cannot apply {type_name(head)}")


def apply_function_call(call: Call, env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    head = env.lookup(call.func_name)
    if isinstance(head, NativeMacro):
        raise TypeMismatchError(f"{call.func_name} is a macro, call it as (:{call.func_name} ...)")
    if not isinstance(head, (NativeFunction, UserFunction)):
        raise TypeMismatchError(f"cannot call {call.func_name}: {type_name(head)} is not a function")
    args = [evaluate_fn(arg, env) for arg in call.args]
    return apply(head, args, env, evaluate_fn)


def apply_macro_call(call: Call, env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    head = env.lookup(call.func_name)
    if not isinstance(head, NativeMacro):
        raise TypeMismatchError(f"cannot expand {call.func_name}: {type_name(head)} is not a macro")
    return call_macro(head, list(call.args), env, evaluate_fn)
