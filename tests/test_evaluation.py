import pytest

from rill.errors import TypeMismatchError, UnboundNameError
from rill.evaluation.evaluator import evaluate
from rill.types.expr import Array, Call, Ident, Number, StringLit
from rill.types.nil import Nil
from rill.types.values import FunctionOp, MacroOp, NativeFunction, NativeMacro, UserFunction

# -----------------------------------------------------
# Leaves
# -----------------------------------------------------

def test_self_evaluating_literals(env):
    assert evaluate(Number(1), env) == 1
    assert evaluate(Number(-7), env) == -7
    assert evaluate(StringLit("hello"), env) == "hello"


def test_identifier_lookup(env):
    env.define("x", 42)
    assert evaluate(Ident("x"), env) == 42
    with pytest.raises(UnboundNameError):
        evaluate(Ident("z"), env)


def test_bind_marker_yields_name_not_value(env):
    env.define("x", 42)
    assert evaluate(Ident("x", is_bind_marker=True), env) == "x"
    assert evaluate(Ident("unbound", is_bind_marker=True), env) == "unbound"


def test_array_evaluates_items_in_order(env):
    env.define("x", 5)
    expr = Array((Number(1), Ident("x"), StringLit("s"), Ident("y", True)))
    assert evaluate(expr, env) == [1, 5, "s", "y"]


def test_array_literal_preserves_order(run):
    assert run("(id [1 2 3])") == [1, 2, 3]
    assert run("(id [])") == []


def test_nil_is_bound(run):
    assert run("(id nil)") is Nil

# -----------------------------------------------------
# Function calls
# -----------------------------------------------------

def test_simple_call(run):
    assert run("(plus 1 2)") == 3


def test_nested_calls(run):
    assert run("(plus 1 (times 2 (plus 3 4)) (minus 10 6))") == 19


def test_call_of_unbound_name(run):
    with pytest.raises(UnboundNameError):
        run("(nosuch 1)")


def test_call_of_non_callable(run, env):
    env.define("x", 3)
    with pytest.raises(TypeMismatchError):
        run("(x 1)")


def test_macro_called_as_function_is_rejected(run):
    with pytest.raises(TypeMismatchError, match="macro"):
        run("(let x 1)")


def test_function_called_as_macro_is_rejected(run):
    with pytest.raises(TypeMismatchError, match="not a macro"):
        run("(:plus 1 2)")


def test_arguments_are_evaluated_left_to_right(run):
    assert run("(plus (:let @a 1) (:let @a (times a 10)) a)") == 21


def test_arguments_are_evaluated_before_dispatch(run):
    # an error in any argument stops the call before the callee runs
    with pytest.raises(UnboundNameError):
        run("(id (plus 1 missing))")


def test_native_function_values_can_be_rebound(run):
    run("(:let @add plus)")
    assert run("(add 2 3)") == 5


def test_native_values_are_enumerated(env):
    assert env.lookup("plus") == NativeFunction(FunctionOp.PLUS)
    assert env.lookup("scope") == NativeMacro(MacroOp.SCOPE)

# -----------------------------------------------------
# User functions
# -----------------------------------------------------

def test_user_function_call(run):
    run("(:def f (x) (plus x 1))")
    assert run("(f 5)") == 6


def test_user_function_value(run):
    fn = run("(:def add (a b) (plus a b))")
    assert fn == UserFunction(("a", "b"), Call("plus", (Ident("a"), Ident("b"))))
    assert run("(add 2 3)") == 5


def test_user_function_with_array_parameters(run):
    run("(:def three [] 3)")
    run("(:def sub [a b] (minus a b))")
    assert run("(three)") == 3
    assert run("(sub 10 4)") == 6


def test_parameters_shadow_outer_names(run):
    run("(:let @x 100)")
    run("(:def f (x) (plus x 1))")
    assert run("(f 1)") == 2
    assert run("(id x)") == 100


def test_call_frame_does_not_leak_bindings(run, env):
    run("(:def f (x) (:let @local (times x 2)))")
    assert run("(f 4)") == 8
    assert "local" not in env
    assert "x" not in env


def test_surplus_arguments_are_ignored(run):
    run("(:def f (x) x)")
    assert run("(f 1 2 3)") == 1


def test_missing_argument_is_unbound(run):
    run("(:def f (x y) y)")
    with pytest.raises(UnboundNameError):
        run("(f 1)")


def test_recursion_through_user_functions(run):
    run("(:def twice (f x) (f (f x)))")
    run("(:def inc (n) (plus n 1))")
    assert run("(twice inc 5)") == 7


def test_free_names_resolve_at_the_call_site(run):
    # Call frames link to the caller's environment, so a free name in the
    # body sees the caller's binding, not the one visible at definition.
    run("(:let @y 1)")
    run("(:def addy (x) (plus x y))")
    assert run("(addy 10)") == 11
    assert run("(:scope (:let @y 100) (addy 10))") == 110


def test_free_name_bound_only_at_call_site(run):
    run("(:def gety [] y)")
    with pytest.raises(UnboundNameError):
        run("(gety)")
    assert run("(:scope (:let @y 7) (gety))") == 7


def test_caller_parameters_visible_in_callee(run):
    run("(:def inner [] secret)")
    run("(:def outer (secret) (inner))")
    assert run("(outer 9)") == 9


def test_function_body_is_not_mutated_by_calls(run, env):
    fn = run("(:def f (x) (:scope (:let @x (plus x 1)) x))")
    body = fn.body
    assert run("(f 1)") == 2
    assert run("(f 1)") == 2
    assert env.lookup("f").body is body


def test_unknown_node_is_rejected(env):
    with pytest.raises(TypeMismatchError):
        evaluate(object(), env)
