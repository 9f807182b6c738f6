import pytest

from rill.printer import COLOR_ERROR, COLOR_NUMBER, RESET, colorize, colorize_error, render
from rill.types.expr import Call, Ident
from rill.types.nil import Nil
from rill.types.values import FunctionOp, MacroOp, NativeFunction, NativeMacro, UserFunction


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, "0"),
        (42, "42"),
        (-7, "-7"),
        ("hello", '"hello"'),
        ("", '""'),
        ([], "[]"),
        ([1, "a", [2, 3], Nil], '[1 "a" [2 3] nil]'),
        (Nil, "nil"),
        (NativeFunction(FunctionOp.PLUS), "<native function plus>"),
        (NativeMacro(MacroOp.LET), "<native macro let>"),
        (UserFunction(("x", "y"), Call("plus", (Ident("x"), Ident("y")))), "<function (x y)>"),
        (UserFunction((), Call("id", ())), "<function ()>"),
    ]
)
def test_render(value, expected):
    assert render(value) == expected


def test_colorize_wraps_atoms():
    assert colorize(5) == f"{COLOR_NUMBER}5{RESET}"
    assert colorize([5]) == f"[{COLOR_NUMBER}5{RESET}]"


def test_colorize_error():
    assert colorize_error("ERROR: x") == f"{COLOR_ERROR}ERROR: x{RESET}"
