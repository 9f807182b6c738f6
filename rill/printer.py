"""Textual rendering of Rill values, with optional ANSI colouring for the REPL."""

from __future__ import annotations

from rill import Value
from rill.types.nil import NilType
from rill.types.values import NativeFunction, NativeMacro, UserFunction, is_number

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_NUMBER = "\033[94m"
COLOR_STRING = "\033[92m"
COLOR_NIL = "\033[90m"
COLOR_CALLABLE = "\033[95m"
COLOR_ERROR = "\033[91m"


def render(value: Value) -> str:
    """
    Render a value the way the REPL prints it:
      numbers  -> decimal
      strings  -> double-quoted, no escaping
      arrays   -> [a b c]
      nil      -> nil
      callables are printed as placeholders, e.g. <native function plus>
    """
    if isinstance(value, NilType):
        return "nil"
    if is_number(value):
        return str(value)
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, list):
        return "[" + " ".join(render(item) for item in value) + "]"
    if isinstance(value, (NativeFunction, NativeMacro, UserFunction)):
        return str(value)
    return repr(value)


def colorize(value: Value) -> str:
    """Like `render`, wrapping each atom in an ANSI colour."""
    if isinstance(value, list):
        return "[" + " ".join(colorize(item) for item in value) + "]"
    text = render(value)
    if isinstance(value, NilType):
        return f"{COLOR_NIL}{text}{RESET}"
    if is_number(value):
        return f"{COLOR_NUMBER}{text}{RESET}"
    if isinstance(value, str):
        return f"{COLOR_STRING}{text}{RESET}"
    return f"{COLOR_CALLABLE}{text}{RESET}"


def colorize_error(message: str) -> str:
    return f"{COLOR_ERROR}{message}{RESET}"
