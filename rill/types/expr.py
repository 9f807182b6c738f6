"""Expression tree produced by the parser.

Nodes are frozen dataclasses holding tuples, so a tree is never mutated once
built. Evaluation reads the tree and never rewrites it; a user-defined
function shares its body by reference only.

`str()` of a node renders it back as source text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Number:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class StringLit:
    text: str

    def __str__(self) -> str:
        return f'"{self.text}"'


@dataclass(frozen=True)
class Ident:
    """An identifier reference.

    With `is_bind_marker` set (source `@name`) the identifier evaluates to its
    own text instead of the value bound to it.
    """

    name: str
    is_bind_marker: bool = False

    def __str__(self) -> str:
        return f"@{self.name}" if self.is_bind_marker else self.name


@dataclass(frozen=True)
class Array:
    items: tuple[Expr, ...] = ()

    def __str__(self) -> str:
        return "[" + " ".join(str(item) for item in self.items) + "]"


@dataclass(frozen=True)
class Call:
    """A parenthesised call; `is_macro` comes from the `:` sigil on the callee."""

    func_name: str
    args: tuple[Expr, ...] = ()
    is_macro: bool = False

    def __str__(self) -> str:
        head = f":{self.func_name}" if self.is_macro else self.func_name
        return "(" + " ".join([head] + [str(arg) for arg in self.args]) + ")"


Expr = Union[Number, StringLit, Ident, Array, Call]
