"""
Static analysis of Rill documents for the language server.

We never evaluate a buffer. Two passes over the text:
- the parser, to report the first LexError/ParseError with its position;
- a token scan, to collect top-level bindings made with (:let ...) and
  (:def ...), for document symbols and completion.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from rill.errors import LexError, RillSyntaxError
from rill.reader.lexer import Token, TokenKind, lex
from rill.reader.parser import parse_all


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int


@dataclass
class SyntaxProblem:
    message: str
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    problems: List[SyntaxProblem] = field(default_factory=list)


def position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _check_syntax(text: str, idx: DocumentIndex) -> None:
    try:
        for _ in parse_all(text):
            pass
    except RillSyntaxError as err:
        offset = err.position if err.position is not None else 0
        line, col = position_from_offset(text, offset)
        idx.problems.append(SyntaxProblem(message=err.message, line=line, col=col))
    except RecursionError:
        idx.problems.append(SyntaxProblem(message="input nested too deeply", line=0, col=0))


def _scan_tokens(text: str) -> List[Token]:
    tokens: List[Token] = []
    try:
        for token in lex(text):
            tokens.append(token)
    except LexError:
        # keep what was scanned before the bad character;
        # _check_syntax reports the error itself
        pass
    return tokens


def _binding_at(tokens: List[Token], i: int) -> Optional[Tuple[str, Token, str]]:
    """Match `( : let|def [@]name` starting at tokens[i]."""
    if i + 3 >= len(tokens):
        return None
    colon, head = tokens[i + 1], tokens[i + 2]
    if colon.kind is not TokenKind.COLON or head.kind is not TokenKind.IDENT:
        return None
    if head.value not in ("let", "def"):
        return None
    name_index = i + 3
    if tokens[name_index].kind is TokenKind.AT:
        name_index += 1
    if name_index >= len(tokens):
        return None
    name_tok = tokens[name_index]
    if name_tok.kind not in (TokenKind.IDENT, TokenKind.STRING):
        return None
    kind = "var"
    after = name_index + 1
    # (:def name (params) body) or (:def name [params] body)
    if head.value == "def" and after < len(tokens) and tokens[after].kind in (TokenKind.LPAREN, TokenKind.LSQUARE):
        kind = _def_kind(tokens, after)
    return str(name_tok.value), name_tok, kind


def _def_kind(tokens: List[Token], start: int) -> str:
    """A def whose third element starts a second form defines a function."""
    depth = 0
    for j in range(start, len(tokens)):
        kind = tokens[j].kind
        if kind in (TokenKind.LPAREN, TokenKind.LSQUARE):
            depth += 1
        elif kind in (TokenKind.RPAREN, TokenKind.RSQUARE):
            depth -= 1
            if depth == 0:
                following = tokens[j + 1] if j + 1 < len(tokens) else None
                if following is not None and following.kind is not TokenKind.RPAREN:
                    return "function"
                return "var"
    return "var"


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    _check_syntax(text, idx)

    tokens = _scan_tokens(text)
    depth = 0
    for i, tok in enumerate(tokens):
        if tok.kind is TokenKind.LPAREN:
            if depth == 0:
                found = _binding_at(tokens, i)
                if found is not None:
                    name, name_tok, kind = found
                    line, col = position_from_offset(text, name_tok.position)
                    idx.symbols[name] = SymbolDef(name=name, kind=kind, line=line, col=col)
            depth += 1
        elif tok.kind is TokenKind.RPAREN:
            depth = max(depth - 1, 0)
    return idx


# Native signatures for quick hover/completion without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    "plus": "(plus n ...)",
    "minus": "(minus n ...)",
    "times": "(times n ...)",
    "div": "(div n d ...)",
    "id": "(id x)",
    "nil": "nil",
    "let": "(:let @name value)",
    "def": "(:def @name (params) body)",
    "scope": "(:scope form ...)",
}
