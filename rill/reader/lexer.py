"""
  Rill Lexer

- Pull-based: `next_token(text, pos)` scans exactly one token; `lex(text)` is a
  lazy generator over it, so no token buffer is kept.
- Tokens:
    ( ) [ ]        structural
    :              macro-call sigil, before a callee name
    @              bind-name sigil, before an identifier argument
    "..."          string literal, no escape processing
    123, -45       decimal integer
    abc1           identifier: a letter followed by letters and digits
- Spaces, tabs and line breaks between tokens are skipped. Any other
  character is a fatal LexError; the lexer does not resynchronise.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Union

from rill.errors import LexError

_logger = logging.getLogger("rill.reader.lexer")


class TokenKind(Enum):
    LPAREN = "("
    RPAREN = ")"
    LSQUARE = "["
    RSQUARE = "]"
    COLON = ":"
    AT = "@"
    STRING = "string"
    IDENT = "ident"
    NUMBER = "number"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Union[str, int]
    position: int = 0


WHITESPACE_RE = re.compile(r"[ \t\r\n]*")
NUMBER_RE = re.compile(r"-?[0-9]+")
IDENT_RE = re.compile(r"[A-Za-z][A-Za-z0-9]*")

SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "[": TokenKind.LSQUARE,
    "]": TokenKind.RSQUARE,
    ":": TokenKind.COLON,
    "@": TokenKind.AT,
}


def next_token(source: str, pos: int) -> Optional[tuple[Token, int]]:
    """Scan one token starting at `pos`.

    Returns (token, position after it), or None at end of input.
    """
    pos = WHITESPACE_RE.match(source, pos).end()
    if pos >= len(source):
        return None

    current_char = source[pos]

    kind = SINGLE_CHAR_TOKENS.get(current_char)
    if kind is not None:
        return Token(kind, current_char, pos), pos + 1

    if current_char == '"':
        end = source.find('"', pos + 1)
        if end == -1:
            raise LexError("unterminated string literal", pos)
        return Token(TokenKind.STRING, source[pos + 1:end], pos), end + 1

    m = NUMBER_RE.match(source, pos)
    if m:
        return Token(TokenKind.NUMBER, int(m.group()), pos), m.end()

    m = IDENT_RE.match(source, pos)
    if m:
        return Token(TokenKind.IDENT, m.group(), pos), m.end()

    raise LexError(f"unexpected character {current_char!r}", pos)


def lex(source: str) -> Iterator[Token]:
    """Token generator over the whole of `source`."""
    pos = 0
    while (scanned := next_token(source, pos)) is not None:
        token, pos = scanned
        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug("token %s %r at %d", token.kind.name, token.value, token.position)
        yield token
