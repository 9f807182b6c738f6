"""
  Rill Parser

Recursive descent with one token of lookahead. A unit of input is exactly one
parenthesised call:

    unit  := "(" call
    call  := [":"] IDENT arg* ")"
    arg   := "(" call | "[" array | STRING | NUMBER | IDENT | "@" IDENT
    array := (STRING | NUMBER | IDENT | "@" IDENT)* "]"

Any malformed input aborts the whole parse with a ParseError; no partial
tree is produced.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterator, Optional

from rill.errors import ParseError
from rill.reader.lexer import Token, TokenKind, lex
from rill.types.expr import Array, Call, Expr, Ident, Number, StringLit

_logger = logging.getLogger("rill.reader.parser")


class TokenStream:
    def __init__(self, source: str):
        self.source = source
        self.tokens: Iterator[Token] = lex(source)
        self.lookahead: Optional[Token] = None

    def peek(self) -> Optional[Token]:
        if self.lookahead is None:
            self.lookahead = next(self.tokens, None)
        return self.lookahead

    def advance(self) -> Optional[Token]:
        token = self.peek()
        self.lookahead = None
        return token

    def _end_position(self) -> int:
        return len(self.source)

    def _unexpected(self, token: Optional[Token], expected: str) -> ParseError:
        if token is None:
            return ParseError(f"unexpected end of input, expected {expected}", self._end_position())
        return ParseError(f"unexpected {_describe(token)}, expected {expected}", token.position)

    def parse_unit(self) -> Call:
        """Parse one top-level call, consuming its opening parenthesis."""
        token = self.advance()
        if token is None:
            raise ParseError("empty input, expected '('", 0)
        if token.kind is not TokenKind.LPAREN:
            raise self._unexpected(token, "'('")
        return self.parse_call(token)

    def parse_call(self, open_paren: Token) -> Call:
        """Parse the rest of a call after its '('."""
        is_macro = False
        token = self.advance()
        if token is not None and token.kind is TokenKind.COLON:
            is_macro = True
            token = self.advance()
        if token is None or token.kind is not TokenKind.IDENT:
            if token is not None and token.kind is TokenKind.RPAREN and not is_macro:
                raise ParseError("empty call, a callee name is required", open_paren.position)
            raise self._unexpected(token, "a callee name")
        name = sys.intern(token.value)

        args: list[Expr] = []
        while True:
            token = self.advance()
            if token is None:
                raise ParseError("unterminated call, missing ')'", open_paren.position)
            if token.kind is TokenKind.RPAREN:
                break
            if token.kind is TokenKind.LPAREN:
                args.append(self.parse_call(token))
            elif token.kind is TokenKind.LSQUARE:
                args.append(self.parse_array(token))
            else:
                args.append(self._parse_leaf(token, "an argument or ')'"))
        return Call(name, tuple(args), is_macro)

    def parse_array(self, open_square: Token) -> Array:
        """Parse the rest of an array literal after its '['."""
        items: list[Expr] = []
        while True:
            token = self.advance()
            if token is None:
                raise ParseError("unterminated array, missing ']'", open_square.position)
            if token.kind is TokenKind.RSQUARE:
                return Array(tuple(items))
            items.append(self._parse_leaf(token, "an array item or ']'"))

    def _parse_leaf(self, token: Token, expected: str) -> Expr:
        if token.kind is TokenKind.NUMBER:
            return Number(token.value)
        if token.kind is TokenKind.STRING:
            return StringLit(token.value)
        if token.kind is TokenKind.IDENT:
            return Ident(sys.intern(token.value))
        if token.kind is TokenKind.AT:
            name = self.advance()
            if name is None or name.kind is not TokenKind.IDENT:
                raise self._unexpected(name, "an identifier after '@'")
            return Ident(sys.intern(name.value), is_bind_marker=True)
        raise self._unexpected(token, expected)

    def at_end(self) -> bool:
        return self.peek() is None

    def parse_all(self) -> Iterator[Call]:
        while not self.at_end():
            yield self.parse_unit()


def _describe(token: Token) -> str:
    if token.kind is TokenKind.STRING:
        return f'string "{token.value}"'
    if token.kind in (TokenKind.IDENT, TokenKind.NUMBER):
        return f"{token.kind.value} {token.value}"
    return f"'{token.value}'"


def parse(source: str) -> Call:
    """Parse exactly one top-level call; only whitespace may follow it."""
    stream = TokenStream(source)
    expr = stream.parse_unit()
    trailing = stream.peek()
    if trailing is not None:
        raise ParseError(f"unexpected trailing input: {_describe(trailing)}", trailing.position)
    if _logger.isEnabledFor(logging.DEBUG):
        _logger.debug("parsed %s", expr)
    return expr


def parse_all(source: str) -> Iterator[Call]:
    """Parse every top-level call in `source`, in order."""
    return TokenStream(source).parse_all()
