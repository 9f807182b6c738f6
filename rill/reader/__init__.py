"""Lexer and parser turning source text into expression trees."""

from rill.reader.lexer import Token, TokenKind, lex, next_token
from rill.reader.parser import TokenStream, parse, parse_all
from rill.reader.units import UnitReader

__all__ = ["Token", "TokenKind", "lex", "next_token", "TokenStream", "parse", "parse_all", "UnitReader"]
