from __future__ import annotations


class RillError(Exception):
    """ Base class for all Rill errors"""
    pass


class RillSyntaxError(RillError):
    """ Raised when source text cannot be turned into an expression tree"""

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at offset {self.position})"


class LexError(RillSyntaxError):
    """ Raised on an unrecognised character or an unterminated string"""


class ParseError(RillSyntaxError):
    """ Raised on an unexpected token or a missing delimiter"""


class EvaluationError(RillError):
    """ Base class for errors raised while reducing an expression"""


class UnboundNameError(EvaluationError):
    """ Raised when a name is not bound in any enclosing frame"""


class TypeMismatchError(EvaluationError):
    """ Raised when a value has the wrong kind for an operation"""


class ArityError(EvaluationError):
    """ Raised when a native operation receives the wrong number of arguments"""


class DivisionByZeroError(EvaluationError):
    """ Raised when dividing by zero"""


class RecursionLimitError(EvaluationError):
    """ Raised when nesting exceeds the host call stack"""
