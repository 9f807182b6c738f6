# Core type aliases for Rill's data model.
# Syntax is an immutable tree of nodes (rill.types.expr). Runtime values use
# plain Python types where one fits (int, str, list) plus the Nil singleton
# and the callable wrappers in rill.types.values.
#
# Naming guidance:
# - Expr:  use in reader/parser/macro code to denote syntax.
# - Value: use in evaluator/runtime code to denote evaluated values.

from typing import Any, Callable

# Runtime value alias
Value = Any

# Evaluator function type handed to native macros
EvaluatorFn = Callable[..., Value]

__version__ = "0.1.0"
