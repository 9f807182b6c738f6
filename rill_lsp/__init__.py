"""Rill Language Server package.

This package provides:
- A pygls-based Language Server for Rill source files.
- A document indexer that runs the real lexer and parser over a buffer to
  find syntax errors and top-level bindings, without evaluating anything.
"""

__all__ = [
    "server",
    "indexer",
]
