from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

from rill import Value
from rill.builtin.env_builtin import register
from rill.builtin.macro_builtin import register as register_macros
from rill.errors import RecursionLimitError, RillError
from rill.evaluation.evaluator import evaluate
from rill.printer import render
from rill.reader.parser import parse, parse_all
from rill.types.environment import Environment
from rill.types.expr import Expr

_logger = logging.getLogger("rill.interpreter")


class Interpreter:
    """
    Parses and evaluates Rill units against one root environment.

    The root environment is created here and populated with the native
    bindings; it accumulates `let`/`def` bindings across calls. Each unit is
    evaluated transactionally: if it fails, the root frame is put back the
    way it was before the unit started.
    """

    def __init__(self, trace: Optional[Callable[[Expr], None]] = None):
        self.env: Environment = Environment()
        register(self.env)
        register_macros(self.env)
        # Called with each parsed tree before it is evaluated
        self.trace = trace

    def parse(self, code: str) -> Expr:
        try:
            return parse(code)
        except RecursionError:
            raise RecursionLimitError("input nested too deeply to parse") from None

    def parse_all(self, code: str) -> Iterator[Expr]:
        try:
            yield from parse_all(code)
        except RecursionError:
            raise RecursionLimitError("input nested too deeply to parse") from None

    def eval_expr(self, expr: Expr) -> Value:
        if self.trace is not None:
            self.trace(expr)
        saved = self.env.snapshot()
        try:
            return evaluate(expr, self.env)
        except RecursionError:
            self.env.restore(saved)
            raise RecursionLimitError("maximum recursion depth exceeded") from None
        except RillError:
            self.env.restore(saved)
            raise

    def eval(self, code: str) -> Value:
        """Parse and evaluate exactly one unit."""
        return self.eval_expr(self.parse(code))

    def eval_all(self, code: str) -> list[Value]:
        """Evaluate every unit in `code` in order, stopping at the first error."""
        return [self.eval_expr(expr) for expr in self.parse_all(code)]

    def rep(self, code: str) -> str:
        """Read, evaluate and print one unit; errors print as `ERROR: ...`."""
        try:
            value = self.eval(code)
        except RillError as err:
            _logger.info("%s: %s", type(err).__name__, err)
            return f"ERROR: {err}"
        return render(value)
