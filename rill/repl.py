"""Interactive read-eval-print loop and command-line entry point.

    rill                  interactive session
    rill FILE             evaluate every unit in FILE, printing each value
    rill --check FILE     run FILE as a transcript and report mismatches
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, TextIO

from rill import __version__
from rill.config import Settings, load_settings
from rill.errors import RillError
from rill.interpreter import Interpreter
from rill.printer import colorize, colorize_error, render
from rill.reader.units import UnitReader
from rill.transcript import parse_transcript, run_transcript
from rill.types.expr import Expr

_logger = logging.getLogger("rill.repl")


class Repl:
    """Reads units from a line stream and prints each result."""

    def __init__(
        self,
        interp: Interpreter,
        settings: Settings,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.interp = interp
        self.settings = settings
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.reader = UnitReader()
        self.color = settings.color and self.stdout.isatty()
        if settings.debug:
            interp.trace = self._print_tree

    def _print_tree(self, expr: Expr) -> None:
        self.stdout.write(f"AST: {expr!r}\n")

    def rep(self, unit: str) -> tuple[str, bool]:
        """Evaluate one unit; return its printed form and whether it succeeded."""
        try:
            value = self.interp.eval(unit)
        except RillError as err:
            _logger.info("%s: %s", type(err).__name__, err)
            message = f"ERROR: {err}"
            return (colorize_error(message) if self.color else message), False
        return (colorize(value) if self.color else render(value)), True

    def run(self) -> None:
        while True:
            prompt = self.settings.continuation_prompt if self.reader.pending else self.settings.prompt
            self.stdout.write(prompt)
            self.stdout.flush()
            try:
                line = self.stdin.readline()
            except KeyboardInterrupt:
                # drop the unit being typed, keep the session
                self.reader.reset()
                self.stdout.write("\n")
                continue
            if not line:
                self.stdout.write("\n")
                break
            for unit in self.reader.feed(line.rstrip("\r\n")):
                output, _ = self.rep(unit)
                self.stdout.write(output + "\n")


def run_file(path: str, interp: Interpreter, stdout: Optional[TextIO] = None) -> int:
    """Evaluate every unit in a file; exit status is 1 if any unit failed."""
    stdout = stdout if stdout is not None else sys.stdout
    repl = Repl(interp, Settings(color=False), stdout=stdout)
    status = 0
    with open(path, encoding="utf-8") as f:
        for line in f:
            for unit in repl.reader.feed(line.rstrip("\r\n")):
                output, ok = repl.rep(unit)
                stdout.write(output + "\n")
                if not ok:
                    status = 1
    if repl.reader.pending:
        stdout.write("ERROR: unexpected end of file inside an unbalanced unit\n")
        status = 1
    return status


def check_file(path: str, interp: Interpreter, stdout: Optional[TextIO] = None) -> int:
    stdout = stdout if stdout is not None else sys.stdout
    with open(path, encoding="utf-8") as f:
        try:
            cases = parse_transcript(f)
        except ValueError as err:
            stdout.write(f"{path}: {err}\n")
            return 2
    mismatches = run_transcript(cases, interp)
    for mismatch in mismatches:
        stdout.write(f"{path}: {mismatch}\n")
    checked = sum(1 for case in cases if case.expected is not None)
    stdout.write(f"{checked - len(mismatches)}/{checked} expectations passed\n")
    return 1 if mismatches else 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rill", description="Rill interpreter")
    parser.add_argument("file", nargs="?", help="file to evaluate (if empty, starts an interactive session)")
    parser.add_argument("--check", action="store_true", help="treat FILE as a transcript of inputs and ;=> expectations")
    parser.add_argument("--debug", action="store_true", default=None, help="print each parsed tree before its value")
    parser.add_argument("--log-level", help="level for the rill logger (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--prompt", help="interactive prompt")
    parser.add_argument("--no-color", dest="color", action="store_false", default=None, help="disable ANSI colours")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    try:
        settings = load_settings()
    except ValueError as err:
        print(f"rill: {err}", file=sys.stderr)
        return 2
    if args.debug is not None:
        settings.debug = args.debug
    if args.log_level:
        settings.log_level = args.log_level.upper()
    if args.prompt is not None:
        settings.prompt = args.prompt
    if args.color is not None:
        settings.color = args.color

    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("rill").setLevel(settings.log_level)
    if settings.recursion_limit:
        sys.setrecursionlimit(settings.recursion_limit)

    interp = Interpreter()
    if args.check:
        if not args.file:
            print("rill: --check requires a FILE", file=sys.stderr)
            return 2
        return check_file(args.file, interp)
    if args.file:
        if settings.debug:
            interp.trace = lambda expr: print(f"AST: {expr!r}")
        return run_file(args.file, interp)

    Repl(interp, settings).run()
    return 0
