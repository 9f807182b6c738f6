"""Transcript checks.

A transcript interleaves input with the output each input should print:

    ;; comment
    (:let @x 2)
    (plus x 3)
    ;=>5

Lines starting with `;=>` hold the expected rendering of the most recent
complete unit; other lines starting with `;` are comments. Units with no
expectation are still evaluated, in order, so they can set up bindings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from rill.interpreter import Interpreter
from rill.reader.units import UnitReader

EXPECT_PREFIX = ";=>"
# An expectation of exactly "ERROR" accepts any error output
ANY_ERROR = "ERROR"


@dataclass
class TranscriptCase:
    source: str
    line: int
    expected: Optional[str] = None


@dataclass
class Mismatch:
    case: TranscriptCase
    actual: str

    def __str__(self) -> str:
        return (
            f"line {self.case.line}: {self.case.source}\n"
            f"  expected: {self.case.expected}\n"
            f"  actual:   {self.actual}"
        )


def parse_transcript(lines: Iterable[str]) -> list[TranscriptCase]:
    cases: list[TranscriptCase] = []
    reader = UnitReader()
    for line_num, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if line.startswith(EXPECT_PREFIX):
            if not cases or cases[-1].expected is not None:
                raise ValueError(f"line {line_num}: expectation without a preceding input")
            cases[-1].expected = line[len(EXPECT_PREFIX):].strip()
        elif line.startswith(";"):
            continue
        else:
            for unit in reader.feed(line):
                cases.append(TranscriptCase(source=unit, line=line_num))
    if reader.pending:
        raise ValueError("transcript ends inside an unbalanced unit")
    return cases


def _matches(expected: str, actual: str) -> bool:
    if expected == ANY_ERROR:
        return actual.startswith("ERROR:")
    return actual == expected


def run_transcript(cases: Iterable[TranscriptCase], interp: Optional[Interpreter] = None) -> list[Mismatch]:
    interp = interp or Interpreter()
    mismatches: list[Mismatch] = []
    for case in cases:
        actual = interp.rep(case.source)
        if case.expected is not None and not _matches(case.expected, actual):
            mismatches.append(Mismatch(case, actual))
    return mismatches
