"""Splitting a stream of lines into complete input units.

A unit is finished when its parentheses balance. Parentheses inside string
literals do not count, and a string may run across line breaks. Text outside
any parentheses is passed through as its own unit so the parser can report
it.
"""

from __future__ import annotations


class UnitReader:
    def __init__(self):
        self._parts: list[str] = []
        self._depth = 0
        self._in_string = False

    @property
    def pending(self) -> bool:
        """True while a started unit is waiting for more lines."""
        return bool(self._parts)

    def reset(self) -> None:
        self._parts.clear()
        self._depth = 0
        self._in_string = False

    def _finish(self, tail: str) -> str:
        self._parts.append(tail)
        unit = "\n".join(self._parts).strip()
        self.reset()
        return unit

    def feed(self, line: str) -> list[str]:
        """Consume one line; return the units it completes, in order."""
        units: list[str] = []
        start = 0
        for i, ch in enumerate(line):
            if self._in_string:
                if ch == '"':
                    self._in_string = False
                continue
            if ch == '"':
                self._in_string = True
            elif ch == "(":
                self._depth += 1
            elif ch == ")":
                self._depth -= 1
                if self._depth <= 0:
                    units.append(self._finish(line[start:i + 1]))
                    start = i + 1
        rest = line[start:]
        if self._depth > 0 or self._in_string:
            self._parts.append(rest)
        elif rest.strip():
            units.append(rest.strip())
        return units
