"""Runtime environment for Rill.

An Environment stores bindings of names to evaluated values and supports
nested scopes via an `outer` link. Writes always land in the innermost frame;
lookups walk outward until the root, which has no outer frame.

Child frames are created with `child()`, a context manager that discards the
frame when the scope or call that opened it finishes, so frames live in strict
stack order and an outer frame always outlives its children.
"""

from __future__ import annotations

from contextlib import contextmanager
from io import StringIO
from typing import Iterator, Mapping, Optional

from rill import Value
from rill.errors import UnboundNameError


class Environment:
    """Chained mapping from names to values."""

    __slots__ = ("vars", "outer", "_discarded")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Value] = {}
        self.outer: Environment | None = outer
        self._discarded = False

    def define(self, name: str, value: Value) -> Optional[Value]:
        """Bind `name` to `value` in this frame.

        Returns the value previously bound to `name` in this frame, or None if
        there was none. Outer frames are never touched.
        """
        if self._discarded:
            raise RuntimeError(f"cannot define {name!r} in a discarded frame")
        previous = self.vars.get(name)
        self.vars[name] = value
        return previous

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: str) -> Value:
        """Look up the value bound to `name`, innermost frame first.

        Raises UnboundNameError if no frame binds it.
        """
        env = self.find(name)
        if env is None:
            raise UnboundNameError(f"unbound name: {name}")
        return env.vars[name]

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    @contextmanager
    def child(self) -> Iterator[Environment]:
        """Open a fresh frame whose outer link is this one."""
        frame = Environment(outer=self)
        try:
            yield frame
        finally:
            frame.discard()

    def discard(self) -> None:
        self.vars.clear()
        self.outer = None
        self._discarded = True

    @property
    def depth(self) -> int:
        """Number of frames between this one and the root."""
        depth = 0
        env = self.outer
        while env is not None:
            depth += 1
            env = env.outer
        return depth

    def update(self, mapping: Mapping[str, Value]) -> None:
        """Bulk-define a mapping of name -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def snapshot(self) -> dict[str, Value]:
        """Copy of this frame's bindings, for `restore`."""
        return dict(self.vars)

    def restore(self, snapshot: Mapping[str, Value]) -> None:
        self.vars = dict(snapshot)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            with StringIO() as buffer:
                env._write_vars(buffer)
                chain.append(buffer.getvalue())
            env = env.outer
        return "<Environment chain: " + " -> ".join(chain) + ">"
