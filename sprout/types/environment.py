"""Runtime environment for Sprout.

The Environment is a single flat mapping from identifier keys to values. It has
no `outer` link: entering a user function takes a full snapshot of the caller's
environment, so the body sees the caller's bindings at call time (dynamic
scoping) and its own defines are dropped when the call returns.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Mapping

from sprout import Identifier, NativeFn, Value
from sprout.errors import SproutUnboundSymbol
from sprout.reader.printer import format_value
from sprout.types.symbol import hash_name, spelling
from sprout.types.values import InbuiltFunc


class Environment:
    """Flat mapping from identifier keys to Sprout values."""

    __slots__ = ("vars",)

    def __init__(self, bindings: Environment | Mapping[Identifier, Value] | None = None):
        """Start empty, or copy `bindings` (a mapping or another Environment).

        `Environment(other)` is equivalent to `other.snapshot()`.
        """
        if isinstance(bindings, Environment):
            bindings = bindings.vars
        self.vars: dict[Identifier, Value] = dict(bindings) if bindings else {}

    def define(self, name: Identifier, value: Value) -> None:
        """Bind `name` to `value`, overwriting any existing binding."""
        self.vars[name] = value

    def lookup(self, name: Identifier) -> Value:
        """Return the value bound to `name`.

        Raises SproutUnboundSymbol if there is no binding.
        """
        try:
            return self.vars[name]
        except KeyError:
            raise SproutUnboundSymbol(
                f"Variable does not exist: {spelling(name)}"
            ) from None

    def snapshot(self) -> Environment:
        """Return an independent copy holding the same bindings.

        Values themselves are shared; Function bodies are immutable tuples.
        """
        return Environment(self.vars)

    def update(self, mapping: Mapping[Identifier, Value]) -> None:
        """Bulk-define a mapping of identifier -> value."""
        self.vars.update(mapping)

    # --- Host conveniences ---
    def bind(self, name: str, value: Value) -> Identifier:
        """Hash `name` and bind it; returns the identifier key."""
        ident = hash_name(name)
        self.vars[ident] = value
        return ident

    def bind_native(self, name: str, fn: NativeFn) -> Identifier:
        """Register a Python callable under `name` as an InbuiltFunc."""
        return self.bind(name, InbuiltFunc(fn, name))

    def __contains__(self, name: object) -> bool:
        return name in self.vars

    def __getitem__(self, name: Identifier) -> Value:
        return self.lookup(name)

    def __iter__(self) -> Iterator[Identifier]:
        return iter(self.vars)

    def __len__(self) -> int:
        return len(self.vars)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write the bindings into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{spelling(k)}: {format_value(v)}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment ")
            self._write_vars(buffer)
            buffer.write(">")
            return buffer.getvalue()
