"""Runtime values for Sprout.

Ints are plain Python ints kept in the unsigned 64-bit range. The remaining
variants are small classes: two singletons (Void, FALSE) and two callables
(Function, InbuiltFunc). Callables never compare equal to anything, not even
themselves; the `eq` native relies on that.
"""

from __future__ import annotations

from typing import Sequence

from sprout import Identifier, NativeFn, Value

U64_MAX = (1 << 64) - 1


class VoidType:
    __slots__ = ()

    def __repr__(self): return "Void"
    def __bool__(self): return True

    def __eq__(self, other):
        return isinstance(other, VoidType)

    def __hash__(self):
        return hash(VoidType)


class FalseType:
    __slots__ = ()

    def __repr__(self): return "FALSE"
    def __bool__(self): return False

    def __eq__(self, other):
        return isinstance(other, FalseType)

    def __hash__(self):
        return hash(FalseType)


Void = VoidType()
FALSE = FalseType()


class Function:
    """A user function: parameter keys plus body statements.

    Both tuples are shared by every copy of the value, so passing a Function
    around or binding it in a snapshot never copies code.
    """

    __slots__ = ("params", "body")

    def __init__(self, params: Sequence[Identifier], body: Sequence):
        self.params: tuple[Identifier, ...] = tuple(params)
        self.body: tuple = tuple(body)

    def __eq__(self, other):
        return False

    __hash__ = object.__hash__

    def __repr__(self):
        return f"Function(params={len(self.params)}, body={len(self.body)})"


class InbuiltFunc:
    """A host-provided native callable."""

    __slots__ = ("fn", "name")

    def __init__(self, fn: NativeFn, name: str | None = None):
        self.fn = fn
        self.name = name or getattr(fn, "__name__", "native")

    def __call__(self, args: Sequence[Value]) -> Value:
        return self.fn(args)

    def __eq__(self, other):
        return False

    __hash__ = object.__hash__

    def __repr__(self):
        return f"InbuiltFunc({self.name})"


def is_int(value: Value) -> bool:
    # bool is an int subclass but never a Sprout value
    return isinstance(value, int) and not isinstance(value, bool)


def is_callable(value: Value) -> bool:
    return isinstance(value, (Function, InbuiltFunc))


def values_equal(a: Value, b: Value) -> bool:
    """Structural equality: defined for Void, FALSE and Int only."""
    if is_callable(a) or is_callable(b):
        return False
    if is_int(a) and is_int(b):
        return a == b
    if isinstance(a, VoidType) and isinstance(b, VoidType):
        return True
    if isinstance(a, FalseType) and isinstance(b, FalseType):
        return True
    return False
