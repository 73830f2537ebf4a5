"""Host natives for the Sprout runtime environment.

The language defines no primitives of its own; these are ordinary
InbuiltFunc bindings a host may register. Void stands for true and FALSE for
false, as in Scheme where everything but #f is true.
"""
from __future__ import annotations

import logging
from typing import Sequence

from sprout import Value
from sprout.errors import SproutArityError
from sprout.types.environment import Environment
from sprout.types.values import FALSE, U64_MAX, FalseType, Void, is_int, values_equal

logger = logging.getLogger(__name__)


def add(args: Sequence[Value]) -> Value:
    """Sum of the Int arguments, wrapping at 64 bits; other values are skipped."""
    out = 0
    for v in args:
        if is_int(v):
            out = (out + v) & U64_MAX
        else:
            logger.warning("Tried to add a non-int")
    return out


def eq(args: Sequence[Value]) -> Value:
    """Void if every argument equals the first (or there are fewer than two), else FALSE."""
    if not args:
        return Void
    first = args[0]
    for other in args[1:]:
        if not values_equal(other, first):
            return FALSE
    return Void


def if_(args: Sequence[Value]) -> Value:
    """(if cond then [else]) with already-evaluated branches.

    Branches are not lazy; pass functions and call the result to delay work.
    """
    if not args:
        raise SproutArityError("No condition for if")
    if len(args) < 2:
        raise SproutArityError("No body for if")
    if len(args) > 3:
        raise SproutArityError("Too many arguments supplied to `if`")
    if isinstance(args[0], FalseType):
        return args[2] if len(args) == 3 else Void
    return args[1]


NATIVES = {
    "add": add,
    "eq": eq,
    "if": if_,
}


def register(env: Environment) -> None:
    """Register all host natives into the given environment."""
    for name, fn in NATIVES.items():
        env.bind_native(name, fn)
