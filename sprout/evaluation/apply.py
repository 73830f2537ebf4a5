"""Application engine for Sprout.

Both kinds of callable are applied here:
- User Functions run in a snapshot of the caller's environment. Arguments are
  evaluated in the caller's environment and bound positionally; a count
  mismatch is logged and only the overlapping prefix is bound.
- InbuiltFuncs receive every argument evaluated eagerly, left to right.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from sprout import Value
from sprout.errors import SproutTypeError
from sprout.reader.printer import format_value
from sprout.types.ast import Ast
from sprout.types.environment import Environment
from sprout.types.values import Function, InbuiltFunc, Void

logger = logging.getLogger(__name__)

EvaluatorFn = Callable[[Ast, Environment], Value]


def apply_function(
    fn: Function,
    arguments: Sequence[Ast],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Apply a user Function to unevaluated argument expressions.

    The scope is copied before any argument is evaluated, so a define made by
    an argument expression lands in the caller's env only.
    """
    new_scope = env.snapshot()

    if len(arguments) != len(fn.params):
        logger.warning(
            "Called function with incorrect number of arguments (expected %d, got %d)",
            len(fn.params),
            len(arguments),
        )

    for name, arg in zip(fn.params, arguments):
        new_scope.define(name, evaluate_fn(arg, env))

    out = Void
    for stmt in fn.body:
        out = evaluate_fn(stmt, new_scope)
    return out


def apply_native(
    fn: InbuiltFunc,
    arguments: Sequence[Ast],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    args = tuple(evaluate_fn(arg, env) for arg in arguments)
    return fn(args)


def apply(
    head: Value,
    arguments: Sequence[Ast],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Apply either a Function or an InbuiltFunc; anything else is fatal."""
    if isinstance(head, Function):
        return apply_function(head, arguments, env, evaluate_fn)
    elif isinstance(head, InbuiltFunc):
        return apply_native(head, arguments, env, evaluate_fn)
    else:
        raise SproutTypeError(f"Attempted to call a non-function: {format_value(head)}")
