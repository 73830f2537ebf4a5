"""Core evaluator for the Sprout interpreter.

A plain recursive reduction over the AST. There is no trampoline: deep
recursion in an evaluated program uses the Python stack and ends in a
RecursionError, which is left to propagate.
"""

from __future__ import annotations

from sprout import Value
from sprout.evaluation.apply import apply
from sprout.types.ast import Ast, Call, Define, Literal, Variable
from sprout.types.environment import Environment
from sprout.types.values import Void


def evaluate(expr: Ast, env: Environment) -> Value:
    """Reduce `expr` to a value, possibly defining names in `env`."""
    match expr:
        case Literal(value):
            return value

        case Variable(name):
            return env.lookup(name)

        case Call(callee, args):
            head = evaluate(callee, env)
            return apply(head, args, env, evaluate)

        case Define(name, value_expr):
            value = evaluate(value_expr, env)
            env.define(name, value)
            return Void

    raise TypeError(f"Cannot evaluate non-AST object {expr!r}")
