"""Render AST nodes and runtime values back to Sprout source text."""

from __future__ import annotations

from sprout import Value
from sprout.types.ast import Ast, Call, Define, Literal, Variable
from sprout.types.symbol import spelling
from sprout.types.values import FalseType, Function, InbuiltFunc, VoidType, is_int


def unparse(node: Ast) -> str:
    match node:
        case Literal(value):
            return format_value(value)
        case Variable(name):
            return spelling(name)
        case Define(name, expr):
            return f"(= {spelling(name)} {unparse(expr)})"
        case Call(callee, args):
            return "(" + " ".join([unparse(callee), *(unparse(a) for a in args)]) + ")"
    raise TypeError(f"Not an AST node: {node!r}")


def format_value(value: Value) -> str:
    """Printable form of a value; functions print as their literal."""
    if isinstance(value, FalseType):
        return "#f"
    if isinstance(value, VoidType):
        return "#void"
    if is_int(value):
        return str(value)
    if isinstance(value, Function):
        params = " ".join(spelling(p) for p in value.params)
        body = "".join(" " + unparse(stmt) for stmt in value.body)
        return f"(\\({params}){body})"
    if isinstance(value, InbuiltFunc):
        return f"<inbuilt {value.name}>"
    return repr(value)
