"""Syntax tree nodes produced by the reader and consumed by the evaluator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from sprout import Identifier, Value


@dataclass(frozen=True, slots=True)
class Literal:
    value: Value


@dataclass(frozen=True, slots=True)
class Variable:
    name: Identifier


@dataclass(frozen=True, slots=True)
class Call:
    callee: Ast
    args: tuple[Ast, ...] = ()


@dataclass(frozen=True, slots=True)
class Define:
    name: Identifier
    expr: Ast


Ast = Union[Literal, Variable, Call, Define]
