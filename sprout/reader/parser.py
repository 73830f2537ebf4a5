"""
  Sprout Reader

- Scannerless recursive descent over the source text with full backtracking
  (PEG ordered choice: the first alternative that matches wins).
- Emits AST nodes from sprout.types.ast:

    - #f              -> Literal(FALSE)
    - 123             -> Literal(123)      (unsigned 64-bit, overflow is fatal)
    - name            -> Variable(hash_name("name"))
    - (\\(a b) e ...)  -> Literal(Function(params, body))
    - (= name e)      -> Define(hash_name("name"), e)
    - (f e ...)       -> Call(f, (e, ...))

  Alternatives are tried in exactly that order; inside parentheses the lambda
  and define forms are only told apart from a call by the first token.

- Whitespace (Unicode White_Space) is skipped before and after every token;
  identifiers are runs of Unicode Alphabetic characters.
- On failure the error reports the furthest position reached and every token
  that was expected there.
"""

from __future__ import annotations

from typing import Iterator, Optional

import regex

from sprout import Identifier
from sprout.errors import SproutIntegerLiteralError, SproutSyntaxError
from sprout.types.ast import Ast, Call, Define, Literal, Variable
from sprout.types.symbol import hash_name
from sprout.types.values import FALSE, U64_MAX, Function

DIGITS = frozenset("0123456789")

# Unicode White_Space and Alphabetic properties; U+001C..U+001F are not whitespace.
WHITESPACE_RE = regex.compile(r"\p{White_Space}*")
IDENT_RE = regex.compile(r"\p{Alphabetic}+")

# (node, position after the node and any trailing whitespace)
Match = Optional[tuple[Ast, int]]


class Reader:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self._fail_pos = -1
        self._expected: set[str] = set()

    # ------------------------
    # Public interface
    # ------------------------
    def read(self) -> Ast:
        """Parse one expression at the current position or raise SproutSyntaxError."""
        self._fail_pos = -1
        self._expected = set()
        result = self._expr(self.pos)
        if result is None:
            raise self._syntax_error()
        node, self.pos = result
        return node

    def parse_expr(self) -> Ast | None:
        """Parse the next expression; None once only whitespace remains."""
        self.pos = self._skip_ws(self.pos)
        if self.at_end():
            return None
        return self.read()

    def parse_all(self) -> Iterator[Ast]:
        while (node := self.parse_expr()) is not None:
            yield node

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    @property
    def remainder(self) -> str:
        return self.source[self.pos:]

    # ------------------------
    # Failure bookkeeping
    # ------------------------
    def _expect(self, pos: int, what: str) -> None:
        if pos > self._fail_pos:
            self._fail_pos = pos
            self._expected = {what}
        elif pos == self._fail_pos:
            self._expected.add(what)
        return None

    def _location(self, pos: int) -> tuple[int, int]:
        line = self.source.count("\n", 0, pos) + 1
        col = pos - (self.source.rfind("\n", 0, pos) + 1) + 1
        return line, col

    def _syntax_error(self) -> SproutSyntaxError:
        pos = max(self._fail_pos, self.pos)
        if pos < len(self.source):
            found = repr(self.source[pos])
        else:
            found = "end of input"
        expected = tuple(sorted(self._expected))
        line, col = self._location(pos)
        msg = f"unexpected {found}"
        if expected:
            msg += f", expected {' or '.join(expected)}"
        return SproutSyntaxError(msg, pos, line, col, expected)

    # ------------------------
    # Lexical helpers
    # ------------------------
    def _skip_ws(self, pos: int) -> int:
        return WHITESPACE_RE.match(self.source, pos).end()

    def _punct(self, pos: int, ch: str) -> int | None:
        """Match `ch` after optional whitespace; return the position after it."""
        pos = self._skip_ws(pos)
        if self.source.startswith(ch, pos):
            return self._skip_ws(pos + len(ch))
        return self._expect(pos, repr(ch))

    def _ident(self, pos: int) -> tuple[Identifier, int] | None:
        pos = self._skip_ws(pos)
        m = IDENT_RE.match(self.source, pos)
        if m is None:
            return self._expect(pos, "identifier")
        return hash_name(m.group()), self._skip_ws(m.end())

    def _many(self, pos: int) -> tuple[list[Ast], int]:
        items: list[Ast] = []
        while (result := self._expr(pos)) is not None:
            node, pos = result
            items.append(node)
        return items, pos

    # ------------------------
    # Grammar
    # ------------------------
    def _expr(self, pos: int) -> Match:
        pos = self._skip_ws(pos)
        for alternative in (self._false, self._integer, self._variable, self._parens):
            result = alternative(pos)
            if result is not None:
                node, end = result
                return node, self._skip_ws(end)
        return None

    def _false(self, pos: int) -> Match:
        if self.source.startswith("#f", pos):
            return Literal(FALSE), pos + 2
        return self._expect(pos, "'#f'")

    def _integer(self, pos: int) -> Match:
        source = self.source
        end = pos
        while end < len(source) and source[end] in DIGITS:
            end += 1
        if end == pos:
            return self._expect(pos, "digit")
        value = int(source[pos:end])
        if value > U64_MAX:
            line, col = self._location(pos)
            raise SproutIntegerLiteralError(
                f"integer literal out of range: {source[pos:end]}", pos, line, col
            )
        return Literal(value), end

    def _variable(self, pos: int) -> Match:
        result = self._ident(pos)
        if result is None:
            return None
        name, end = result
        return Variable(name), end

    def _parens(self, pos: int) -> Match:
        if not self.source.startswith("(", pos):
            return self._expect(pos, "'('")
        inner = pos + 1
        for form in (self._function, self._define, self._call):
            result = form(inner)
            if result is not None:
                # Ordered choice commits to the first form that matched.
                node, end = result
                close = self._punct(end, ")")
                if close is None:
                    return None
                return node, close
        return None

    def _function(self, pos: int) -> Match:
        pos = self._punct(pos, "\\")
        if pos is None:
            return None
        pos = self._punct(pos, "(")
        if pos is None:
            return None
        params: list[Identifier] = []
        while (result := self._ident(pos)) is not None:
            name, pos = result
            params.append(name)
        pos = self._punct(pos, ")")
        if pos is None:
            return None
        body, pos = self._many(pos)
        return Literal(Function(params, body)), pos

    def _define(self, pos: int) -> Match:
        pos = self._punct(pos, "=")
        if pos is None:
            return None
        target = self._ident(pos)
        if target is None:
            return None
        name, pos = target
        value = self._expr(pos)
        if value is None:
            return None
        expr, pos = value
        return Define(name, expr), pos

    def _call(self, pos: int) -> Match:
        callee = self._expr(pos)
        if callee is None:
            return None
        func, pos = callee
        args, pos = self._many(pos)
        return Call(func, tuple(args)), pos


# ------------------------
# Module-level entry points
# ------------------------
def parse_expr(source: str) -> tuple[Ast, str]:
    """Parse one expression; return it with the unconsumed remainder."""
    reader = Reader(source)
    node = reader.read()
    return node, reader.remainder


def parse_many(source: str) -> tuple[list[Ast], str]:
    """Parse as many top-level expressions as possible.

    Stops quietly when the next token cannot start an expression; an
    expression that starts but is malformed (e.g. an unclosed paren) raises.
    """
    reader = Reader(source)
    program: list[Ast] = []
    while True:
        start = reader._skip_ws(reader.pos)
        try:
            program.append(reader.read())
        except SproutIntegerLiteralError:
            raise
        except SproutSyntaxError as e:
            if e.pos > start:
                raise
            reader.pos = start
            break
    return program, reader.remainder


def parse_all(source: str) -> list[Ast]:
    """Parse the whole source; trailing text that is not an expression raises."""
    return list(Reader(source).parse_all())
