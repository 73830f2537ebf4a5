from __future__ import annotations

from sprout import Value
from sprout.builtin.natives import register
from sprout.evaluation.evaluator import evaluate
from sprout.reader.parser import Reader
from sprout.reader.printer import format_value
from sprout.types.environment import Environment
from sprout.types.values import Void


class Interpreter:
    """
    Reads and evaluates Sprout code against one persistent Environment.
    Top-level defines made by one call to eval() are visible to the next.
    """

    def __init__(self, natives: bool = True, prelude: str | None = None):
        self.env: Environment = Environment()
        if natives:
            register(self.env)

        if prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        """Evaluate a string of Sprout code, discarding the results.

        Parsed in full before anything runs, like eval().
        """
        program = list(Reader(code).parse_all())
        for expr in program:
            evaluate(expr, self.env)

    def eval(self, code: str) -> Value | list[Value]:
        """Evaluate every top-level expression in `code`, in order.

        The whole text is parsed first, so a syntax error anywhere means
        nothing is evaluated.
        """
        program = list(Reader(code).parse_all())
        results: list[Value] = [evaluate(expr, self.env) for expr in program]
        if not results:
            return Void
        if len(results) == 1:
            return results[0]
        return results


#  Example use-age:
if __name__ == "__main__":
    prelude = r"""
        (= not (\(a) (if a #f)))
        (= ne (\(a b) (not (eq a b))))
        (= increment (\(a) (add a 1)))
    """
    interp = Interpreter(prelude=prelude)

    tests = [
        "(increment 41)",
        "(ne 1 2)",
        "(ne 3 3)",
        r"((\(x) (= y (add x x)) (add y x)) 3)",
    ]

    for code in tests:
        result = interp.eval(code)
        print(code, "=>", format_value(result))
