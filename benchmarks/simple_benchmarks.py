from timeit import timeit

from sprout.builtin.natives import register
from sprout.evaluation.evaluator import evaluate
from sprout.reader.parser import parse_all, parse_expr
from sprout.types.environment import Environment
from sprout.types.values import InbuiltFunc, Void


# Deeply nested calls: mostly measures how the reader copes with nesting.
DEEP_NESTING = "(" * 45 + "test" + ")" * 45

# Many variables of many names, and many repetitions of the same name.
_LETTERS = "abcdefghijklmnopqrstuvwxyz"
MANY_VARIABLES = (
    "((\\(" + " ".join(_LETTERS) + ")\n"
    + "\n".join("  (" + " ".join(_LETTERS[i:]) + ")" for i in range(len(_LETTERS)))
    + ")\n  " + " ".join(["ignore"] * len(_LETTERS)) + ")"
)

# Passes the same value down eleven function calls and back up.
NESTED_FUNC = "((\\(val) " * 11 + "val" + ") val)" * 10 + ") #f)"

# Uses every feature of the language.
REAL_CODE = r"""
(= increment (\(a)
  (add a 1)))
(= someval (increment 2))
(= double (\ (someval)
  (add someval someval)))
(= addfive (\ (first second third fourth fifth) (add first second third fourth fifth)))
(= second (\ (a a) a))
(= rec (\ (a)
  ((if (eq a 10)
       (\() 10)
       (\() (rec (add a 1)))))))
(= ne (\ (a b)
  (not (eq a b))))
(= not (\ (a)
  (if a #f)))

(double 5)
(addfive 1 2 3 4 5)
(second 1 2)
(rec 0)
(ne 1 2)
someval
"""

LITERALS = "((\\() " + " ".join(str(i) for i in range(100)) + "))"


def _callable(_args):
    # Returns itself so ((test)) keeps calling something cheap.
    return CALLABLE


CALLABLE = InbuiltFunc(_callable, "test")


def _ignore(_args):
    return Void


def time_parse(code: str, rounds: int) -> float:
    return timeit(lambda: parse_expr(code), number=rounds)


def time_run(code: str, env: Environment, rounds: int) -> float:
    """Parse once, then time repeated evaluation of the same AST."""
    expr, _ = parse_expr(code)
    evaluate(expr, env)  # warmup
    return timeit(lambda: evaluate(expr, env), number=rounds)


def time_real_code(rounds: int) -> float:
    base = Environment()
    register(base)
    program = parse_all(REAL_CODE)

    def run():
        env = base.snapshot()
        for line in program:
            evaluate(line, env)

    run()  # warmup
    return timeit(run, number=rounds)


def _print_pair(name: str, parse_t: float, run_t: float, rounds: int) -> None:
    print(f"Benchmark: {name}")
    print(f"  parse: {parse_t:.6f}s  |  run: {run_t:.6f}s  [rounds={rounds}]")


if __name__ == "__main__":
    rounds = 2000

    env = Environment()
    env.bind("test", CALLABLE)
    _print_pair("deep nesting", time_parse(DEEP_NESTING, rounds),
                time_run(DEEP_NESTING, env, rounds), rounds)

    env = Environment()
    env.bind_native("ignore", _ignore)
    _print_pair("many variables", time_parse(MANY_VARIABLES, rounds),
                time_run(MANY_VARIABLES, env, rounds), rounds)

    _print_pair("nested functions", time_parse(NESTED_FUNC, rounds),
                time_run(NESTED_FUNC, Environment(), rounds), rounds)

    print("Benchmark: literals")
    print(f"  parse: {time_parse(LITERALS, rounds):.6f}s  [rounds={rounds}]")

    print("Benchmark: real code")
    print(f"  parse+run: {time_parse(REAL_CODE, rounds) + time_real_code(rounds):.6f}s  [rounds={rounds}]")
