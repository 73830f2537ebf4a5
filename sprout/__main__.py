import logging
import sys
from argparse import ArgumentParser

from sprout import config
from sprout.errors import SproutError, SproutSyntaxError
from sprout.evaluation.evaluator import evaluate
from sprout.interpreter import Interpreter
from sprout.reader.parser import parse_all
from sprout.reader.printer import format_value, unparse


def build_arg_parser() -> ArgumentParser:
    arg_parser = ArgumentParser(prog="sprout", description="Evaluate Sprout source code")
    arg_parser.add_argument("path", help="path to the code to evaluate, or - for stdin")
    arg_parser.add_argument(
        "-a", "--ast", action="store_true", help="print the parsed program before running it"
    )
    arg_parser.add_argument(
        "--no-natives", action="store_true", help="start from an empty environment"
    )
    return arg_parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(level=config.get_log_level(), format="%(levelname)s %(name)s: %(message)s")
    limit = config.get_recursion_limit()
    if limit is not None:
        sys.setrecursionlimit(limit)

    try:
        if args.path == "-":
            src = sys.stdin.read()
        else:
            with open(args.path, encoding="utf-8") as f:
                src = f.read()
    except OSError as e:
        print(f"cannot read {args.path}: {e.strerror}", file=sys.stderr)
        return 1

    interp = Interpreter(natives=not args.no_natives)
    try:
        program = parse_all(src)
        if args.ast:
            for expr in program:
                print(unparse(expr))
            print()
        for expr in program:
            print(format_value(evaluate(expr, interp.env)))
    except SproutSyntaxError as e:
        print(f"syntax error: {e}", file=sys.stderr)
        return 1
    except SproutError as e:
        print(f"runtime error: {e}", file=sys.stderr)
        return 1
    except RecursionError:
        print("runtime error: stack exhausted (maximum recursion depth exceeded)", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
