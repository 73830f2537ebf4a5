import pytest

from sprout.builtin.natives import register
from sprout.evaluation.evaluator import evaluate
from sprout.reader.parser import parse_all
from sprout.types.environment import Environment

# Shared fixtures. `env` starts empty (the language has no primitives);
# `natives_env` carries the host natives add / eq / if.


@pytest.fixture
def env():
    return Environment()


@pytest.fixture
def natives_env():
    env = Environment()
    register(env)
    return env


@pytest.fixture
def run():
    """Parse `source` and evaluate each top-level expression; return the last value."""
    def _run(source, env):
        result = None
        for expr in parse_all(source):
            result = evaluate(expr, env)
        return result
    return _run
