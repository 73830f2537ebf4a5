import logging

import pytest

from sprout.errors import SproutTypeError, SproutUnboundSymbol
from sprout.evaluation.evaluator import evaluate
from sprout.reader.parser import parse_expr
from sprout.types.ast import Call, Define, Literal, Variable
from sprout.types.environment import Environment
from sprout.types.symbol import hash_name
from sprout.types.values import FALSE, Function, InbuiltFunc, Void

# -----------------------------------------------------
# Per-node semantics
# -----------------------------------------------------

def test_literals_evaluate_to_themselves(env):
    assert evaluate(Literal(7), env) == 7
    assert evaluate(Literal(FALSE), env) is FALSE
    assert evaluate(Literal(Void), env) is Void
    fn = Function((), ())
    assert evaluate(Literal(fn), env) is fn
    assert len(env) == 0


def test_variable_lookup(env):
    env.bind("x", 42)
    assert evaluate(Variable(hash_name("x")), env) == 42


def test_undefined_variable_is_fatal(env):
    with pytest.raises(SproutUnboundSymbol, match="nothere"):
        evaluate(Variable(hash_name("nothere")), env)


def test_define_returns_void_and_mutates_env(env):
    result = evaluate(Define(hash_name("x"), Literal(5)), env)
    assert result is Void
    assert env.lookup(hash_name("x")) == 5


def test_define_overwrites(env, run):
    run("(= x 1) (= x 2)", env)
    assert env.lookup(hash_name("x")) == 2


@pytest.mark.parametrize("source", ["(5)", "(#f 1)", "((= y 1))"])
def test_calling_a_non_function_is_fatal(env, run, source):
    with pytest.raises(SproutTypeError, match="non-function"):
        run(source, env)


def test_non_function_error_names_the_value(env, run):
    with pytest.raises(SproutTypeError, match="12"):
        run("(12 1 2)", env)


def test_error_inside_argument_aborts_call(natives_env, run):
    with pytest.raises(SproutUnboundSymbol):
        run("(add 1 missing)", natives_env)


# -----------------------------------------------------
# Application
# -----------------------------------------------------

def test_identity_function(env, run):
    assert run(r"((\(x) x) 7)", env) == 7


def test_empty_body_returns_void(env, run):
    assert run(r"((\()))", env) is Void


def test_body_result_is_last_statement(env, run):
    assert run(r"((\() 1 2 3))", env) == 3


def test_sequential_definitions_accumulate(natives_env, run):
    assert run(r"((\(x) (= y x) (add x y)) 3)", natives_env) == 6


def test_function_defines_do_not_leak(env, run):
    run(r"((\() (= inner 1)))", env)
    assert hash_name("inner") not in env


def test_function_cannot_overwrite_caller_binding(env, run):
    run(r"(= x 1) ((\() (= x 2)))", env)
    assert env.lookup(hash_name("x")) == 1


def test_parameters_do_not_leak(env, run):
    run(r"((\(p) p) 1)", env)
    assert hash_name("p") not in env


def test_dynamic_scope_resolves_free_names_at_call_site(env, run):
    run(r"(= getfree (\() free))", env)
    run("(= free 1)", env)
    assert run("(getfree)", env) == 1
    # Second call site binds `free` differently inside a wrapper function.
    assert run(r"((\(free) (getfree)) 2)", env) == 2
    assert run("(getfree)", env) == 1


def test_free_name_defined_after_function_is_visible(env, run):
    run(r"(= f (\() later))", env)
    run("(= later 9)", env)
    assert run("(f)", env) == 9


def test_free_name_missing_at_call_time_is_fatal(env, run):
    run(r"(= f (\() later))", env)
    with pytest.raises(SproutUnboundSymbol):
        run("(f)", env)


def test_arguments_are_evaluated_in_callers_env(env, run):
    # `x` in the argument refers to the caller's x, not the parameter
    run("(= x 10)", env)
    assert run(r"((\(x y) y) 1 x)", env) == 10


def test_define_in_argument_goes_to_caller_env(env, run):
    assert run(r"((\(a) a) (= made 4))", env) is Void
    assert env.lookup(hash_name("made")) == 4


def test_duplicate_parameters_last_wins(env, run):
    assert run(r"((\(a a) a) 1 2)", env) == 2


def test_recursion_through_global_binding(natives_env, run):
    run(r"""
        (= rec (\ (a)
          ((if (eq a 10)
               (\() 10)
               (\() (rec (add a 1)))))))
    """, natives_env)
    assert run("(rec 0)", natives_env) == 10


def test_unbounded_recursion_exhausts_the_stack(env, run):
    run(r"(= loop (\() (loop)))", env)
    with pytest.raises(RecursionError):
        run("(loop)", env)


# -----------------------------------------------------
# Arity mismatch is logged, never fatal
# -----------------------------------------------------

def test_too_few_arguments_binds_prefix(env, run, caplog):
    with caplog.at_level(logging.WARNING, logger="sprout.evaluation.apply"):
        assert run(r"((\(a b) a) 1)", env) == 1
    assert "expected 2, got 1" in caplog.text


def test_too_few_arguments_leaves_rest_unbound(env, run, caplog):
    with caplog.at_level(logging.WARNING):
        with pytest.raises(SproutUnboundSymbol):
            run(r"((\(a b) b) 1)", env)
    assert "expected 2, got 1" in caplog.text


def test_too_many_arguments_ignores_extra(env, run, caplog):
    with caplog.at_level(logging.WARNING):
        assert run(r"((\(a) a) 1 2 3)", env) == 1
    assert "expected 1, got 3" in caplog.text


def test_extra_arguments_are_not_evaluated(env, run, caplog):
    with caplog.at_level(logging.WARNING):
        assert run(r"((\(a) a) 1 (= sidefx 1))", env) == 1
    assert hash_name("sidefx") not in env


def test_matching_arity_logs_nothing(env, run, caplog):
    with caplog.at_level(logging.WARNING):
        run(r"((\(a) a) 1)", env)
    assert caplog.records == []


# -----------------------------------------------------
# Natives
# -----------------------------------------------------

def test_native_receives_evaluated_arguments_in_order(env, run):
    seen = []

    def record(args):
        seen.append(tuple(args))
        return len(args)

    env.bind_native("record", record)
    env.bind("x", 5)
    assert run(r"(record 1 x #f ((\() 9)))", env) == 4
    assert seen == [(1, 5, FALSE, 9)]


def test_native_result_is_not_validated(env, run):
    env.bind_native("weird", lambda args: "not a sprout value")
    assert run("(weird)", env) == "not a sprout value"


def test_native_closure_with_state(env, run):
    counter = {"n": 0}

    def tick(args):
        counter["n"] += 1
        return counter["n"]

    env.bind_native("tick", tick)
    assert run("(tick) (tick) (tick)", env) == 3


def test_native_returning_native(env, run):
    def callable_(args):
        return CALLABLE

    CALLABLE = InbuiltFunc(callable_, "test")
    env.bind("test", CALLABLE)
    source = "(" * 20 + "test" + ")" * 20
    assert run(source, env) is CALLABLE


# -----------------------------------------------------
# End-to-end properties
# -----------------------------------------------------

def test_shared_environment_across_top_level_expressions(env):
    define, _ = parse_expr("(= x 5)")
    use, _ = parse_expr("x")
    evaluate(define, env)
    assert evaluate(use, env) == 5


def test_evaluation_is_deterministic(natives_env):
    expr, _ = parse_expr(r"((\(a b) (= c (add a b)) (eq c 7)) 3 4)")
    results = [evaluate(expr, Environment(natives_env.vars)) for _ in range(3)]
    assert results == [Void, Void, Void]


def test_call_expression_built_by_hand(env):
    fn = Function((hash_name("v"),), (Variable(hash_name("v")),))
    assert evaluate(Call(Literal(fn), (Literal(FALSE),)), env) is FALSE
