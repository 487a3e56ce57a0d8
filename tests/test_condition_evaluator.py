import random

import pytest

from WFPutils.conditions import Outcome, evaluate, evaluate_condition, parse_condition
from WFPutils.exceptions import ConditionEvaluationError


def test_comparisons_against_resolved_values() -> None:
    ctx = {"env": "prod", "replicas": 4, "ssl": True, "ratio": 0.25}
    assert evaluate_condition("env == 'prod'", ctx) is Outcome.TRUE
    assert evaluate_condition("env != 'prod'", ctx) is Outcome.FALSE
    assert evaluate_condition("replicas > 3", ctx) is Outcome.TRUE
    assert evaluate_condition("replicas <= 3", ctx) is Outcome.FALSE
    assert evaluate_condition("replicas == 4.0", ctx) is Outcome.TRUE
    assert evaluate_condition("ratio < 0.5", ctx) is Outcome.TRUE
    assert evaluate_condition("ssl == true", ctx) is Outcome.TRUE


def test_missing_name_is_undecidable() -> None:
    assert evaluate_condition("env == 'prod'", {}) is Outcome.UNDECIDABLE


def test_absent_name_is_false_for_every_predicate() -> None:
    absent = {"tag"}
    assert evaluate_condition("tag == 'x'", {}, absent) is Outcome.FALSE
    assert evaluate_condition("tag != 'x'", {}, absent) is Outcome.FALSE
    assert evaluate_condition("tag in ['x']", {}, absent) is Outcome.FALSE
    assert evaluate_condition("tag contains 'x'", {}, absent) is Outcome.FALSE


def test_three_valued_logic() -> None:
    ctx = {"a": True}
    assert evaluate_condition("a == true && b == 1", ctx) is Outcome.UNDECIDABLE
    assert evaluate_condition("a == false && b == 1", ctx) is Outcome.FALSE
    assert evaluate_condition("b == 1 || a == true", ctx) is Outcome.TRUE
    assert evaluate_condition("a == false || b == 1", ctx) is Outcome.UNDECIDABLE
    assert evaluate_condition("a == false || a != true", ctx) is Outcome.FALSE


def test_membership_on_strings_and_selections() -> None:
    assert evaluate_condition("env in ['dev', 'staging']", {"env": "dev"}) is Outcome.TRUE
    assert evaluate_condition("env in ['dev', 'staging']", {"env": "prod"}) is Outcome.FALSE
    assert evaluate_condition("features in ['tracing']", {"features": ["metrics", "tracing"]}) is Outcome.TRUE
    assert evaluate_condition("features in ['profiling']", {"features": ["metrics"]}) is Outcome.FALSE


def test_contains_on_strings_and_selections() -> None:
    assert evaluate_condition("path contains '.pem'", {"path": "/etc/cert.pem"}) is Outcome.TRUE
    assert evaluate_condition("features contains 'tracing'", {"features": ["tracing"]}) is Outcome.TRUE
    assert evaluate_condition("features contains 'tracing'", {"features": []}) is Outcome.FALSE


@pytest.mark.parametrize(
    "expression, ctx",
    [
        ("n == 1", {"n": True}),
        ("flag == true", {"flag": "true"}),
        ("s < 'b'", {"s": "a"}),
        ("features == 'a'", {"features": ["a"]}),
        ("n in ['3']", {"n": 3}),
        ("n contains 'x'", {"n": 3}),
        ("path contains 1", {"path": "a1"}),
    ],
)
def test_type_mismatch_raises(expression, ctx) -> None:
    with pytest.raises(ConditionEvaluationError) as info:
        evaluate_condition(expression, ctx, parameter="owner")
    assert info.value.parameter == "owner"


def test_both_sides_are_evaluated() -> None:
    with pytest.raises(ConditionEvaluationError):
        evaluate_condition("a == true || n == 'x'", {"a": True, "n": 1})


def test_evaluation_is_deterministic() -> None:
    expressions = [
        "env == 'prod' && replicas > 2",
        "env in ['dev', 'staging'] || ssl == true",
        "(ssl == true || replicas >= 5) && features contains 'metrics'",
    ]
    trees = [parse_condition(text) for text in expressions]
    rng = random.Random(1234)
    for _ in range(200):
        ctx = {}
        if rng.random() < 0.8:
            ctx["env"] = rng.choice(["dev", "staging", "prod"])
        if rng.random() < 0.8:
            ctx["replicas"] = rng.randint(0, 8)
        if rng.random() < 0.8:
            ctx["ssl"] = rng.random() < 0.5
        if rng.random() < 0.8:
            ctx["features"] = rng.sample(["metrics", "tracing"], rng.randint(0, 2))
        for tree in trees:
            first = evaluate(tree, ctx)
            assert all(evaluate(tree, dict(ctx)) is first for _ in range(5))
