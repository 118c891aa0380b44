"""Tests for rule table construction and evaluation."""

from __future__ import annotations

from enum import Enum

import pytest

from parnas.core.domain.dimensions import Dimension
from parnas.core.domain.errors import (
    IncompleteTableError,
    OverlappingRulesError,
    TableDefinitionError,
    UnmatchedInputError,
)
from parnas.core.domain.models import rule
from parnas.core.table.matchers import ANY, Guard, at_least, below, half_open
from parnas.core.table.rule_table import Ordering, RuleTable, first_match
from parnas.core.table.validation import find_gaps


class Light(Enum):
    RED = "RED"
    GREEN = "GREEN"


class Move(Enum):
    GO = "GO"
    STOP = "STOP"


def light_dims():
    return (Dimension.discrete("light", Light), Dimension.discrete("emergency", (False, True)))


def test_complete_disjoint_table_evaluates():
    table = RuleTable(
        "lights",
        light_dims(),
        [
            rule(ANY, True, then=Move.STOP),
            rule(Light.RED, False, then=Move.STOP),
            rule(Light.GREEN, False, then=Move.GO),
        ],
    )
    assert table.evaluate(Light.GREEN, False) == Move.GO
    assert table.evaluate(Light.GREEN, True) == Move.STOP
    assert table.evaluate(light=Light.RED, emergency=False) == Move.STOP


def test_overlap_with_same_output_is_allowed():
    table = RuleTable(
        "lights",
        light_dims(),
        [
            rule(ANY, True, then=Move.STOP),
            rule(Light.RED, ANY, then=Move.STOP),
            rule(Light.GREEN, False, then=Move.GO),
        ],
    )
    assert table.evaluate(Light.RED, True) == Move.STOP


def test_conflicting_overlap_rejected_when_disjoint():
    with pytest.raises(OverlappingRulesError) as excinfo:
        RuleTable(
            "lights",
            light_dims(),
            [
                rule(Light.GREEN, ANY, then=Move.GO, label="green"),
                rule(ANY, True, then=Move.STOP, label="emergency"),
                rule(Light.RED, False, then=Move.STOP),
            ],
        )
    assert excinfo.value.conflicts == [("green", "emergency")]


def test_disjoint_result_does_not_depend_on_rule_order():
    rules = [
        rule(ANY, True, then=Move.STOP),
        rule(Light.RED, False, then=Move.STOP),
        rule(Light.GREEN, False, then=Move.GO),
    ]
    forward = RuleTable("fwd", light_dims(), rules)
    backward = RuleTable("bwd", light_dims(), list(reversed(rules)))
    for light in Light:
        for emergency in (False, True):
            assert forward.evaluate(light, emergency) == backward.evaluate(light, emergency)


def test_first_match_resolves_overlap_by_order():
    table = RuleTable(
        "lights",
        light_dims(),
        [
            rule(ANY, True, then=Move.STOP),
            rule(Light.GREEN, ANY, then=Move.GO),
        ],
        ordering=Ordering.FIRST_MATCH,
        default=Move.STOP,
    )
    assert table.evaluate(Light.GREEN, True) == Move.STOP
    assert table.evaluate(Light.GREEN, False) == Move.GO
    assert table.evaluate(Light.RED, False) == Move.STOP
    assert table.match(Light.RED, False) is table.default_rule


def test_incomplete_discrete_table_rejected():
    with pytest.raises(IncompleteTableError) as excinfo:
        RuleTable(
            "lights",
            light_dims(),
            [rule(Light.GREEN, False, then=Move.GO), rule(ANY, True, then=Move.STOP)],
        )
    assert excinfo.value.gaps == [(Light.RED, False)]


def test_incomplete_allowed_when_not_required_then_unmatched_raises():
    table = RuleTable(
        "lights",
        light_dims(),
        [rule(Light.GREEN, False, then=Move.GO)],
        require_complete=False,
    )
    assert table.match(Light.RED, False) is None
    with pytest.raises(UnmatchedInputError) as excinfo:
        table.evaluate(Light.RED, False)
    assert excinfo.value.values == (Light.RED, False)
    assert isinstance(excinfo.value, RuntimeError)


def test_continuous_table_fails_loud_on_gap():
    table = RuleTable(
        "temps",
        (Dimension.continuous("t"),),
        [rule(below(0), then="cold"), rule(at_least(10), then="warm")],
    )
    assert table.evaluate(-1) == "cold"
    assert table.evaluate(10) == "warm"
    with pytest.raises(UnmatchedInputError):
        table.evaluate(5)


def test_arity_mismatch_rejected():
    with pytest.raises(TableDefinitionError):
        RuleTable("lights", light_dims(), [rule(Light.GREEN, then=Move.GO)])


def test_interval_on_discrete_dimension_rejected():
    with pytest.raises(TableDefinitionError):
        RuleTable(
            "bad",
            (Dimension.discrete("n", (1, 2, 3)),),
            [rule(half_open(0, 2), then="x")],
            require_complete=False,
        )


def test_guard_outside_context_dimension_rejected():
    with pytest.raises(TableDefinitionError):
        RuleTable(
            "bad",
            (Dimension.continuous("t"),),
            [rule(Guard("hot", lambda t: t > 30), then="x")],
        )


def test_undeclared_value_in_rule_rejected():
    with pytest.raises(TableDefinitionError):
        RuleTable("bad", light_dims(), [rule("YELLOW", ANY, then=Move.GO)], require_complete=False)


def test_evaluate_rejects_undeclared_input_value():
    table = RuleTable("lights", light_dims(), [rule(ANY, ANY, then=Move.STOP)])
    with pytest.raises(ValueError):
        table.evaluate("YELLOW", False)
    with pytest.raises(ValueError):
        table.evaluate(Light.RED, 1)


def test_bind_errors():
    table = RuleTable("lights", light_dims(), [rule(ANY, ANY, then=Move.STOP)])
    with pytest.raises(TypeError):
        table.evaluate(Light.RED)
    with pytest.raises(TypeError):
        table.evaluate(light=Light.RED)
    with pytest.raises(TypeError):
        table.evaluate(Light.RED, emergency=False)
    with pytest.raises(TypeError):
        table.evaluate(light=Light.RED, emergency=False, extra=1)


def test_context_guard_pair_counts_as_complete():
    is_night = Guard("night", lambda ctx: ctx["night"])
    dims = (Dimension.discrete("light", Light), Dimension.context("ctx"))
    rules = [
        rule(Light.RED, ANY, then=Move.STOP),
        rule(Light.GREEN, is_night, then=Move.STOP),
        rule(Light.GREEN, ~is_night, then=Move.GO),
    ]
    table = RuleTable("lights_ctx", dims, rules)
    assert table.evaluate(Light.GREEN, {"night": False}) == Move.GO
    assert table.evaluate(Light.GREEN, {"night": True}) == Move.STOP
    assert find_gaps(dims, rules[:2]) == [(Light.GREEN, None)]


def test_first_match_helper_returns_none_without_match():
    rules = [rule(Light.RED, ANY, then=Move.STOP)]
    assert first_match(rules, (Light.GREEN, False)) is None
    assert first_match(rules, (Light.RED, True)) is rules[0]
