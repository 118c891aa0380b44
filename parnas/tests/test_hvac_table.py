"""Tests for the HVAC decision table over continuous ranges."""

from __future__ import annotations

import math
from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest

from parnas.core.domain.errors import OverlappingRulesError, UnmatchedInputError
from parnas.core.table.rule_table import Ordering, RuleTable
from parnas.core.table.validation import boundary_samples, scan_partition
from parnas.hvac.enums import HVACAction
from parnas.hvac.table import (
    HUMIDITY,
    TEMPERATURE,
    build_draft_hvac_table,
    build_hvac_table,
    determine_hvac_action,
)


@pytest.mark.parametrize(
    "temp,humidity,expected",
    [
        (-5, 50, HVACAction.HEAT_AND_HUMIDIFY),
        (5, 30, HVACAction.HEAT_AND_HUMIDIFY),
        (15, 50, HVACAction.HEAT),
        (15, 70, HVACAction.HEAT),
        (22, 35, HVACAction.HUMIDIFY),
        (22, 50, HVACAction.OFF),
        (22, 75, HVACAction.DEHUMIDIFY),
        (28, 50, HVACAction.COOL),
        (28, 75, HVACAction.COOL_AND_DEHUMIDIFY),
    ],
)
def test_sample_readings(temp, humidity, expected):
    assert determine_hvac_action(temp, humidity) == expected


@pytest.mark.parametrize(
    "temp,humidity,expected",
    [
        (0, 50, HVACAction.HEAT),
        (-0.0001, 50, HVACAction.HEAT_AND_HUMIDIFY),
        (20, 50, HVACAction.OFF),
        (19.9999, 50, HVACAction.HEAT),
        (25, 50, HVACAction.COOL),
        (24.9999, 50, HVACAction.OFF),
        (22, 40, HVACAction.OFF),
        (22, 39.9999, HVACAction.HUMIDIFY),
        (22, 60, HVACAction.OFF),
        (22, 60.0001, HVACAction.DEHUMIDIFY),
        (10, 40, HVACAction.HEAT),
        (10, 39.9999, HVACAction.HEAT_AND_HUMIDIFY),
        (30, 60, HVACAction.COOL),
        (30, 60.0001, HVACAction.COOL_AND_DEHUMIDIFY),
    ],
)
def test_boundaries_resolve_to_documented_rows(temp, humidity, expected):
    assert determine_hvac_action(temp, humidity) == expected


def test_out_of_declared_range_values_still_classified():
    assert determine_hvac_action(-273.15, 0) == HVACAction.HEAT_AND_HUMIDIFY
    assert determine_hvac_action(60, 150) == HVACAction.COOL_AND_DEHUMIDIFY
    assert determine_hvac_action(22, -10) == HVACAction.HUMIDIFY
    assert determine_hvac_action(math.inf, 50) == HVACAction.COOL


def test_nan_input_fails_loud():
    with pytest.raises(UnmatchedInputError):
        determine_hvac_action(math.nan, 50)
    with pytest.raises(UnmatchedInputError):
        determine_hvac_action(22, math.nan)


@pytest.mark.parametrize(
    "temp",
    [np.int64(22), np.float32(22.0), np.float64(22.0), Fraction(22), Decimal("22")],
    ids=["int64", "float32", "float64", "fraction", "decimal"],
)
def test_numeric_scalar_types_accepted(temp):
    assert determine_hvac_action(temp, 50) == HVACAction.OFF
    assert determine_hvac_action(22, temp * 3) == HVACAction.DEHUMIDIFY


def test_numpy_boundary_values_resolve_like_floats():
    assert determine_hvac_action(np.float64(20.0), np.int64(40)) == HVACAction.OFF
    assert determine_hvac_action(np.nextafter(20.0, -np.inf), 50) == HVACAction.HEAT


def test_non_numeric_input_rejected():
    with pytest.raises(ValueError):
        determine_hvac_action("22", 50)


def test_boundary_samples_include_edges_and_neighbours():
    table = build_hvac_table()
    temps = boundary_samples(table, TEMPERATURE, (-10.0, 40.0), points=11)
    for edge in (0.0, 20.0, 25.0):
        assert edge in temps
        assert np.nextafter(edge, -np.inf) in temps
        assert np.nextafter(edge, np.inf) in temps
    assert temps[0] == -10.0
    assert temps[-1] == 40.0
    assert np.all(np.diff(temps) > 0)


def test_dense_scan_finds_no_gaps_or_overlaps():
    table = build_hvac_table()
    samples = {
        TEMPERATURE: boundary_samples(table, TEMPERATURE, (-40.0, 60.0), points=201),
        HUMIDITY: boundary_samples(table, HUMIDITY, (0.0, 100.0), points=201),
    }
    report = scan_partition(table, samples)
    assert report.checked == len(samples[TEMPERATURE]) * len(samples[HUMIDITY])
    assert report.gaps == []
    assert report.overlaps == []
    assert report.ok


def test_every_sampled_point_matches_exactly_one_rule():
    table = build_hvac_table()
    temps = boundary_samples(table, TEMPERATURE, (-5.0, 30.0), points=36)
    hums = boundary_samples(table, HUMIDITY, (30.0, 70.0), points=41)
    for t in temps:
        for h in hums:
            point = (float(t), float(h))
            assert sum(1 for r in table.rules if r.matches(point)) == 1, point


def test_draft_table_has_gaps_and_overlap_at_twenty():
    table = build_draft_hvac_table()
    samples = {
        TEMPERATURE: boundary_samples(table, TEMPERATURE, (-10.0, 40.0), points=51),
        HUMIDITY: boundary_samples(table, HUMIDITY, (0.0, 100.0), points=51),
    }
    report = scan_partition(table, samples)
    assert not report.ok
    assert (5.0, 30.0) in report.gaps
    assert (30.0, 50.0) in report.gaps
    overlap_points = [point for point, _ in report.overlaps]
    assert overlap_points
    assert all(point[0] == 20.0 for point in overlap_points)


def test_draft_table_first_match_hides_overlap_and_gaps_fail_loud():
    table = build_draft_hvac_table()
    assert table.evaluate(20, 50) == HVACAction.HEAT
    with pytest.raises(UnmatchedInputError):
        table.evaluate(5, 30)


def test_draft_rules_rejected_as_disjoint_table():
    draft = build_draft_hvac_table()
    with pytest.raises(OverlappingRulesError):
        RuleTable("hvac_draft", draft.dimensions, draft.rules, ordering=Ordering.DISJOINT)


def test_scan_requires_samples_for_continuous_axes():
    table = build_hvac_table()
    with pytest.raises(ValueError):
        scan_partition(table, {TEMPERATURE: [0.0]})
