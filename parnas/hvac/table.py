"""HVAC control over temperature (°C) x relative humidity (%).

Complete table:
  < 0        *          Heat + Humidify
  [0, 20)    < 40       Heat + Humidify
  [0, 20)    [40, 60]   Heat
  [0, 20)    > 60       Heat
  [20, 25)   < 40       Humidify
  [20, 25)   [40, 60]   OFF
  [20, 25)   > 60       Dehumidify
  ≥ 25       ≤ 60       Cool
  ≥ 25       > 60       Cool + Dehumidify

Numeric ranges have no static completeness check: an input no row covers
(NaN) raises UnmatchedInputError, and coverage is verified by sampling with
validation.scan_partition.
"""

from __future__ import annotations

from parnas.core.domain.dimensions import Dimension
from parnas.core.domain.models import rule
from parnas.core.table.matchers import ANY, above, at_least, at_most, below, closed, half_open
from parnas.core.table.rule_table import Ordering, RuleTable
from .enums import HVACAction

TEMPERATURE = "temperature_c"
HUMIDITY = "humidity_pct"

HVAC_DIMENSIONS = (
    Dimension.continuous(TEMPERATURE),
    Dimension.continuous(HUMIDITY),
)

FREEZING_C = 0.0
COMFORT_LOW_C = 20.0
COMFORT_HIGH_C = 25.0
HUMIDITY_LOW_PCT = 40.0
HUMIDITY_HIGH_PCT = 60.0


def build_hvac_table() -> RuleTable[HVACAction]:
    cold = half_open(FREEZING_C, COMFORT_LOW_C)
    comfortable = half_open(COMFORT_LOW_C, COMFORT_HIGH_C)
    hot = at_least(COMFORT_HIGH_C)
    dry = below(HUMIDITY_LOW_PCT)
    normal = closed(HUMIDITY_LOW_PCT, HUMIDITY_HIGH_PCT)
    humid = above(HUMIDITY_HIGH_PCT)

    rules = [
        rule(below(FREEZING_C), ANY, then=HVACAction.HEAT_AND_HUMIDIFY, label="freezing"),
        rule(cold, dry, then=HVACAction.HEAT_AND_HUMIDIFY, label="cold, dry"),
        rule(cold, normal, then=HVACAction.HEAT, label="cold, normal"),
        rule(cold, humid, then=HVACAction.HEAT, label="cold, humid"),
        rule(comfortable, dry, then=HVACAction.HUMIDIFY, label="comfortable, dry"),
        rule(comfortable, normal, then=HVACAction.OFF, label="comfortable, normal"),
        rule(comfortable, humid, then=HVACAction.DEHUMIDIFY, label="comfortable, humid"),
        rule(hot, at_most(HUMIDITY_HIGH_PCT), then=HVACAction.COOL, label="hot, not humid"),
        rule(hot, humid, then=HVACAction.COOL_AND_DEHUMIDIFY, label="hot, humid"),
    ]
    return RuleTable("hvac", HVAC_DIMENSIONS, rules, ordering=Ordering.DISJOINT)


def build_draft_hvac_table() -> RuleTable[HVACAction]:
    """First draft of the table, before review.

    Leaves most humidity bands uncovered, misses hot rooms at normal humidity
    and claims 20 °C for two rows with different actions. It only builds with
    FIRST_MATCH ordering; DISJOINT construction rejects the overlap at 20.
    """
    rules = [
        rule(below(FREEZING_C), ANY, then=HVACAction.HEAT_AND_HUMIDIFY, label="freezing"),
        rule(closed(FREEZING_C, COMFORT_LOW_C), closed(HUMIDITY_LOW_PCT, HUMIDITY_HIGH_PCT),
             then=HVACAction.HEAT, label="0-20, 40-60"),
        rule(closed(COMFORT_LOW_C, COMFORT_HIGH_C), closed(HUMIDITY_LOW_PCT, HUMIDITY_HIGH_PCT),
             then=HVACAction.OFF, label="20-25, 40-60"),
        rule(above(COMFORT_HIGH_C), above(HUMIDITY_HIGH_PCT),
             then=HVACAction.COOL_AND_DEHUMIDIFY, label=">25, >60"),
    ]
    return RuleTable("hvac_draft", HVAC_DIMENSIONS, rules, ordering=Ordering.FIRST_MATCH)


_DEFAULT_TABLE = build_hvac_table()


def determine_hvac_action(temperature_c: float, humidity_pct: float) -> HVACAction:
    return _DEFAULT_TABLE.evaluate(temperature_c, humidity_pct)
