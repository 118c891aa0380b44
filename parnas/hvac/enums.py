"""HVAC action enum and display labels."""

from __future__ import annotations

from enum import Enum


class HVACAction(Enum):
    HEAT = "HEAT"
    COOL = "COOL"
    HUMIDIFY = "HUMIDIFY"
    DEHUMIDIFY = "DEHUMIDIFY"
    HEAT_AND_HUMIDIFY = "HEAT_AND_HUMIDIFY"
    COOL_AND_DEHUMIDIFY = "COOL_AND_DEHUMIDIFY"
    OFF = "OFF"

    @property
    def label(self) -> str:
        return ACTION_LABELS[self]


ACTION_LABELS: dict[HVACAction, str] = {
    HVACAction.HEAT: "Heat",
    HVACAction.COOL: "Cool",
    HVACAction.HUMIDIFY: "Humidify",
    HVACAction.DEHUMIDIFY: "Dehumidify",
    HVACAction.HEAT_AND_HUMIDIFY: "Heat + Humidify",
    HVACAction.COOL_AND_DEHUMIDIFY: "Cool + Dehumidify",
    HVACAction.OFF: "OFF",
}

_missing = [a for a in HVACAction if a not in ACTION_LABELS]
if _missing:
    raise RuntimeError(f"Missing ACTION_LABELS for: {[m.value for m in _missing]}")
