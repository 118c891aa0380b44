"""Guardrails for state-machine transition tables.

Responsibilities:
  - Check a proposed transition against the allowed transition graph and
    the terminal-state rule.

Inputs/Outputs:
  - Inputs: current state, proposed TransitionResult, graph, terminal states.
  - Outputs: GuardrailResult with allowed flag and a reason when blocked.

Invariants:
  - Must be deterministic; used when a machine is built, not per event.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Set

from ..domain.models import TransitionResult

DISALLOWED_TRANSITION = "DISALLOWED_TRANSITION"
TERMINAL_STATE_EXIT = "TERMINAL_STATE_EXIT"
TERMINAL_STATE_EFFECTS = "TERMINAL_STATE_EFFECTS"


@dataclass
class GuardrailResult:
    allowed: bool
    reason: Optional[str] = None


def apply_guardrails(
    prev_state: Any,
    proposed: TransitionResult,
    allowed_transitions: Optional[Mapping[Any, Set[Any]]],
    terminal_states: Set[Any],
) -> GuardrailResult:
    if prev_state in terminal_states:
        if proposed.new_state != prev_state:
            return GuardrailResult(allowed=False, reason=TERMINAL_STATE_EXIT)
        if proposed.effects:
            return GuardrailResult(allowed=False, reason=TERMINAL_STATE_EFFECTS)
        return GuardrailResult(allowed=True)

    if proposed.new_state == prev_state:
        return GuardrailResult(allowed=True)

    if allowed_transitions is not None:
        if proposed.new_state not in allowed_transitions.get(prev_state, set()):
            return GuardrailResult(allowed=False, reason=DISALLOWED_TRANSITION)

    return GuardrailResult(allowed=True)
