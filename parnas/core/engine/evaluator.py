"""State machine evaluation for a single event or a sequence of events.

Responsibilities:
  - Resolve one event against a StateMachine and wrap the outcome for tracing.
  - Replay an ordered list of events from an initial state.

Inputs/Outputs:
  - Inputs: previous state, event, guard context, and a StateMachine.
  - Outputs: EvaluationResult with final state, effects, and transition.

Invariants:
  - Must not execute effects; they are returned in order.
  - No-op steps (undefined or terminal) produce no Transition.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

from ..domain.models import Transition
from .result import EvaluationResult
from .state_machine import StateMachine

_DEBUG_FN: Callable[[str], None] | None = None


def set_evaluator_debug(fn: Callable[[str], None] | None) -> None:
    global _DEBUG_FN
    _DEBUG_FN = fn


def evaluate_step(
    machine: StateMachine,
    prev_state: Any,
    event: Any,
    context: Any,
) -> EvaluationResult:
    outcome, matched = machine.resolve(prev_state, event, context)
    no_op = matched is None

    if _DEBUG_FN is not None and no_op:
        origin = "TERMINAL" if machine.is_terminal(prev_state) else "UNDEFINED"
        _DEBUG_FN(
            f"NO_TRANSITION_ORIGIN={origin} machine={machine.name} "
            f"state={prev_state} event={event}"
        )

    transition: Transition | None
    if outcome.new_state != prev_state:
        transition = Transition(
            from_state=prev_state,
            to_state=outcome.new_state,
            effects=outcome.effects,
        )
    else:
        transition = None

    return EvaluationResult(
        prev_state=prev_state,
        event=event,
        final_state=outcome.new_state,
        effects=outcome.effects,
        transition=transition,
        matched_rule=None if matched is None else matched.describe(),
        no_op=no_op,
    )


def replay(
    machine: StateMachine,
    initial_state: Any,
    steps: Iterable[tuple[Any, Any]],
) -> list[EvaluationResult]:
    """Feed (event, context) pairs in order, threading the state through."""
    results: list[EvaluationResult] = []
    state = initial_state
    for event, context in steps:
        result = evaluate_step(machine, state, event, context)
        results.append(result)
        state = result.final_state
    return results
