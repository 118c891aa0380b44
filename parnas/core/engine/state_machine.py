"""Mealy-style state machine over a (state, event, context) rule table.

Responsibilities:
  - Resolve (state, event, guard context) to a new state and effect tokens.
  - Enforce the terminal-state rule and the allowed transition graph when
    the machine is built.

Inputs/Outputs:
  - Inputs: current state, event, guard context (owned by the caller).
  - Outputs: TransitionResult; effects are reported, never executed.

Invariants:
  - Undefined (state, event) combinations are a no-op: same state, no effects.
  - Any event in a terminal state is a no-op.
  - The machine holds no current state; callers own and replace it.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Set

from ..domain.dimensions import DimensionKind
from ..domain.errors import TableDefinitionError
from ..domain.models import Rule, TransitionResult
from ..table.rule_table import RuleTable
from .guardrails import apply_guardrails

_EXPECTED_KINDS = (DimensionKind.DISCRETE, DimensionKind.DISCRETE, DimensionKind.CONTEXT)


class StateMachine:
    def __init__(
        self,
        name: str,
        table: RuleTable,
        terminal_states: Set[Any],
        allowed_transitions: Optional[Mapping[Any, Set[Any]]] = None,
    ) -> None:
        self.name = name
        self.table = table
        self.terminal_states = frozenset(terminal_states)
        self.allowed_transitions = allowed_transitions
        self._validate()

    @property
    def states(self) -> tuple:
        return self.table.dimensions[0].values

    @property
    def events(self) -> tuple:
        return self.table.dimensions[1].values

    def _validate(self) -> None:
        kinds = tuple(d.kind for d in self.table.dimensions)
        if kinds != _EXPECTED_KINDS:
            raise TableDefinitionError(
                f"State machine {self.name!r} needs (state, event, context) dimensions, got "
                f"{[k.value for k in kinds]}"
            )
        if self.table.default_rule is not None:
            raise TableDefinitionError(
                f"State machine {self.name!r} must not define a default row; "
                "undefined transitions stay in the current state"
            )
        unknown = [s for s in self.terminal_states if s not in self.states]
        if unknown:
            raise TableDefinitionError(f"Unknown terminal states for {self.name!r}: {unknown}")

        if self.allowed_transitions is not None:
            missing = [s for s in self.states if s not in self.allowed_transitions]
            if missing:
                raise TableDefinitionError(f"Transition graph of {self.name!r} misses states: {missing}")
            for terminal in self.terminal_states:
                exits = set(self.allowed_transitions[terminal]) - {terminal}
                if exits:
                    raise TableDefinitionError(
                        f"Terminal state {terminal!r} of {self.name!r} allows exits to {sorted(map(str, exits))}"
                    )

        for r in self.table.rules:
            if not isinstance(r.output, TransitionResult):
                raise TableDefinitionError(f"Rule {r.describe()} does not produce a TransitionResult")
            for state in self.states:
                if not r.pattern[0].matches(state):
                    continue
                verdict = apply_guardrails(
                    state, r.output, self.allowed_transitions, self.terminal_states
                )
                if not verdict.allowed:
                    raise TableDefinitionError(
                        f"Rule {r.describe()} in {self.name!r} from {state!r}: {verdict.reason}"
                    )

    def is_terminal(self, state: Any) -> bool:
        return state in self.terminal_states

    def resolve(
        self, state: Any, event: Any, context: Any
    ) -> tuple[TransitionResult, Optional[Rule]]:
        self.table.bind(state, event, context)
        if state in self.terminal_states:
            return TransitionResult(new_state=state, effects=()), None
        matched = self.table.match(state, event, context)
        if matched is None:
            return TransitionResult(new_state=state, effects=()), None
        return matched.output, matched

    def transition(self, state: Any, event: Any, context: Any) -> TransitionResult:
        result, _ = self.resolve(state, event, context)
        return result
