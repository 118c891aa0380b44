"""Immutable carriers for rules and state-machine outputs.

Responsibilities:
  - Define Rule (pattern + output), TransitionResult and Transition.

Invariants:
  - Models are deterministic containers; matching delegates to the cells.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, Sequence, TypeVar

from ..table.matchers import Matcher, coerce_cell

O = TypeVar("O")


@dataclass(frozen=True)
class Rule(Generic[O]):
    pattern: tuple[Matcher, ...]
    output: O
    label: Optional[str] = None

    def matches(self, values: Sequence[object]) -> bool:
        return all(cell.matches(value) for cell, value in zip(self.pattern, values))

    def describe(self) -> str:
        if self.label:
            return self.label
        return "(" + ", ".join(cell.describe() for cell in self.pattern) + ")"


def rule(*cells: object, then: Any, label: Optional[str] = None) -> Rule:
    return Rule(pattern=tuple(coerce_cell(c) for c in cells), output=then, label=label)


@dataclass(frozen=True)
class TransitionResult:
    new_state: Any
    effects: tuple = ()


@dataclass(frozen=True)
class Transition:
    from_state: Any
    to_state: Any
    effects: tuple
