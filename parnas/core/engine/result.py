"""Evaluation result payload for a single state-machine step.

Responsibilities:
  - Capture final state, effects, and transition metadata for tracing/audit.

Inputs/Outputs:
  - Inputs: produced by evaluator.evaluate_step.
  - Outputs: immutable dataclass consumed by drivers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..domain.models import Transition


@dataclass(frozen=True)
class EvaluationResult:
    prev_state: Any
    event: Any
    final_state: Any
    effects: tuple
    transition: Optional[Transition]
    matched_rule: Optional[str]
    no_op: bool
