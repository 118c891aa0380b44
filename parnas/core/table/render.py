"""Render rule tables in the tabular form domain experts review.

Responsibilities:
  - Build a pandas DataFrame with one column per dimension plus the output.
  - Provide a plain-text rendering for console drivers.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

import pandas as pd

from ..domain.models import TransitionResult
from .rule_table import RuleTable

OUTPUT_COLUMN = "Result"


def _describe_output(output: object) -> str:
    if isinstance(output, TransitionResult):
        state = _describe_output(output.new_state)
        effects = ", ".join(_describe_output(e) for e in output.effects)
        return f"{state} [{effects}]" if effects else state
    if isinstance(output, Enum):
        return output.name
    return str(output)


def to_frame(
    table: RuleTable,
    describe_output: Optional[Callable[[object], str]] = None,
) -> pd.DataFrame:
    fmt = describe_output or _describe_output
    columns = [d.name for d in table.dimensions] + [OUTPUT_COLUMN]
    rows = [[cell.describe() for cell in r.pattern] + [fmt(r.output)] for r in table.rules]
    if table.default_rule is not None:
        label_row = [table.default_rule.label] + [""] * (len(table.dimensions) - 1)
        rows.append(label_row + [fmt(table.default_rule.output)])
    return pd.DataFrame(rows, columns=columns)


def format_table(
    table: RuleTable,
    describe_output: Optional[Callable[[object], str]] = None,
) -> str:
    frame = to_frame(table, describe_output)
    header = f"{table.name} ({table.ordering.value.lower()}, {len(table.rules)} rules)"
    return header + "\n" + frame.to_string(index=False)
