"""Exceptions raised by rule tables and their evaluators.

Responsibilities:
  - Separate table definition defects (raised at construction) from
    unmatched inputs (raised at evaluation).

Invariants:
  - Unmatched input is never turned into a default by the evaluator.
  - State machines do not raise for undefined transitions; they stay put.
"""

from __future__ import annotations


class RuleTableError(Exception):
    pass


class TableDefinitionError(RuleTableError, ValueError):
    """The table itself is malformed; fix the table, not the input."""


class OverlappingRulesError(TableDefinitionError):
    def __init__(self, table_name: str, conflicts: list[tuple[str, str]]) -> None:
        self.table_name = table_name
        self.conflicts = conflicts
        pairs = ", ".join(f"{a} / {b}" for a, b in conflicts[:5])
        more = f" (+{len(conflicts) - 5} more)" if len(conflicts) > 5 else ""
        super().__init__(f"Table {table_name!r} has overlapping rules with different outputs: {pairs}{more}")


class IncompleteTableError(TableDefinitionError):
    def __init__(self, table_name: str, gaps: list[tuple]) -> None:
        self.table_name = table_name
        self.gaps = gaps
        shown = ", ".join(repr(g) for g in gaps[:5])
        more = f" (+{len(gaps) - 5} more)" if len(gaps) > 5 else ""
        super().__init__(f"Table {table_name!r} does not cover: {shown}{more}")


class UnmatchedInputError(RuleTableError, RuntimeError):
    def __init__(self, table_name: str, values: tuple) -> None:
        self.table_name = table_name
        self.values = values
        super().__init__(f"No rule in table {table_name!r} matches input {values!r}")
