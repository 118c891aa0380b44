"""Rule table and its evaluator.

Responsibilities:
  - Hold dimensions, ordered rules and an optional explicit default row.
  - Validate the table at construction (shape, disjointness, completeness).
  - Evaluate an input tuple to exactly one output.

Inputs/Outputs:
  - Inputs: one value per dimension, positional or by dimension name.
  - Outputs: the matched rule's output; UnmatchedInputError when none matches.

Invariants:
  - Evaluation is pure and O(number of rules).
  - DISJOINT tables reject conflicting overlaps, so rule order cannot change a result.
  - FIRST_MATCH tables resolve overlaps by declaration order, by explicit choice.
  - An unmatched input without a default is a defect and raises; it never
    falls back silently.
"""

from __future__ import annotations

from enum import Enum
from typing import Generic, Iterable, Optional, Sequence, TypeVar

from ..domain.dimensions import Dimension, DimensionKind
from ..domain.errors import (
    IncompleteTableError,
    OverlappingRulesError,
    TableDefinitionError,
    UnmatchedInputError,
)
from ..domain.models import Rule
from .matchers import ANY, AnyValue, Guard, Interval, Kind, OneOf
from .validation import find_conflicts, find_gaps

O = TypeVar("O")

_NO_DEFAULT = object()


class Ordering(Enum):
    DISJOINT = "DISJOINT"
    FIRST_MATCH = "FIRST_MATCH"


# Cell types each dimension kind accepts besides ANY.
_ALLOWED_CELLS: dict[DimensionKind, tuple[type, ...]] = {
    DimensionKind.DISCRETE: (OneOf, Kind),
    DimensionKind.CONTINUOUS: (Interval,),
    DimensionKind.CONTEXT: (Guard,),
}


def first_match(rules: Iterable[Rule], values: Sequence[object]) -> Optional[Rule]:
    for candidate in rules:
        if candidate.matches(values):
            return candidate
    return None


class RuleTable(Generic[O]):
    def __init__(
        self,
        name: str,
        dimensions: Sequence[Dimension],
        rules: Sequence[Rule],
        *,
        ordering: Ordering = Ordering.DISJOINT,
        default: object = _NO_DEFAULT,
        require_complete: bool = True,
    ) -> None:
        self.name = name
        self.dimensions: tuple[Dimension, ...] = tuple(dimensions)
        self.rules: tuple[Rule, ...] = tuple(rules)
        self.ordering = ordering
        self.default_rule: Optional[Rule] = None
        if default is not _NO_DEFAULT:
            self.default_rule = Rule(
                pattern=tuple(ANY for _ in self.dimensions),
                output=default,
                label="(all other combinations)",
            )

        names = [d.name for d in self.dimensions]
        if len(set(names)) != len(names):
            raise TableDefinitionError(f"Table {name!r} has duplicate dimension names: {names}")
        self._index = {d.name: i for i, d in enumerate(self.dimensions)}

        for r in self.rules:
            self._check_shape(r)

        if self.ordering == Ordering.DISJOINT:
            conflicts = find_conflicts(self.rules)
            if conflicts:
                raise OverlappingRulesError(
                    self.name, [(a.describe(), b.describe()) for a, b in conflicts]
                )

        if require_complete and self.default_rule is None and self.is_enumerable:
            gaps = find_gaps(self.dimensions, self.rules)
            if gaps:
                raise IncompleteTableError(self.name, gaps)

    @property
    def is_enumerable(self) -> bool:
        return all(d.kind != DimensionKind.CONTINUOUS for d in self.dimensions)

    def index_of(self, dimension: str) -> int:
        if dimension not in self._index:
            raise ValueError(f"Table {self.name!r} has no dimension {dimension!r}")
        return self._index[dimension]

    def _check_shape(self, r: Rule) -> None:
        if len(r.pattern) != len(self.dimensions):
            raise TableDefinitionError(
                f"Rule {r.describe()} in table {self.name!r} has {len(r.pattern)} cells, "
                f"expected {len(self.dimensions)}"
            )
        for dim, cell in zip(self.dimensions, r.pattern):
            if isinstance(cell, AnyValue):
                continue
            if not isinstance(cell, _ALLOWED_CELLS[dim.kind]):
                raise TableDefinitionError(
                    f"Rule {r.describe()} uses {type(cell).__name__} on "
                    f"{dim.kind.value.lower()} dimension {dim.name!r}"
                )
            if isinstance(cell, OneOf):
                for value in cell.values:
                    try:
                        dim.check(value)
                    except ValueError as exc:
                        raise TableDefinitionError(f"Rule {r.describe()}: {exc}") from exc
            elif isinstance(cell, Kind) and not any(cell.matches(v) for v in dim.values):
                raise TableDefinitionError(
                    f"Rule {r.describe()}: {cell.describe()} covers no value of "
                    f"dimension {dim.name!r}"
                )

    def bind(self, *values: object, **named: object) -> tuple:
        if values and named:
            raise TypeError("Pass dimension values either positionally or by name, not both")
        if named:
            unknown = set(named) - set(self._index)
            if unknown:
                raise TypeError(f"Unknown dimensions for table {self.name!r}: {sorted(unknown)}")
            missing = [d.name for d in self.dimensions if d.name not in named]
            if missing:
                raise TypeError(f"Missing dimensions for table {self.name!r}: {missing}")
            values = tuple(named[d.name] for d in self.dimensions)
        if len(values) != len(self.dimensions):
            raise TypeError(
                f"Table {self.name!r} takes {len(self.dimensions)} values, got {len(values)}"
            )
        for dim, value in zip(self.dimensions, values):
            dim.check(value)
        return tuple(values)

    def match(self, *values: object, **named: object) -> Optional[Rule]:
        point = self.bind(*values, **named)
        matched = first_match(self.rules, point)
        if matched is not None:
            return matched
        return self.default_rule

    def evaluate(self, *values: object, **named: object) -> O:
        point = self.bind(*values, **named)
        matched = first_match(self.rules, point)
        if matched is None:
            matched = self.default_rule
        if matched is None:
            raise UnmatchedInputError(self.name, point)
        return matched.output

    def __repr__(self) -> str:
        return (
            f"RuleTable(name={self.name!r}, dimensions={[d.name for d in self.dimensions]}, "
            f"rules={len(self.rules)}, ordering={self.ordering.value})"
        )
