"""Completeness and disjointness checks for rule tables.

Responsibilities:
  - find_conflicts: pairs of rules that can match one input with different outputs.
  - find_gaps: uncovered combinations of tables whose axes are all enumerable.
  - scan_partition: dense sampling for tables with continuous axes, where no
    static completeness check exists.

Invariants:
  - Checks are pure; they never mutate rules or tables.
  - scan_partition samples every declared interval boundary and both of its
    nearest float neighbours.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import product
from typing import TYPE_CHECKING, Mapping, Sequence

import numpy as np

from ..domain.dimensions import Dimension, DimensionKind
from ..domain.models import Rule
from .matchers import AnyValue, Guard, Interval, cells_overlap

if TYPE_CHECKING:
    from .rule_table import RuleTable


def rules_overlap(a: Rule, b: Rule) -> bool:
    return all(cells_overlap(x, y) for x, y in zip(a.pattern, b.pattern))


def find_conflicts(rules: Sequence[Rule]) -> list[tuple[Rule, Rule]]:
    conflicts: list[tuple[Rule, Rule]] = []
    for i, first in enumerate(rules):
        for second in rules[i + 1 :]:
            if first.output != second.output and rules_overlap(first, second):
                conflicts.append((first, second))
    return conflicts


def _context_covered(candidates: list[Rule], context_positions: list[int]) -> bool:
    if not context_positions:
        return bool(candidates)
    for r in candidates:
        if all(isinstance(r.pattern[i], AnyValue) for i in context_positions):
            return True
    if len(context_positions) != 1:
        return False
    pos = context_positions[0]
    guards = [r.pattern[pos] for r in candidates if isinstance(r.pattern[pos], Guard)]
    return any(a.is_complement_of(b) for a in guards for b in guards)


def find_gaps(
    dimensions: Sequence[Dimension], rules: Sequence[Rule], limit: int | None = None
) -> list[tuple]:
    if any(d.kind == DimensionKind.CONTINUOUS for d in dimensions):
        raise ValueError("find_gaps needs enumerable dimensions; use scan_partition for continuous axes")
    enum_positions = [i for i, d in enumerate(dimensions) if d.is_enumerable]
    context_positions = [i for i, d in enumerate(dimensions) if d.kind == DimensionKind.CONTEXT]

    gaps: list[tuple] = []
    for combo in product(*(dimensions[i].values for i in enum_positions)):
        candidates = [
            r for r in rules if all(r.pattern[i].matches(v) for i, v in zip(enum_positions, combo))
        ]
        if _context_covered(candidates, context_positions):
            continue
        point: list[object] = [None] * len(dimensions)
        for i, v in zip(enum_positions, combo):
            point[i] = v
        gaps.append(tuple(point))
        if limit is not None and len(gaps) >= limit:
            break
    return gaps


@dataclass
class PartitionReport:
    checked: int = 0
    gaps: list[tuple] = field(default_factory=list)
    overlaps: list[tuple[tuple, list[str]]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.gaps and not self.overlaps


def _plain(value: object) -> object:
    if isinstance(value, np.generic):
        return value.item()
    return value


def boundary_samples(
    table: "RuleTable",
    dimension: str,
    span: tuple[float, float],
    points: int = 201,
) -> np.ndarray:
    idx = table.index_of(dimension)
    bounds = sorted(
        {
            b
            for r in table.rules
            if isinstance(r.pattern[idx], Interval)
            for b in r.pattern[idx].bounds
        }
    )
    grid = np.linspace(span[0], span[1], points)
    if not bounds:
        return grid
    edges = np.asarray(bounds, dtype=float)
    near = np.concatenate([edges, np.nextafter(edges, -np.inf), np.nextafter(edges, np.inf)])
    return np.unique(np.concatenate([grid, near]))


def scan_partition(table: "RuleTable", samples: Mapping[str, Sequence[object]]) -> PartitionReport:
    axes: list[list[object]] = []
    for dim in table.dimensions:
        if dim.name in samples:
            axes.append([_plain(v) for v in samples[dim.name]])
        elif dim.is_enumerable:
            axes.append(list(dim.values))
        else:
            raise ValueError(f"No samples given for dimension {dim.name!r}")

    report = PartitionReport()
    for point in product(*axes):
        report.checked += 1
        hits = [r for r in table.rules if r.matches(point)]
        if not hits:
            if table.default_rule is None:
                report.gaps.append(point)
            continue
        first_output = hits[0].output
        if any(h.output != first_output for h in hits[1:]):
            report.overlaps.append((point, [h.describe() for h in hits]))
    return report
