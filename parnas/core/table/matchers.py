"""Pattern cells for decision-table rules.

Responsibilities:
  - Match one input value per dimension: wildcard, value set, event kind,
    numeric interval, or guard predicate over the context value.
  - Decide conservatively whether two cells can match a common value.

Invariants:
  - cells_overlap returns False only when the cells are provably disjoint.
  - Interval boundaries are explicit; NaN is never inside an interval.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Union

from ..domain.dimensions import is_number


def _fmt_value(value: object) -> str:
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class AnyValue:
    def matches(self, value: object) -> bool:
        return True

    def describe(self) -> str:
        return "*"


ANY = AnyValue()


@dataclass(frozen=True)
class OneOf:
    values: frozenset

    def __post_init__(self) -> None:
        if not self.values:
            raise ValueError("OneOf needs at least one value")

    def matches(self, value: object) -> bool:
        return any(value == v and type(value) is type(v) for v in self.values)

    def describe(self) -> str:
        return " | ".join(sorted(_fmt_value(v) for v in self.values))


def exact(value: object) -> OneOf:
    return OneOf(frozenset([value]))


def one_of(*values: object) -> OneOf:
    return OneOf(frozenset(values))


@dataclass(frozen=True)
class Kind:
    """Matches every value of a class, whatever its payload."""

    cls: type

    def matches(self, value: object) -> bool:
        return isinstance(value, self.cls)

    def describe(self) -> str:
        return f"{self.cls.__name__}(*)"


@dataclass(frozen=True)
class Interval:
    lower: float = -math.inf
    upper: float = math.inf
    lower_closed: bool = True
    upper_closed: bool = False

    def __post_init__(self) -> None:
        if math.isnan(self.lower) or math.isnan(self.upper):
            raise ValueError("Interval bounds must not be NaN")
        if self.lower > self.upper:
            raise ValueError(f"Interval lower bound {self.lower} exceeds upper bound {self.upper}")
        if self.lower == self.upper and not (self.lower_closed and self.upper_closed):
            raise ValueError(f"Interval at {self.lower} is empty")
        # Infinite bounds mean "unbounded", so a single point at infinity has no meaning.
        if self.lower == self.upper and math.isinf(self.lower):
            raise ValueError(f"Interval cannot sit entirely at {self.lower}")

    def matches(self, value: object) -> bool:
        if not is_number(value):
            return False
        if math.isnan(value):
            return False
        if not math.isinf(self.lower):
            if value < self.lower or (value == self.lower and not self.lower_closed):
                return False
        if not math.isinf(self.upper):
            if value > self.upper or (value == self.upper and not self.upper_closed):
                return False
        return True

    def intersects(self, other: "Interval") -> bool:
        if self.lower > other.lower:
            lo, lo_closed = self.lower, self.lower_closed
        elif self.lower < other.lower:
            lo, lo_closed = other.lower, other.lower_closed
        else:
            lo, lo_closed = self.lower, self.lower_closed and other.lower_closed

        if self.upper < other.upper:
            hi, hi_closed = self.upper, self.upper_closed
        elif self.upper > other.upper:
            hi, hi_closed = other.upper, other.upper_closed
        else:
            hi, hi_closed = self.upper, self.upper_closed and other.upper_closed

        if lo < hi:
            return True
        if lo == hi:
            return math.isinf(lo) or (lo_closed and hi_closed)
        return False

    @property
    def bounds(self) -> list[float]:
        return [b for b in (self.lower, self.upper) if not math.isinf(b)]

    def describe(self) -> str:
        lo_inf = math.isinf(self.lower)
        hi_inf = math.isinf(self.upper)
        if lo_inf and hi_inf:
            return "*"
        if lo_inf:
            return f"{'≤' if self.upper_closed else '<'} {_fmt_value(self.upper)}"
        if hi_inf:
            return f"{'≥' if self.lower_closed else '>'} {_fmt_value(self.lower)}"
        left = "[" if self.lower_closed else "("
        right = "]" if self.upper_closed else ")"
        return f"{left}{_fmt_value(self.lower)}, {_fmt_value(self.upper)}{right}"


def below(upper: float) -> Interval:
    return Interval(upper=upper, upper_closed=False)


def at_most(upper: float) -> Interval:
    return Interval(upper=upper, upper_closed=True)


def at_least(lower: float) -> Interval:
    return Interval(lower=lower, lower_closed=True)


def above(lower: float) -> Interval:
    return Interval(lower=lower, lower_closed=False)


def half_open(lower: float, upper: float) -> Interval:
    return Interval(lower=lower, upper=upper, lower_closed=True, upper_closed=False)


def closed(lower: float, upper: float) -> Interval:
    return Interval(lower=lower, upper=upper, lower_closed=True, upper_closed=True)


class _GuardToken:
    pass


@dataclass(frozen=True, eq=False)
class Guard:
    """Boolean predicate over the context value of a rule.

    A guard and its complement (``~guard``) share a token; that pairing is
    the only disjointness the validator can see for guards.
    """

    name: str
    predicate: Callable[[Any], bool]
    negated_name: Optional[str] = None
    negated: bool = False
    token: _GuardToken = field(default_factory=_GuardToken)

    def matches(self, value: object) -> bool:
        result = bool(self.predicate(value))
        return not result if self.negated else result

    def __invert__(self) -> "Guard":
        return Guard(
            name=self.negated_name or f"not {self.name}",
            predicate=self.predicate,
            negated_name=self.name,
            negated=not self.negated,
            token=self.token,
        )

    def is_complement_of(self, other: "Guard") -> bool:
        return self.token is other.token and self.negated != other.negated

    def describe(self) -> str:
        return self.name


Matcher = Union[AnyValue, OneOf, Kind, Interval, Guard]
MATCHER_TYPES = (AnyValue, OneOf, Kind, Interval, Guard)


def coerce_cell(cell: object) -> Matcher:
    if isinstance(cell, MATCHER_TYPES):
        return cell
    if isinstance(cell, (set, frozenset)):
        return OneOf(frozenset(cell))
    return exact(cell)


def _values_overlap(values: Iterable[object], other: Matcher) -> bool:
    return any(other.matches(v) for v in values)


def cells_overlap(a: Matcher, b: Matcher) -> bool:
    if isinstance(a, AnyValue) or isinstance(b, AnyValue):
        return True
    if isinstance(a, Guard) or isinstance(b, Guard):
        if isinstance(a, Guard) and isinstance(b, Guard):
            return not a.is_complement_of(b)
        return True
    if isinstance(a, Interval) and isinstance(b, Interval):
        return a.intersects(b)
    if isinstance(a, Kind) and isinstance(b, Kind):
        return issubclass(a.cls, b.cls) or issubclass(b.cls, a.cls)
    if isinstance(a, OneOf):
        return _values_overlap(a.values, b)
    if isinstance(b, OneOf):
        return _values_overlap(b.values, a)
    # Kind against Interval: numbers are not event kinds.
    return False
