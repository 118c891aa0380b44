"""Input dimensions of a decision table.

Responsibilities:
  - Describe one axis of classification: discrete, continuous, or guard context.
  - Reject discrete values outside the declared finite set.

Invariants:
  - Discrete values are fixed at definition time and keep declaration order.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional


def is_number(value: object) -> bool:
    # bool is an int subclass but is not a reading.
    if isinstance(value, bool):
        return False
    return isinstance(value, (numbers.Real, Decimal))


class DimensionKind(Enum):
    DISCRETE = "DISCRETE"
    CONTINUOUS = "CONTINUOUS"
    CONTEXT = "CONTEXT"


@dataclass(frozen=True)
class Dimension:
    name: str
    kind: DimensionKind
    values: tuple = ()
    expects: Optional[type] = None

    @classmethod
    def discrete(cls, name: str, values: Iterable) -> "Dimension":
        members = tuple(values)
        if not members:
            raise ValueError(f"Discrete dimension {name!r} needs at least one value")
        if len(set(members)) != len(members):
            raise ValueError(f"Discrete dimension {name!r} has duplicate values")
        return cls(name=name, kind=DimensionKind.DISCRETE, values=members)

    @classmethod
    def continuous(cls, name: str) -> "Dimension":
        return cls(name=name, kind=DimensionKind.CONTINUOUS)

    @classmethod
    def context(cls, name: str, expects: Optional[type] = None) -> "Dimension":
        return cls(name=name, kind=DimensionKind.CONTEXT, expects=expects)

    @property
    def is_enumerable(self) -> bool:
        return self.kind == DimensionKind.DISCRETE

    def check(self, value: object) -> None:
        if self.kind == DimensionKind.DISCRETE:
            # bool is an int subclass; 1 must not pass for True.
            if not any(value == v and type(value) is type(v) for v in self.values):
                raise ValueError(f"{value!r} is not a value of dimension {self.name!r}")
        elif self.kind == DimensionKind.CONTINUOUS:
            if not is_number(value):
                raise ValueError(f"Dimension {self.name!r} expects a number, got {value!r}")
        elif self.expects is not None and not isinstance(value, self.expects):
            raise ValueError(
                f"Dimension {self.name!r} expects {self.expects.__name__}, got {value!r}"
            )
