"""Access control input and result enums.

Invariants:
  - Every AccessResult has a display symbol; checked at import.
"""

from __future__ import annotations

from enum import Enum


class UserRole(Enum):
    ADMIN = "ADMIN"
    USER = "USER"
    GUEST = "GUEST"


class ResourceType(Enum):
    PUBLIC = "PUBLIC"
    SHARED = "SHARED"
    PRIVATE = "PRIVATE"


class Action(Enum):
    READ = "READ"
    WRITE = "WRITE"
    DELETE = "DELETE"


class AccessResult(Enum):
    ALLOW = "ALLOW"
    DENY = "DENY"

    @property
    def symbol(self) -> str:
        return RESULT_SYMBOLS[self]


RESULT_SYMBOLS: dict[AccessResult, str] = {
    AccessResult.ALLOW: "✓",
    AccessResult.DENY: "✗",
}

_missing = [r for r in AccessResult if r not in RESULT_SYMBOLS]
if _missing:
    raise RuntimeError(f"Missing RESULT_SYMBOLS for: {[m.value for m in _missing]}")
