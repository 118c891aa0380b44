"""Order events and the guard context they are evaluated with.

Events are a closed set of frozen dataclasses; PaymentProcessed carries a
PaymentStatus, so ALL_EVENTS lists one entry per status.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .enums import InventoryStatus, PaymentStatus


@dataclass(frozen=True)
class Submit:
    def __str__(self) -> str:
        return "submit"


@dataclass(frozen=True)
class PaymentProcessed:
    status: PaymentStatus

    def __str__(self) -> str:
        return f"paymentProcessed({self.status.value.lower()})"


@dataclass(frozen=True)
class InventoryAvailable:
    def __str__(self) -> str:
        return "inventoryAvailable"


@dataclass(frozen=True)
class Ship:
    def __str__(self) -> str:
        return "ship"


@dataclass(frozen=True)
class Deliver:
    def __str__(self) -> str:
        return "deliver"


@dataclass(frozen=True)
class Cancel:
    def __str__(self) -> str:
        return "cancel"


OrderEvent = Union[Submit, PaymentProcessed, InventoryAvailable, Ship, Deliver, Cancel]

ALL_EVENTS: tuple = (
    Submit(),
    *(PaymentProcessed(status) for status in PaymentStatus),
    InventoryAvailable(),
    Ship(),
    Deliver(),
    Cancel(),
)


@dataclass(frozen=True)
class OrderContext:
    inventory: InventoryStatus = InventoryStatus.AVAILABLE


_SIMPLE_EVENTS = {
    "submit": Submit(),
    "inventory": InventoryAvailable(),
    "inventory_available": InventoryAvailable(),
    "ship": Ship(),
    "deliver": Deliver(),
    "cancel": Cancel(),
}


def parse_event(token: str) -> OrderEvent:
    """Parse a CLI token such as ``submit`` or ``payment:success``."""
    raw = token.strip().lower()
    if raw in _SIMPLE_EVENTS:
        return _SIMPLE_EVENTS[raw]
    if raw.startswith("payment:"):
        status = raw[len("payment:") :].upper()
        try:
            return PaymentProcessed(PaymentStatus(status))
        except ValueError:
            raise ValueError(f"Unknown payment status in event {token!r}") from None
    raise ValueError(f"Unknown order event: {token!r}")
