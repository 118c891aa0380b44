"""Order processing enums: states, payment/inventory status, effect tokens.

Invariants:
  - Enum values are stable identifiers used in traces.
  - Every OrderState has a display name and every OrderEffect has metadata;
    both are checked at import.
"""

from __future__ import annotations

from enum import Enum


class OrderState(Enum):
    DRAFT = "DRAFT"
    PENDING_PAYMENT = "PENDING_PAYMENT"
    PROCESSING = "PROCESSING"
    BACKORDERED = "BACKORDERED"
    SHIPPED = "SHIPPED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    def __str__(self) -> str:
        return STATE_NAMES[self]


TERMINAL_STATES = frozenset({OrderState.COMPLETED, OrderState.CANCELLED})

STATE_NAMES: dict[OrderState, str] = {
    OrderState.DRAFT: "Draft",
    OrderState.PENDING_PAYMENT: "Pending Payment",
    OrderState.PROCESSING: "Processing",
    OrderState.BACKORDERED: "Backordered",
    OrderState.SHIPPED: "Shipped",
    OrderState.COMPLETED: "Completed",
    OrderState.CANCELLED: "Cancelled",
}


class PaymentStatus(Enum):
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class InventoryStatus(Enum):
    AVAILABLE = "AVAILABLE"
    UNAVAILABLE = "UNAVAILABLE"


# Effect tokens are reported by transitions; executing them is the caller's job.
class OrderEffect(Enum):
    VALIDATE_ORDER = "validateOrder"
    SEND_EMAIL = "sendEmail"
    RESERVE_INVENTORY = "reserveInventory"
    NOTIFY_CUSTOMER = "notifyCustomer"
    REFUND_INITIATED = "refundInitiated"
    CANCEL_ORDER = "cancelOrder"
    RELEASE_INVENTORY = "releaseInventory"
    UPDATE_TRACKING = "updateTracking"
    SEND_RECEIPT = "sendReceipt"

    def __str__(self) -> str:
        return f"{self.value}()"


EFFECT_METADATA: dict[OrderEffect, dict[str, str]] = {
    OrderEffect.VALIDATE_ORDER: {"message": "Validate order contents and pricing."},
    OrderEffect.SEND_EMAIL: {"message": "Send order confirmation email."},
    OrderEffect.RESERVE_INVENTORY: {"message": "Reserve stock for the order."},
    OrderEffect.NOTIFY_CUSTOMER: {"message": "Notify the customer of a status change."},
    OrderEffect.REFUND_INITIATED: {"message": "Start a refund for the failed payment."},
    OrderEffect.CANCEL_ORDER: {"message": "Mark the order cancelled."},
    OrderEffect.RELEASE_INVENTORY: {"message": "Release any reserved stock."},
    OrderEffect.UPDATE_TRACKING: {"message": "Publish shipment tracking details."},
    OrderEffect.SEND_RECEIPT: {"message": "Send the delivery receipt."},
}

_missing = [s for s in OrderState if s not in STATE_NAMES]
if _missing:
    raise RuntimeError(f"Missing STATE_NAMES for: {[m.value for m in _missing]}")

_missing = [e for e in OrderEffect if e not in EFFECT_METADATA]
if _missing:
    raise RuntimeError(f"Missing EFFECT_METADATA for: {[m.value for m in _missing]}")
