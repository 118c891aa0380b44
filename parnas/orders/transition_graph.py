"""Allowed state transitions for the order state machine.

Responsibilities:
  - Define legal next states per current state.
  - The transition table is checked against this graph when the machine is built.

Invariants:
  - Terminal states only lead to themselves.
"""

from __future__ import annotations

from .enums import OrderState

ALLOWED_TRANSITIONS: dict[OrderState, set[OrderState]] = {
    OrderState.DRAFT: {OrderState.DRAFT, OrderState.PENDING_PAYMENT, OrderState.CANCELLED},
    OrderState.PENDING_PAYMENT: {
        OrderState.PENDING_PAYMENT,
        OrderState.PROCESSING,
        OrderState.BACKORDERED,
        OrderState.CANCELLED,
    },
    OrderState.PROCESSING: {OrderState.PROCESSING, OrderState.SHIPPED, OrderState.CANCELLED},
    OrderState.BACKORDERED: {OrderState.BACKORDERED, OrderState.PROCESSING, OrderState.CANCELLED},
    OrderState.SHIPPED: {OrderState.SHIPPED, OrderState.COMPLETED, OrderState.CANCELLED},
    OrderState.COMPLETED: {OrderState.COMPLETED},
    OrderState.CANCELLED: {OrderState.CANCELLED},
}
