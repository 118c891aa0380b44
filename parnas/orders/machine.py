"""Order processing state machine (Mealy-style).

  Current state    Event               Guard        New state        Effects
  Draft            submit              *            Pending Payment  validateOrder, sendEmail
  Pending Payment  payment(success)    available    Processing       reserveInventory
  Pending Payment  payment(success)    unavailable  Backordered      notifyCustomer
  Pending Payment  payment(failed)     *            Cancelled        refundInitiated
  Pending Payment  payment(pending)    *            Pending Payment  -
  Backordered      inventoryAvailable  *            Processing       reserveInventory, notifyCustomer
  Processing       ship                *            Shipped          updateTracking
  Shipped          deliver             *            Completed        sendReceipt
  (not terminal)   cancel              *            Cancelled        cancelOrder, releaseInventory

Terminal states: Completed, Cancelled. Every other combination keeps the
current state and emits nothing.
"""

from __future__ import annotations

from parnas.core.domain.dimensions import Dimension
from parnas.core.domain.models import TransitionResult, rule
from parnas.core.engine.state_machine import StateMachine
from parnas.core.table.matchers import ANY, Guard, OneOf
from parnas.core.table.rule_table import Ordering, RuleTable
from .enums import TERMINAL_STATES, InventoryStatus, OrderEffect, OrderState, PaymentStatus
from .events import (
    ALL_EVENTS,
    Cancel,
    Deliver,
    InventoryAvailable,
    OrderContext,
    OrderEvent,
    PaymentProcessed,
    Ship,
    Submit,
)
from .transition_graph import ALLOWED_TRANSITIONS

INVENTORY_AVAILABLE = Guard(
    "available",
    lambda ctx: ctx.inventory is InventoryStatus.AVAILABLE,
    negated_name="unavailable",
)

NON_TERMINAL_STATES = OneOf(frozenset(s for s in OrderState if s not in TERMINAL_STATES))

ORDER_DIMENSIONS = (
    Dimension.discrete("state", OrderState),
    Dimension.discrete("event", ALL_EVENTS),
    Dimension.context("inventory", expects=OrderContext),
)


def _go(state: OrderState, *effects: OrderEffect) -> TransitionResult:
    return TransitionResult(new_state=state, effects=tuple(effects))


def build_order_table() -> RuleTable[TransitionResult]:
    rules = [
        rule(OrderState.DRAFT, Submit(), ANY,
             then=_go(OrderState.PENDING_PAYMENT, OrderEffect.VALIDATE_ORDER, OrderEffect.SEND_EMAIL),
             label="submit"),
        rule(OrderState.PENDING_PAYMENT, PaymentProcessed(PaymentStatus.SUCCESS), INVENTORY_AVAILABLE,
             then=_go(OrderState.PROCESSING, OrderEffect.RESERVE_INVENTORY),
             label="paid, in stock"),
        rule(OrderState.PENDING_PAYMENT, PaymentProcessed(PaymentStatus.SUCCESS), ~INVENTORY_AVAILABLE,
             then=_go(OrderState.BACKORDERED, OrderEffect.NOTIFY_CUSTOMER),
             label="paid, out of stock"),
        rule(OrderState.PENDING_PAYMENT, PaymentProcessed(PaymentStatus.FAILED), ANY,
             then=_go(OrderState.CANCELLED, OrderEffect.REFUND_INITIATED),
             label="payment failed"),
        rule(OrderState.PENDING_PAYMENT, PaymentProcessed(PaymentStatus.PENDING), ANY,
             then=_go(OrderState.PENDING_PAYMENT),
             label="payment pending"),
        rule(OrderState.BACKORDERED, InventoryAvailable(), ANY,
             then=_go(OrderState.PROCESSING, OrderEffect.RESERVE_INVENTORY, OrderEffect.NOTIFY_CUSTOMER),
             label="restocked"),
        rule(OrderState.PROCESSING, Ship(), ANY,
             then=_go(OrderState.SHIPPED, OrderEffect.UPDATE_TRACKING),
             label="ship"),
        rule(OrderState.SHIPPED, Deliver(), ANY,
             then=_go(OrderState.COMPLETED, OrderEffect.SEND_RECEIPT),
             label="deliver"),
        rule(NON_TERMINAL_STATES, Cancel(), ANY,
             then=_go(OrderState.CANCELLED, OrderEffect.CANCEL_ORDER, OrderEffect.RELEASE_INVENTORY),
             label="cancel"),
    ]
    return RuleTable(
        "orders",
        ORDER_DIMENSIONS,
        rules,
        ordering=Ordering.DISJOINT,
        require_complete=False,
    )


def build_order_machine() -> StateMachine:
    return StateMachine(
        "orders",
        build_order_table(),
        terminal_states=TERMINAL_STATES,
        allowed_transitions=ALLOWED_TRANSITIONS,
    )


_DEFAULT_MACHINE = build_order_machine()


def process_order_event(
    state: OrderState,
    event: OrderEvent,
    context: OrderContext | None = None,
) -> TransitionResult:
    return _DEFAULT_MACHINE.transition(state, event, context or OrderContext())
