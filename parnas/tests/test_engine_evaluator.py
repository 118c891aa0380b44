"""Tests for the state-machine step evaluator and lifecycle replay."""

from __future__ import annotations

import pytest

from parnas.core.domain.models import Transition, TransitionResult
from parnas.core.engine.evaluator import evaluate_step, replay, set_evaluator_debug
from parnas.core.engine.guardrails import (
    DISALLOWED_TRANSITION,
    TERMINAL_STATE_EFFECTS,
    TERMINAL_STATE_EXIT,
    apply_guardrails,
)
from parnas.orders.enums import TERMINAL_STATES, InventoryStatus, OrderEffect, OrderState, PaymentStatus
from parnas.orders.events import Cancel, Deliver, OrderContext, PaymentProcessed, Ship, Submit
from parnas.orders.machine import build_order_machine
from parnas.orders.transition_graph import ALLOWED_TRANSITIONS

CTX = OrderContext()


def test_evaluate_step_records_transition():
    machine = build_order_machine()
    result = evaluate_step(machine, OrderState.DRAFT, Submit(), CTX)
    assert result.prev_state == OrderState.DRAFT
    assert result.final_state == OrderState.PENDING_PAYMENT
    assert result.transition == Transition(
        from_state=OrderState.DRAFT,
        to_state=OrderState.PENDING_PAYMENT,
        effects=(OrderEffect.VALIDATE_ORDER, OrderEffect.SEND_EMAIL),
    )
    assert result.matched_rule == "submit"
    assert result.no_op is False


def test_evaluate_step_self_loop_has_no_transition():
    machine = build_order_machine()
    result = evaluate_step(machine, OrderState.PENDING_PAYMENT, PaymentProcessed(PaymentStatus.PENDING), CTX)
    assert result.final_state == OrderState.PENDING_PAYMENT
    assert result.transition is None
    assert result.matched_rule == "payment pending"
    assert result.no_op is False


def test_evaluate_step_undefined_event_is_noop():
    machine = build_order_machine()
    result = evaluate_step(machine, OrderState.DRAFT, Deliver(), CTX)
    assert result.final_state == OrderState.DRAFT
    assert result.effects == ()
    assert result.transition is None
    assert result.matched_rule is None
    assert result.no_op is True


def test_debug_hook_reports_noop_origin():
    machine = build_order_machine()
    messages: list[str] = []
    set_evaluator_debug(messages.append)
    try:
        evaluate_step(machine, OrderState.COMPLETED, Cancel(), CTX)
        evaluate_step(machine, OrderState.DRAFT, Ship(), CTX)
        evaluate_step(machine, OrderState.DRAFT, Submit(), CTX)
    finally:
        set_evaluator_debug(None)
    assert len(messages) == 2
    assert messages[0].startswith("NO_TRANSITION_ORIGIN=TERMINAL")
    assert messages[1].startswith("NO_TRANSITION_ORIGIN=UNDEFINED")


def test_replay_happy_path():
    machine = build_order_machine()
    steps = [
        (Submit(), CTX),
        (PaymentProcessed(PaymentStatus.SUCCESS), CTX),
        (Ship(), CTX),
        (Deliver(), CTX),
    ]
    results = replay(machine, OrderState.DRAFT, steps)
    assert [r.final_state for r in results] == [
        OrderState.PENDING_PAYMENT,
        OrderState.PROCESSING,
        OrderState.SHIPPED,
        OrderState.COMPLETED,
    ]
    assert results[-1].effects == (OrderEffect.SEND_RECEIPT,)


def test_replay_backorder_then_duplicate_ship():
    machine = build_order_machine()
    out_of_stock = OrderContext(inventory=InventoryStatus.UNAVAILABLE)
    steps = [
        (Submit(), out_of_stock),
        (PaymentProcessed(PaymentStatus.SUCCESS), out_of_stock),
        (Ship(), out_of_stock),
        (Cancel(), out_of_stock),
        (Cancel(), out_of_stock),
    ]
    results = replay(machine, OrderState.DRAFT, steps)
    assert results[1].final_state == OrderState.BACKORDERED
    assert results[2].no_op is True
    assert results[3].final_state == OrderState.CANCELLED
    assert results[3].effects == (OrderEffect.CANCEL_ORDER, OrderEffect.RELEASE_INVENTORY)
    assert results[4].no_op is True
    assert results[4].effects == ()


def test_replay_does_not_share_state_between_runs():
    machine = build_order_machine()
    first = replay(machine, OrderState.DRAFT, [(Submit(), CTX)])
    second = replay(machine, OrderState.DRAFT, [(Submit(), CTX)])
    assert first == second


def test_guardrails_reasons():
    stay = TransitionResult(OrderState.COMPLETED, ())
    assert apply_guardrails(OrderState.COMPLETED, stay, ALLOWED_TRANSITIONS, TERMINAL_STATES).allowed

    exit_terminal = TransitionResult(OrderState.DRAFT, ())
    result = apply_guardrails(OrderState.COMPLETED, exit_terminal, None, TERMINAL_STATES)
    assert result.reason == TERMINAL_STATE_EXIT

    noisy = TransitionResult(OrderState.CANCELLED, (OrderEffect.SEND_EMAIL,))
    result = apply_guardrails(OrderState.CANCELLED, noisy, None, TERMINAL_STATES)
    assert result.reason == TERMINAL_STATE_EFFECTS

    skip = TransitionResult(OrderState.COMPLETED, ())
    result = apply_guardrails(OrderState.DRAFT, skip, ALLOWED_TRANSITIONS, TERMINAL_STATES)
    assert not result.allowed
    assert result.reason == DISALLOWED_TRANSITION


def test_context_is_required_and_type_checked():
    machine = build_order_machine()
    payment = PaymentProcessed(PaymentStatus.SUCCESS)
    with pytest.raises(TypeError):
        machine.transition(OrderState.PENDING_PAYMENT, payment)
    with pytest.raises(TypeError):
        evaluate_step(machine, OrderState.PENDING_PAYMENT, payment)
    for bad in (None, InventoryStatus.AVAILABLE):
        with pytest.raises(ValueError):
            machine.transition(OrderState.PENDING_PAYMENT, payment, bad)
        with pytest.raises(ValueError):
            evaluate_step(machine, OrderState.PENDING_PAYMENT, payment, bad)
