"""Simulate an order lifecycle through the order state machine.

Purpose:
  - Replay a sequence of events and print each state change and its effects.
Inputs:
  - CLI args (--events comma-separated tokens, --inventory, --debug).
Outputs:
  - Per-event trace and final state to stdout.
Example:
  - PYTHONPATH=. python3 parnas/cli/run_order_lifecycle.py --events submit,payment:success,ship,deliver
"""

from __future__ import annotations

import argparse

from parnas.cli._debug_utils import _dbg, print_banner
from parnas.core.engine.evaluator import replay, set_evaluator_debug
from parnas.orders.enums import InventoryStatus, OrderState
from parnas.orders.events import OrderContext, parse_event
from parnas.orders.machine import build_order_machine

DEFAULT_EVENTS = "submit,payment:success,ship,deliver"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate an order lifecycle")
    parser.add_argument("--events", default=DEFAULT_EVENTS, help="Comma-separated events, e.g. submit,payment:success")
    parser.add_argument(
        "--inventory",
        choices=[s.value.lower() for s in InventoryStatus],
        default=InventoryStatus.AVAILABLE.value.lower(),
    )
    parser.add_argument("--debug", action="store_true")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    events = [parse_event(t) for t in args.events.split(",") if t.strip()]
    context = OrderContext(inventory=InventoryStatus(args.inventory.upper()))
    machine = build_order_machine()
    set_evaluator_debug(lambda msg: _dbg(args, msg))
    try:
        print_banner("EXAMPLE 3: ORDER PROCESSING STATE MACHINE")
        state = OrderState.DRAFT
        print(f"Initial State: {state}")
        print()
        results = replay(machine, state, [(event, context) for event in events])
        for result in results:
            print(f"Event: {result.event}")
            print(f"  {result.prev_state} → {result.final_state}")
            if result.effects:
                print(f"  Outputs: {', '.join(str(e) for e in result.effects)}")
            _dbg(args, f"rule={result.matched_rule} no_op={result.no_op}")
            print()
            state = result.final_state
        print(f"Final State: {state}")
    finally:
        set_evaluator_debug(None)


if __name__ == "__main__":
    main()
