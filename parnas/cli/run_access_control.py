"""Evaluate the access control table on sample requests.

Purpose:
  - Trace each sample request through the access table.
Inputs:
  - CLI args (--first-match to use the precedence-ordered table, --debug).
Outputs:
  - One line per request with ✓/✗ to stdout.
Example:
  - PYTHONPATH=. python3 parnas/cli/run_access_control.py --debug
"""

from __future__ import annotations

import argparse

from parnas.access_control.enums import Action, ResourceType, UserRole
from parnas.app_api.factories import TABLE_FIRST_MATCH, TABLE_V1, default_table_factory
from parnas.cli._debug_utils import _dbg, print_banner

SAMPLE_REQUESTS = [
    (UserRole.ADMIN, ResourceType.PUBLIC, Action.DELETE, False, "Admin deletes public"),
    (UserRole.ADMIN, ResourceType.PRIVATE, Action.WRITE, False, "Admin writes private (not owner)"),
    (UserRole.USER, ResourceType.PUBLIC, Action.READ, False, "User reads public"),
    (UserRole.USER, ResourceType.PUBLIC, Action.WRITE, False, "User writes public"),
    (UserRole.USER, ResourceType.SHARED, Action.READ, False, "User reads shared"),
    (UserRole.USER, ResourceType.PRIVATE, Action.READ, True, "User reads own private"),
    (UserRole.USER, ResourceType.PRIVATE, Action.WRITE, True, "User writes own private"),
    (UserRole.USER, ResourceType.PRIVATE, Action.DELETE, True, "User deletes own private"),
    (UserRole.USER, ResourceType.PRIVATE, Action.READ, False, "User reads other's private"),
    (UserRole.GUEST, ResourceType.PUBLIC, Action.READ, False, "Guest reads public"),
    (UserRole.GUEST, ResourceType.PUBLIC, Action.WRITE, False, "Guest writes public"),
    (UserRole.GUEST, ResourceType.SHARED, Action.READ, False, "Guest reads shared"),
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the access control decision table")
    parser.add_argument("--first-match", action="store_true", help="Use the first-match table with default Deny")
    parser.add_argument("--debug", action="store_true")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    version = TABLE_FIRST_MATCH if args.first_match else TABLE_V1
    table = default_table_factory.create("access_control", version)
    _dbg(args, f"table={table!r}")

    print_banner("EXAMPLE 1: ACCESS CONTROL SYSTEM")
    for role, resource, action, is_owner, description in SAMPLE_REQUESTS:
        matched = table.match(role, resource, action, is_owner)
        result = table.evaluate(role, resource, action, is_owner)
        _dbg(args, f"{description}: rule={matched.describe()}")
        print(f"{result.symbol} {description}")
    print()


if __name__ == "__main__":
    main()
