"""Print a registered decision table in tabular form.

Purpose:
  - Render a table the way it is reviewed: one row per rule.
Inputs:
  - CLI args (--table, --version, --list).
Outputs:
  - Table text to stdout.
Example:
  - PYTHONPATH=. python3 parnas/cli/show_table.py --table hvac
"""

from __future__ import annotations

import argparse

from parnas.app_api.factories import TABLE_V1, default_table_factory
from parnas.core.table.render import format_table


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show a decision table")
    parser.add_argument("--table", default="access_control")
    parser.add_argument("--version", default=TABLE_V1)
    parser.add_argument("--list", action="store_true", help="List registered tables and exit")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    if args.list:
        for table_id, version in default_table_factory.available():
            print(f"{table_id}:{version}")
        return
    table = default_table_factory.create(args.table, args.version)
    print(format_table(table))


if __name__ == "__main__":
    main()
