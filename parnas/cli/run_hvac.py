"""Evaluate the HVAC table on sample readings and optionally scan it.

Purpose:
  - Trace sample temperature/humidity readings through the HVAC table.
  - With --verify, sample the plane densely (boundaries included) and report
    gaps and overlapping rows.
Inputs:
  - CLI args (--draft, --verify, --points, --debug).
Outputs:
  - One line per reading to stdout; scan summary with --verify.
Example:
  - PYTHONPATH=. python3 parnas/cli/run_hvac.py --verify
"""

from __future__ import annotations

import argparse
import sys

from parnas.app_api.factories import TABLE_DRAFT, TABLE_V1, default_table_factory
from parnas.cli._debug_utils import _dbg, print_banner
from parnas.core.domain.errors import UnmatchedInputError
from parnas.core.table.validation import boundary_samples, scan_partition
from parnas.hvac.table import HUMIDITY, TEMPERATURE

SAMPLE_READINGS = [
    (-5.0, 50.0),
    (5.0, 30.0),
    (15.0, 50.0),
    (15.0, 70.0),
    (22.0, 35.0),
    (22.0, 50.0),
    (22.0, 75.0),
    (28.0, 50.0),
    (28.0, 75.0),
]

TEMPERATURE_SPAN = (-20.0, 45.0)
HUMIDITY_SPAN = (0.0, 100.0)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the HVAC decision table")
    parser.add_argument("--draft", action="store_true", help="Use the unreviewed draft table")
    parser.add_argument("--verify", action="store_true", help="Scan the table for gaps and overlaps")
    parser.add_argument("--points", type=int, default=131, help="Grid points per axis for --verify")
    parser.add_argument("--debug", action="store_true")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    version = TABLE_DRAFT if args.draft else TABLE_V1
    table = default_table_factory.create("hvac", version)
    _dbg(args, f"table={table!r}")

    print_banner("EXAMPLE 2: HVAC TEMPERATURE CONTROL")
    unmatched = 0
    for temp, humidity in SAMPLE_READINGS:
        prefix = f"Temp: {temp:5.1f}°C, Humidity: {humidity:5.1f}%"
        try:
            action = table.evaluate(temp, humidity)
        except UnmatchedInputError as exc:
            unmatched += 1
            print(f"{prefix} → UNMATCHED")
            _dbg(args, str(exc))
            continue
        print(f"{prefix} → {action.label}")
    print()

    if args.verify:
        samples = {
            TEMPERATURE: boundary_samples(table, TEMPERATURE, TEMPERATURE_SPAN, args.points),
            HUMIDITY: boundary_samples(table, HUMIDITY, HUMIDITY_SPAN, args.points),
        }
        report = scan_partition(table, samples)
        print(f"checked={report.checked} gaps={len(report.gaps)} overlaps={len(report.overlaps)}")
        for point in report.gaps[:5]:
            _dbg(args, f"gap at {point}")
        for point, rules in report.overlaps[:5]:
            _dbg(args, f"overlap at {point}: {rules}")
        print("VERIFY: PASS" if report.ok else "VERIFY: FAIL")
        if not report.ok:
            sys.exit(1)

    if unmatched:
        sys.exit(1)


if __name__ == "__main__":
    main()
