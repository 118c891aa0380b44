from __future__ import annotations

import argparse

BANNER_WIDTH = 71


def _debug_enabled(args: argparse.Namespace) -> bool:
    return bool(getattr(args, "debug", False))


def _dbg(args: argparse.Namespace, msg: str) -> None:
    if _debug_enabled(args):
        print(f"[debug] {msg}")


def print_banner(title: str) -> None:
    print("=" * BANNER_WIDTH)
    print(title)
    print("=" * BANNER_WIDTH)
    print()
