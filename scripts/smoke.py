# scripts/smoke.py
"""
Smoke Test Script for the Flagbook grid.

Signs the flag cell after cell, in an in-memory store, until the grid
subdivides a given number of times, printing each level change.

Usage
-----
1. Fill level 1 and watch the grid subdivide once:
    $ python scripts/smoke.py

2. Go further, with longer messages (wider spans):
    $ python scripts/smoke.py --levels 2 --length 60
"""

import argparse
import logging
import sys

from flagbook.core.contracts.message import MessageCreate
from flagbook.core.store.messages import MessageStore
from flagbook.grid.cells import parse_key
from flagbook.grid.info import compute_grid_info
from flagbook.pipelines.signing import sign_flag

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)


def main() -> int:
    parser = argparse.ArgumentParser(description="Fill the flag until it subdivides.")
    parser.add_argument("--levels", type=int, default=1, help="Level changes to wait for.")
    parser.add_argument("--length", type=int, default=10, help="Characters per message.")
    args = parser.parse_args()

    store = MessageStore()
    info = compute_grid_info(store.placements())
    start_level = info.level
    print(f"Start: level {info.level}, {info.cols}x{info.rows}, {info.available_count} free")

    while info.level < start_level + args.levels:
        if info.is_full:
            print("❌ Flag is full before reaching the requested level.")
            return 1

        cell = parse_key(info.available_cells[0])
        draft = MessageCreate(
            first_name="Smoke",
            last_name="Test",
            email="smoke@example.com",
            message="x" * args.length,
            grid_row=cell.row,
            grid_col=cell.col,
        )
        result = sign_flag(draft, store)
        if result.is_err():
            print(f"❌ Unexpected rejection at {cell.key}: {result.unwrap_err().value}")
            return 1

        previous = info.level
        info = compute_grid_info(store.placements())
        if info.level != previous:
            print(
                f"✅ {len(store)} messages -> level {info.level}, "
                f"{info.cols}x{info.rows}, {info.available_count} free"
            )

    return 0


if __name__ == "__main__":
    sys.exit(main())
