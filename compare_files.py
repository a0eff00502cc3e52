#!/usr/bin/env -S uv run --script
# /// script
# requires-python = '>=3.11'
# dependencies = []
# ///
"""Compare two files bit by bit and list the runs of differing bits."""

import argparse
import sys
from pathlib import Path

from bitdiff.models import BitMismatch, Identical
from bitdiff.resolver import resolve
from bitdiff.serialization import outcome_tag


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("left", type=str, help="Left file")
    parser.add_argument("right", type=str, help="Right file")
    parser.add_argument(
        "--limit", type=int, default=20,
        help="Number of runs to print (default: 20, 0 for all)"
    )
    args = parser.parse_args()

    left_path, right_path = Path(args.left), Path(args.right)
    for path in (left_path, right_path):
        if not path.is_file():
            print(f"Error: File not found: {path}")
            sys.exit(1)

    left = left_path.read_bytes()
    right = right_path.read_bytes()

    print(f"Left size:  {len(left):,} bytes")
    print(f"Right size: {len(right):,} bytes")

    outcome = resolve(left, right)
    print(f"Result: {outcome_tag(outcome)}")

    if not isinstance(outcome, BitMismatch):
        sys.exit(0 if isinstance(outcome, Identical) else 1)

    runs = outcome.runs
    differing_bits = sum(run.length for run in runs)
    print(f"\nDiffering runs: {len(runs):,} ({differing_bits:,} bits)")

    shown = runs if args.limit == 0 else runs[:args.limit]
    for run in shown:
        print(f"  offset {run.offset:10d}  length {run.length}")
    if len(shown) < len(runs):
        print(f"  ... {len(runs) - len(shown):,} more")

    sys.exit(1)


if __name__ == "__main__":
    main()
