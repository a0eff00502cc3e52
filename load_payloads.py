#!/usr/bin/env -S uv run --script
# /// script
# requires-python = '>=3.11'
# dependencies = [
#   "tqdm",
# ]
# ///
"""
Load payload files into the store.

Files must be named <comparison id>_<side>.bin, e.g. 7_left.bin and
7_right.bin. Each file is stored raw (no base64).

Usage:
    ./load_payloads.py fixtures/
    ./load_payloads.py fixtures/ --db /tmp/payloads.db
"""

import argparse
import sys
from pathlib import Path

from bitdiff.config import DB_PATH
from bitdiff.loader import load_payloads
from bitdiff.store import SqlitePayloadStore


def main():
    parser = argparse.ArgumentParser(
        description="Load payload files into the store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("directory", type=str, help="Directory to scan for payload files")
    parser.add_argument(
        "--db", type=str,
        help="SQLite database path (default: from config)"
    )
    args = parser.parse_args()

    directory = Path(args.directory)
    if not directory.is_dir():
        print(f"Error: Not a directory: {directory}")
        sys.exit(1)

    store = SqlitePayloadStore(Path(args.db) if args.db else DB_PATH)
    stats = load_payloads(directory, store)

    print(f"Found:      {stats['found']:,}")
    print(f"Stored:     {stats['stored']:,}")
    print(f"Conflicts:  {stats['conflicts']:,} (side already stored, skipped)")


if __name__ == "__main__":
    main()
