#!/usr/bin/env -S uv run --script
# /// script
# requires-python = '>=3.11'
# dependencies = [
#   "flask",
#   "tqdm",
# ]
# ///
"""
Binary Diff Service - Main Entry Point

Serve the comparison API or inspect the payload store.

Usage:
    # Serve on the default host and port
    ./run_server.py

    # Serve with a different database
    ./run_server.py --db /tmp/payloads.db --port 8080

    # Show store status
    ./run_server.py --status

API:
    POST /v1/diff/<id>/left    {"data": "<base64>"}
    POST /v1/diff/<id>/right   {"data": "<base64>"}
    GET  /v1/diff/<id>
"""

import argparse
from pathlib import Path

from bitdiff.config import DB_PATH, DEFAULT_HOST, DEFAULT_PORT
from bitdiff.database import get_connection, get_store_stats, init_db


def show_status(db_path: Path):
    """Show current store status."""
    print("=" * 70)
    print("PAYLOAD STORE STATUS")
    print("=" * 70)
    print()

    if not db_path.exists():
        print(f"Database not found at {db_path}. Start the server or load payloads first.")
        return

    init_db(db_path)

    with get_connection(db_path) as conn:
        stats = get_store_stats(conn)

    print(f"Database:              {db_path}")
    print(f"Payloads:              {stats['payloads']:,}")
    print(f"Stored bytes:          {stats['total_bytes']:,}")
    print(f"Comparisons:           {stats['comparisons']:,}")
    print(f"  with both sides:     {stats['complete']:,}")
    print(f"  with one side:       {stats['comparisons'] - stats['complete']:,}")
    print()


def main():
    parser = argparse.ArgumentParser(
        description="Binary Diff Service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        "--db", type=str,
        help="SQLite database path (default: from config)"
    )
    parser.add_argument(
        "--host", type=str, default=DEFAULT_HOST,
        help=f"Host to bind (default: {DEFAULT_HOST})"
    )
    parser.add_argument(
        "--port", type=int, default=DEFAULT_PORT,
        help=f"Port to listen on (default: {DEFAULT_PORT})"
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Run Flask in debug mode"
    )
    parser.add_argument(
        "--status", action="store_true",
        help="Show store status and exit"
    )

    args = parser.parse_args()
    db_path = Path(args.db) if args.db else DB_PATH

    if args.status:
        show_status(db_path)
        return

    from bitdiff.api import create_app
    app = create_app(db_path=db_path)
    print(f"Serving diff API on http://{args.host}:{args.port} (database: {db_path})")
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
