"""Database schema and utilities for the payload store."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import DB_PATH


SCHEMA = """
-- Uploaded payloads, at most one per comparison side
CREATE TABLE IF NOT EXISTS payloads (
    comparison_id INTEGER NOT NULL,
    side TEXT NOT NULL CHECK (side IN ('left', 'right')),
    data BLOB NOT NULL,
    size INTEGER NOT NULL,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    PRIMARY KEY (comparison_id, side)
);
"""


def init_db(db_path: Path = DB_PATH) -> None:
    """Initialize the database with the schema."""
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()


@contextmanager
def get_connection(db_path: Path = DB_PATH) -> Iterator[sqlite3.Connection]:
    """Get a database connection with row factory enabled."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


def insert_payload(
    conn: sqlite3.Connection,
    comparison_id: int,
    side: str,
    data: bytes
) -> None:
    """
    Insert a payload.

    Raises sqlite3.IntegrityError if the side already holds a payload.
    Nothing is ever replaced.
    """
    conn.execute("""
        INSERT INTO payloads (comparison_id, side, data, size)
        VALUES (?, ?, ?, ?)
    """, (comparison_id, side, sqlite3.Binary(data), len(data)))
    conn.commit()


def get_payload(conn: sqlite3.Connection, comparison_id: int, side: str) -> bytes | None:
    """Get the payload stored for one side of a comparison."""
    cursor = conn.execute(
        "SELECT data FROM payloads WHERE comparison_id = ? AND side = ?",
        (comparison_id, side)
    )
    row = cursor.fetchone()
    return bytes(row["data"]) if row else None


def get_comparison_payloads(conn: sqlite3.Connection, comparison_id: int) -> dict[str, bytes]:
    """Get all payloads of a comparison in one read, keyed by side."""
    cursor = conn.execute(
        "SELECT side, data FROM payloads WHERE comparison_id = ?",
        (comparison_id,)
    )
    return {row["side"]: bytes(row["data"]) for row in cursor.fetchall()}


def get_store_stats(conn: sqlite3.Connection) -> dict:
    """Get payload and comparison counts for status reporting."""
    payload_count = conn.execute("SELECT COUNT(*) FROM payloads").fetchone()[0]
    total_bytes = conn.execute("SELECT COALESCE(SUM(size), 0) FROM payloads").fetchone()[0]

    cursor = conn.execute("""
        SELECT COUNT(*) as comparisons, SUM(CASE WHEN cnt = 2 THEN 1 ELSE 0 END) as complete
        FROM (
            SELECT comparison_id, COUNT(*) as cnt
            FROM payloads
            GROUP BY comparison_id
        )
    """)
    row = cursor.fetchone()

    return {
        "payloads": payload_count,
        "total_bytes": total_bytes,
        "comparisons": row["comparisons"],
        "complete": row["complete"] or 0,
    }
