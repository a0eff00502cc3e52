"""
Payload stores.

A store holds at most one payload per (comparison id, side):
- put() never overwrites; a second put for the same side raises
  PayloadConflictError, and concurrent puts have exactly one winner
- get_comparison() reads both sides in one snapshot
"""

import sqlite3
import threading
from pathlib import Path
from typing import Optional, Protocol

from .config import DB_PATH
from .database import (
    get_comparison_payloads,
    get_connection,
    get_payload,
    init_db,
    insert_payload,
)
from .exceptions import PayloadConflictError
from .models import Side


class PayloadStore(Protocol):
    def get(self, comparison_id: int, side: Side) -> Optional[bytes]: ...

    def put(self, comparison_id: int, side: Side, data: bytes) -> None: ...

    def get_comparison(self, comparison_id: int) -> tuple[Optional[bytes], Optional[bytes]]: ...


class SqlitePayloadStore:
    """SQLite-backed store. Opens a fresh connection per call."""

    def __init__(self, db_path: Path = DB_PATH):
        self.db_path = Path(db_path)
        init_db(self.db_path)

    def get(self, comparison_id: int, side: Side) -> Optional[bytes]:
        with get_connection(self.db_path) as conn:
            return get_payload(conn, comparison_id, side.value)

    def put(self, comparison_id: int, side: Side, data: bytes) -> None:
        with get_connection(self.db_path) as conn:
            try:
                insert_payload(conn, comparison_id, side.value, data)
            except sqlite3.IntegrityError as e:
                raise PayloadConflictError(comparison_id, side) from e

    def get_comparison(self, comparison_id: int) -> tuple[Optional[bytes], Optional[bytes]]:
        """Return (left, right); either may be None."""
        with get_connection(self.db_path) as conn:
            payloads = get_comparison_payloads(conn, comparison_id)
        return payloads.get(Side.LEFT.value), payloads.get(Side.RIGHT.value)


class MemoryPayloadStore:
    """Dict-backed store for tests and one-off comparisons."""

    def __init__(self):
        self._payloads: dict[tuple[int, Side], bytes] = {}
        self._lock = threading.Lock()

    def get(self, comparison_id: int, side: Side) -> Optional[bytes]:
        return self._payloads.get((comparison_id, side))

    def put(self, comparison_id: int, side: Side, data: bytes) -> None:
        with self._lock:
            key = (comparison_id, side)
            if key in self._payloads:
                raise PayloadConflictError(comparison_id, side)
            self._payloads[key] = bytes(data)

    def get_comparison(self, comparison_id: int) -> tuple[Optional[bytes], Optional[bytes]]:
        with self._lock:
            return (
                self._payloads.get((comparison_id, Side.LEFT)),
                self._payloads.get((comparison_id, Side.RIGHT)),
            )
