"""
Bulk loading of payload files into the store.

Walk a directory for files named <comparison id>_<side>.bin (for example
12_left.bin, 12_right.bin) and store each raw file as that side of the
comparison. Sides that already hold a payload are counted and skipped.
"""

import re
from pathlib import Path

from tqdm import tqdm

from .config import MAX_COMPARISON_ID, MIN_COMPARISON_ID, PAYLOAD_SUFFIX
from .exceptions import PayloadConflictError
from .models import Side
from .store import PayloadStore


def parse_payload_name(file_path: Path, suffix: str = PAYLOAD_SUFFIX) -> tuple[int, Side] | None:
    """
    Parse (comparison id, side) from a payload filename.

    Returns None if the name doesn't follow the <id>_<side><suffix> pattern
    or the id is outside the comparison id range.
    """
    match = re.fullmatch(r"(-?\d+)_([A-Za-z]+)" + re.escape(suffix), file_path.name)
    if not match:
        return None
    side = Side.parse(match.group(2))
    if side is None:
        return None
    comparison_id = int(match.group(1))
    if not MIN_COMPARISON_ID <= comparison_id <= MAX_COMPARISON_ID:
        return None
    return comparison_id, side


def scan_payload_directory(directory: Path, suffix: str = PAYLOAD_SUFFIX) -> list[tuple[Path, int, Side]]:
    """Find payload files in a directory, sorted by comparison id then side."""
    found = []
    for file_path in directory.rglob(f"*{suffix}"):
        if not file_path.is_file():
            continue
        parsed = parse_payload_name(file_path, suffix)
        if parsed is None:
            continue
        found.append((file_path, *parsed))

    found.sort(key=lambda item: (item[1], item[2].value))
    return found


def load_payloads(
    directory: Path,
    store: PayloadStore,
    suffix: str = PAYLOAD_SUFFIX,
    show_progress: bool = True
) -> dict:
    """
    Store every payload file found under directory.

    Returns counts: {"found", "stored", "conflicts"}.
    """
    files = scan_payload_directory(directory, suffix)
    stats = {"found": len(files), "stored": 0, "conflicts": 0}

    for file_path, comparison_id, side in tqdm(
        files, desc="Loading payloads", unit="file", disable=not show_progress
    ):
        try:
            store.put(comparison_id, side, file_path.read_bytes())
        except PayloadConflictError:
            stats["conflicts"] += 1
            continue
        stats["stored"] += 1

    return stats
