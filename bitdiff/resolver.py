"""Classify a comparison from its left and right payloads."""

from typing import Optional

from .diff_engine import diff
from .models import (
    BitMismatch,
    ComparisonOutcome,
    EntryMissing,
    Identical,
    LeftMissing,
    RightMissing,
    SizeMismatch,
)


def resolve(left: Optional[bytes], right: Optional[bytes]) -> ComparisonOutcome:
    """
    Decide the outcome of a comparison.

    Order of checks:
    - both sides absent: EntryMissing
    - one side absent: LeftMissing / RightMissing
    - byte-identical (including two empty buffers): Identical
    - different lengths: SizeMismatch
    - otherwise: BitMismatch with the runs from the diff engine
    """
    if left is None and right is None:
        return EntryMissing()
    if left is None:
        return LeftMissing()
    if right is None:
        return RightMissing()

    if left == right:
        return Identical()
    if len(left) != len(right):
        return SizeMismatch()

    return BitMismatch(runs=tuple(diff(left, right)))
