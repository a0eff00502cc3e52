"""
Data model for comparisons.

- Side: the two slots of a comparison
- BitRun: one maximal span of differing bits
- Comparison outcomes: one frozen dataclass per result; only BitMismatch
  carries data
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Side(Enum):
    """Slot of a payload within a comparison."""
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, name: str) -> Optional["Side"]:
        """Case-insensitive lookup by name. Returns None for unknown names."""
        try:
            return cls(name.lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class BitRun:
    """
    A maximal run of differing bits.

    offset is the bit index of the run's first bit counted from the most
    significant bit of the first byte; equivalently, the width left over
    after consuming the run from the low end of the buffer read as one
    big-endian integer.
    """
    offset: int
    length: int

    def to_dict(self) -> dict:
        return {"offset": self.offset, "length": self.length}


@dataclass(frozen=True)
class EntryMissing:
    """No payload exists for the comparison id."""


@dataclass(frozen=True)
class LeftMissing:
    """Only the right payload exists."""


@dataclass(frozen=True)
class RightMissing:
    """Only the left payload exists."""


@dataclass(frozen=True)
class Identical:
    """Both payloads are byte-for-byte equal."""


@dataclass(frozen=True)
class SizeMismatch:
    """Both payloads exist but differ in length."""


@dataclass(frozen=True)
class BitMismatch:
    """Same length, different content. runs are in discovery order."""
    runs: tuple[BitRun, ...]


ComparisonOutcome = Union[
    EntryMissing,
    LeftMissing,
    RightMissing,
    Identical,
    SizeMismatch,
    BitMismatch,
]
