"""Exceptions raised by the payload store and the comparison service."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Side


class BitDiffError(Exception):
    """Base class for bitdiff errors."""


class InvalidPayloadError(BitDiffError, ValueError):
    """Raised when submitted payload text is not usable base64 data."""


class PayloadConflictError(BitDiffError):
    """
    Raised when a payload already exists for a comparison id and side.

    Attributes
    ----------
    comparison_id : int
    side : Side
    """

    def __init__(self, comparison_id: int, side: "Side") -> None:
        self.comparison_id = comparison_id
        self.side = side
        super().__init__(
            f"Diff with ID {comparison_id} already contains {side.value} data item."
        )
