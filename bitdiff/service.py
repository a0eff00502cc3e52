"""Comparison service: decode uploads into the store, resolve stored pairs."""

from .encoding import decode_payload
from .models import ComparisonOutcome, Side
from .resolver import resolve
from .store import PayloadStore


class ComparisonService:
    def __init__(self, store: PayloadStore):
        self.store = store

    def save_payload(self, comparison_id: int, side: Side, encoded: str | None) -> int:
        """
        Decode base64 text and store it as one side of a comparison.

        Returns the size of the decoded payload in bytes.
        Raises InvalidPayloadError for malformed text and PayloadConflictError
        if the side already holds a payload.
        """
        data = decode_payload(encoded)
        self.store.put(comparison_id, side, data)
        return len(data)

    def get_outcome(self, comparison_id: int) -> ComparisonOutcome:
        left, right = self.store.get_comparison(comparison_id)
        return resolve(left, right)
