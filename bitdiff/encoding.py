"""Validation and decoding of base64 payload text."""

import base64
import binascii
import re

from .exceptions import InvalidPayloadError

BASE64_PATTERN = re.compile(r"^[a-zA-Z0-9+/]*={0,3}$")


def is_valid_base64(data: str | None) -> bool:
    """
    Check that text looks like base64 data.

    Surrounding whitespace is ignored. Empty or whitespace-only text is
    rejected, as is anything whose length is not a multiple of 4 or that
    uses characters outside the base64 alphabet.
    """
    if not isinstance(data, str) or not data.strip():
        return False
    trimmed = data.strip()
    return len(trimmed) % 4 == 0 and BASE64_PATTERN.match(trimmed) is not None


def decode_payload(data: str | None) -> bytes:
    """Decode payload text to raw bytes, raising InvalidPayloadError if malformed."""
    if not is_valid_base64(data):
        raise InvalidPayloadError("The input data is in incorrect format")
    try:
        return base64.b64decode(data.strip(), validate=True)
    except binascii.Error as e:
        raise InvalidPayloadError(f"The input data is in incorrect format: {e}") from e
