"""
Bitwise run-length diff of two equal-length buffers.

The buffers are treated as two unsigned big-endian integers. Runs of set
bits in their XOR are extracted from the low end upward: strip trailing
zeros, strip trailing ones, emit (remaining width, run length), repeat.

Instead of building one integer of the whole buffer, the scan walks the
buffers from the last byte toward the first:
  - blocks that compare equal are skipped with a single slice comparison
  - differing blocks are XORed word by word
  - a run that reaches the top of a word is held open and continued in the
    next word, so results match the single-integer rendition exactly
"""

from typing import Iterator

from .config import BLOCK_SIZE, WORD_SIZE
from .models import BitRun


def _trailing_zeros(value: int) -> int:
    """Number of trailing zero bits. value must be non-zero."""
    return (value & -value).bit_length() - 1


def _trailing_ones(value: int) -> int:
    """Number of trailing one bits."""
    return (~value & (value + 1)).bit_length() - 1


def _make_run(total_bits: int, low: int, top: int) -> BitRun:
    """Build a run covering bit positions [low, top) counted from the LSB."""
    return BitRun(offset=total_bits - top, length=top - low)


def _delta_words(
    left: memoryview,
    right: memoryview,
    block_size: int,
    word_size: int,
) -> Iterator[tuple[int, int, int]]:
    """
    Yield (base, width, delta) for every word whose XOR is non-zero.

    base is the position of the word's lowest bit counted from the LSB of
    the whole buffer, width its size in bits. Words are yielded lowest-order
    first, i.e. from the end of the buffer toward the start.
    """
    size = len(left)
    end = size
    while end > 0:
        start = max(0, end - block_size)
        if left[start:end] != right[start:end]:
            word_end = end
            while word_end > start:
                word_start = max(start, word_end - word_size)
                delta = (
                    int.from_bytes(left[word_start:word_end], "big")
                    ^ int.from_bytes(right[word_start:word_end], "big")
                )
                if delta:
                    yield (size - word_end) * 8, (word_end - word_start) * 8, delta
                word_end = word_start
        end = start


def diff(
    left: bytes,
    right: bytes,
    block_size: int = BLOCK_SIZE,
    word_size: int = WORD_SIZE,
) -> list[BitRun]:
    """
    Compute every maximal run of differing bits between two buffers.

    Runs are returned low-order first (starting from the end of the
    buffers). Identical or empty buffers give an empty list.

    Raises ValueError if the buffers differ in length.
    """
    if len(left) != len(right):
        raise ValueError(
            f"Buffers must have equal length, got {len(left)} and {len(right)}"
        )
    if block_size < 1 or word_size < 1:
        raise ValueError("block_size and word_size must be positive")

    total_bits = len(left) * 8
    runs = []

    # Run still open at the top of the previous word: [run_low, run_top)
    run_low = None
    run_top = 0

    for base, width, delta in _delta_words(
        memoryview(left), memoryview(right), block_size, word_size
    ):
        pos = 0

        if run_low is not None:
            if base != run_top:
                # Skipped words agree, so the open run ended at run_top
                runs.append(_make_run(total_bits, run_low, run_top))
                run_low = None
            else:
                ones = _trailing_ones(delta)
                if ones == width:
                    run_top = base + width
                    continue
                runs.append(_make_run(total_bits, run_low, base + ones))
                run_low = None
                delta >>= ones
                pos = ones

        while delta:
            zeros = _trailing_zeros(delta)
            delta >>= zeros
            pos += zeros

            ones = _trailing_ones(delta)
            delta >>= ones

            if pos + ones == width:
                run_low, run_top = base + pos, base + width
            else:
                runs.append(_make_run(total_bits, base + pos, base + pos + ones))
            pos += ones

    if run_low is not None:
        runs.append(_make_run(total_bits, run_low, run_top))

    return runs
