# /// script
# requires-python = ">=3.11"
# dependencies = [
#     "pytest",
# ]
# ///
"""
Unit tests for the bitwise run-length diff engine.

Tests:
- Known scenarios from the service's reference data
- Properties: symmetry, empty self-diff, exact coverage, reconstruction
- Word and block boundaries: runs straddling chunks must not be split
"""

import base64
import random
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from bitdiff.diff_engine import diff
from bitdiff.models import BitRun


# Binary: 11100011 10001110 00111000
DATA_A = base64.b64decode("4444")
# Binary: 10000011 10001110 01001000
DATA_B = base64.b64decode("g45I")


def reference_diff(left: bytes, right: bytes) -> list[BitRun]:
    """Single big-integer rendition: strip trailing zeros, then ones, repeat."""
    delta = int.from_bytes(left, "big") ^ int.from_bytes(right, "big")
    remaining = len(left) * 8
    runs = []
    while delta:
        while delta & 1 == 0:
            remaining -= 1
            delta >>= 1
        length = 0
        while delta & 1 == 1:
            length += 1
            remaining -= 1
            delta >>= 1
        runs.append(BitRun(offset=remaining, length=length))
    return runs


def differing_positions(left: bytes, right: bytes) -> set[int]:
    """Bit indices (from the MSB of the first byte) where the buffers differ."""
    positions = set()
    for i, (a, b) in enumerate(zip(left, right)):
        x = a ^ b
        for bit in range(8):
            if x & (0x80 >> bit):
                positions.add(i * 8 + bit)
    return positions


def covered_positions(runs: list[BitRun]) -> list[int]:
    return [p for run in runs for p in range(run.offset, run.offset + run.length)]


def apply_runs(data: bytes, runs: list[BitRun]) -> bytes:
    """Flip every bit covered by the runs."""
    out = bytearray(data)
    for p in covered_positions(runs):
        out[p // 8] ^= 0x80 >> (p % 8)
    return bytes(out)


def random_pair(rng: random.Random, size: int, flip_chance: float) -> tuple[bytes, bytes]:
    left = bytes(rng.getrandbits(8) for _ in range(size))
    right = bytearray(left)
    for p in range(size * 8):
        if rng.random() < flip_chance:
            right[p // 8] ^= 0x80 >> (p % 8)
    return left, bytes(right)


class TestKnownScenarios:
    """Concrete inputs with known results."""

    def test_reference_pair(self):
        """4444 vs g45I gives the two runs, low-order run first."""
        assert diff(DATA_A, DATA_B) == [
            BitRun(offset=17, length=3),
            BitRun(offset=1, length=2),
        ]

    def test_identical_buffers(self):
        assert diff(DATA_A, DATA_A) == []

    def test_empty_buffers(self):
        assert diff(b"", b"") == []

    def test_single_bit_in_last_byte(self):
        """The last byte's low bit is the last bit of the buffer."""
        assert diff(b"\x00\x00", b"\x00\x01") == [BitRun(offset=15, length=1)]

    def test_single_bit_in_first_byte(self):
        assert diff(b"\x80\x00", b"\x00\x00") == [BitRun(offset=0, length=1)]

    def test_all_bits_differ(self):
        """Fully inverted buffer is one run over the whole width."""
        assert diff(b"\x00" * 5, b"\xff" * 5) == [BitRun(offset=0, length=40)]

    def test_alternating_bits(self):
        """0x55 vs 0x00: four single-bit runs, one bit apart."""
        assert diff(b"\x55", b"\x00") == [
            BitRun(offset=7, length=1),
            BitRun(offset=5, length=1),
            BitRun(offset=3, length=1),
            BitRun(offset=1, length=1),
        ]

    def test_accepts_bytearray_and_memoryview(self):
        result = diff(bytearray(DATA_A), memoryview(DATA_B))
        assert result == [BitRun(offset=17, length=3), BitRun(offset=1, length=2)]


class TestPreconditions:
    """Unequal lengths are a caller error."""

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            diff(b"\x00", b"\x00\x00")

    def test_empty_against_non_empty_raises(self):
        with pytest.raises(ValueError):
            diff(b"", b"\x01")

    def test_invalid_chunk_sizes_raise(self):
        with pytest.raises(ValueError):
            diff(b"\x00", b"\x01", word_size=0)


class TestChunkBoundaries:
    """Runs crossing word and block boundaries must come out whole."""

    def test_run_straddles_word_boundary(self):
        """Bits around the byte boundary with 1-byte words."""
        left = b"\x00\x00\x00"
        right = b"\x00\x03\xc0"
        expected = [BitRun(offset=14, length=4)]
        assert diff(left, right, block_size=1, word_size=1) == expected
        assert diff(left, right) == expected

    def test_run_spans_many_words(self):
        """A run covering several full words in the middle of the buffer."""
        left = b"\x00" * 10
        right = b"\x00\x0f" + b"\xff" * 6 + b"\xf0\x00"
        expected = [BitRun(offset=12, length=56)]
        for block_size, word_size in [(1, 1), (2, 1), (4, 2), (3, 3), (64, 8)]:
            assert diff(left, right, block_size, word_size) == expected

    def test_run_ends_at_skipped_block(self):
        """An open run closes when the next block is identical."""
        left = b"\x00" * 8
        right = b"\x00\x00\x00\x00\x80\x00\x00\x01"
        expected = [BitRun(offset=63, length=1), BitRun(offset=32, length=1)]
        assert diff(left, right, block_size=2, word_size=1) == expected

    def test_run_at_top_of_buffer(self):
        """A run reaching the first bit is closed after the scan."""
        left = b"\xff\xff\x00"
        right = b"\x00\x00\x00"
        assert diff(left, right, block_size=1, word_size=1) == [BitRun(offset=0, length=16)]

    def test_open_run_followed_by_agreeing_low_bit(self):
        """Run reaches a word top; next word starts with an agreeing bit."""
        left = b"\x00\x00"
        right = b"\x02\x80"
        expected = [BitRun(offset=8, length=1), BitRun(offset=6, length=1)]
        assert diff(left, right, block_size=1, word_size=1) == expected

    @pytest.mark.parametrize("block_size,word_size", [
        (1, 1), (2, 1), (3, 2), (5, 5), (8, 8), (16, 3), (64 * 1024, 8),
    ])
    def test_matches_reference_on_random_data(self, block_size, word_size):
        rng = random.Random(block_size * 1000 + word_size)
        for size in [1, 2, 7, 8, 9, 31, 64]:
            for flip_chance in [0.01, 0.2, 0.5, 0.9]:
                left, right = random_pair(rng, size, flip_chance)
                assert diff(left, right, block_size, word_size) == reference_diff(left, right), (
                    f"size={size}, flip={flip_chance}"
                )


class TestProperties:
    """Properties that hold for any pair of equal-length buffers."""

    @pytest.fixture
    def pairs(self):
        rng = random.Random(42)
        return [random_pair(rng, size, chance)
                for size in [1, 3, 16, 100]
                for chance in [0.0, 0.05, 0.5, 1.0]]

    def test_symmetry(self, pairs):
        for left, right in pairs:
            assert diff(left, right) == diff(right, left)

    def test_self_diff_is_empty(self, pairs):
        for left, _ in pairs:
            assert diff(left, left) == []

    def test_coverage_is_exact(self, pairs):
        """Covered positions equal the differing positions, none twice."""
        for left, right in pairs:
            covered = covered_positions(diff(left, right))
            assert len(covered) == len(set(covered))
            assert set(covered) == differing_positions(left, right)

    def test_runs_are_maximal(self, pairs):
        """No two runs touch: there is an agreeing bit between them."""
        for left, right in pairs:
            runs = sorted(diff(left, right), key=lambda r: r.offset)
            for a, b in zip(runs, runs[1:]):
                assert a.offset + a.length < b.offset

    def test_runs_discovered_from_low_end(self, pairs):
        """Offsets strictly decrease in the reported order."""
        for left, right in pairs:
            offsets = [run.offset for run in diff(left, right)]
            assert offsets == sorted(offsets, reverse=True)
            assert len(offsets) == len(set(offsets))

    def test_reconstruction(self, pairs):
        """Flipping the reported bits of left gives right."""
        for left, right in pairs:
            assert apply_runs(left, diff(left, right)) == right

    def test_large_buffer_with_sparse_differences(self):
        """Multi-block buffer with runs near block edges."""
        size = 3 * 64 * 1024 + 5
        left = bytes(size)
        right = bytearray(size)
        right[0] = 0x80
        right[64 * 1024 + 4] = 0x01
        right[64 * 1024 + 5] = 0x80
        right[-1] = 0x01
        right = bytes(right)
        runs = diff(left, right)
        assert runs == [
            BitRun(offset=size * 8 - 1, length=1),
            BitRun(offset=(64 * 1024 + 4) * 8 + 7, length=2),
            BitRun(offset=0, length=1),
        ]
        assert apply_runs(left, runs) == right
