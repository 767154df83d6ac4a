"""Tests for most_significant_bit."""

import pytest

from binquote.math import most_significant_bit
from binquote.safe_int import UINT256_MAX


class TestMostSignificantBit:
    """Tests for the bit-width search."""

    def test_zero_returns_zero(self):
        """msb(0) is 0, not an error."""
        assert most_significant_bit(0) == 0

    def test_one(self):
        """msb(1) is bit 0."""
        assert most_significant_bit(1) == 0

    @pytest.mark.parametrize("bit", [1, 2, 7, 31, 64, 127, 128, 200, 255])
    def test_powers_of_two(self, bit):
        """A single set bit is found exactly."""
        assert most_significant_bit(1 << bit) == bit

    @pytest.mark.parametrize("bit", [2, 9, 100, 129, 255])
    def test_all_lower_bits_set(self, bit):
        """Lower bits do not change the result."""
        assert most_significant_bit((1 << (bit + 1)) - 1) == bit

    def test_three(self):
        """msb(3) is bit 1."""
        assert most_significant_bit(3) == 1

    def test_uint256_max(self):
        """The top bit of a uint256 is 255."""
        assert most_significant_bit(UINT256_MAX) == 255

    def test_matches_bit_length(self):
        """Agrees with int.bit_length for a spread of values."""
        for x in [5, 1000, 2**64 + 12345, 3**100, 2**250 + 1]:
            assert most_significant_bit(x) == x.bit_length() - 1
