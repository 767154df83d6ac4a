"""Bit-width helpers for 256-bit unsigned integers."""

from __future__ import annotations

__all__ = ["most_significant_bit"]

# (shift, mask) pairs for the binary search over bit-width halves
_MSB_STEPS = (
    (128, 2**128 - 1),
    (64, 2**64 - 1),
    (32, 2**32 - 1),
    (16, 2**16 - 1),
    (8, 2**8 - 1),
    (4, 2**4 - 1),
    (2, 2**2 - 1),
)


def most_significant_bit(x: int) -> int:
    """Return the 0-based index of the most significant set bit of x.

    Matches the on-chain BitMath routine, including its quirk that
    most_significant_bit(0) == 0 rather than an error.

    Args:
        x: A uint256 value

    Returns:
        Bit index in [0, 255]
    """
    msb = 0
    for shift, mask in _MSB_STEPS:
        if x > mask:
            x >>= shift
            msb += shift
    if x > 1:
        msb += 1
    return msb
