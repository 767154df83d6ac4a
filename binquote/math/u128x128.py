"""128.128 binary fixed-point math.

Values are uint256 integers whose upper 128 bits hold the integer part and
whose lower 128 bits hold the fraction. The routines reproduce the on-chain
integer algorithms bit for bit: every shift truncates, every division floors,
and the same guards fail.
"""

from __future__ import annotations

from binquote.errors import LogUnderflow, PowUnderflow
from binquote.math.bit_math import most_significant_bit
from binquote.safe_int import UINT256_MAX, safe128

__all__ = [
    # Functions
    "to_fixed",
    "split",
    "log2",
    "pow",
    # Constants
    "FIX_POINT_BITS",
    "INTEGER_BITS",
    "LOG_SCALE_OFFSET",
    "ONE",
    "MAX_FIXED",
]

# =============================================================================
# Constants
# =============================================================================

FIX_POINT_BITS = 128
INTEGER_BITS = 128
LOG_SCALE_OFFSET = 127

ONE = 1 << FIX_POINT_BITS
LOG_SCALE = 1 << LOG_SCALE_OFFSET
LOG_SCALE_SQUARED = LOG_SCALE * LOG_SCALE

# Largest value of a (FIX_POINT_BITS + INTEGER_BITS)-bit register
MAX_FIXED = (
    UINT256_MAX
    if FIX_POINT_BITS + INTEGER_BITS == 256
    else (1 << (FIX_POINT_BITS + INTEGER_BITS)) - 1
)

# Exponents must stay below 2^20, the span of real bin ids
_POW_EXPONENT_BITS = 20


# =============================================================================
# Conversions
# =============================================================================


def to_fixed(value: int, decimals: int) -> int:
    """Convert value / 10^decimals to 128.128 fixed point (floored).

    Args:
        value: uint128 numerator
        decimals: Decimal exponent of the denominator (0..77)

    Returns:
        (value << 128) // 10^decimals

    Raises:
        SafeCastOverflow: If value does not fit in 128 bits
    """
    if not 0 <= decimals <= 77:
        raise ValueError(f"decimals must be in [0, 77], got {decimals}")
    return (safe128(value) << FIX_POINT_BITS) // 10**decimals


def split(x: int) -> tuple[int, int]:
    """Split a fixed-point value into (integer_part, fraction_part)."""
    return x >> FIX_POINT_BITS, x & (ONE - 1)


# =============================================================================
# Logarithm and power
# =============================================================================


def log2(x: int) -> tuple[int, bool]:
    """Binary logarithm of a 128.128 value.

    The result is an unsigned 128.128 magnitude plus a sign flag, since
    values below 1.0 have negative logarithms.

    Args:
        x: 128.128 fixed-point value, must be non-zero

    Returns:
        (magnitude, is_positive)

    Raises:
        LogUnderflow: If x is zero
    """
    if x == 1:
        return to_fixed(128, 0), False
    if x == 0:
        raise LogUnderflow("log2(0) is undefined")

    # drop the least significant bit of the fraction part
    x >>= 1

    if x >= LOG_SCALE:
        is_positive = True
    else:
        x = LOG_SCALE_SQUARED // x
        is_positive = False

    n = most_significant_bit(x >> LOG_SCALE_OFFSET)
    result = n << LOG_SCALE_OFFSET
    y = x >> n

    if y != LOG_SCALE:
        delta = 1 << (LOG_SCALE_OFFSET - 1)
        while delta > 0:
            y = (y * y) >> LOG_SCALE_OFFSET
            if y >= 1 << (LOG_SCALE_OFFSET + 1):
                result += delta
                y >>= 1
            delta >>= 1

    return result << 1, is_positive


def pow(base: int, exponent: int) -> int:  # noqa: A001
    """Raise a 128.128 value to a signed integer power.

    Exponentiation by squaring over the low 20 bits of |exponent|. Bases of
    1.0 or more are inverted before squaring so the intermediate products
    stay within 256 bits; the final result is inverted back.

    Args:
        base: 128.128 fixed-point base
        exponent: Signed exponent, |exponent| < 2^20

    Returns:
        base^exponent in 128.128 fixed point

    Raises:
        PowUnderflow: If the result truncates to zero, or |exponent| >= 2^20
    """
    if base == 0:
        return 0
    if exponent == 0:
        return ONE

    invert = exponent < 0
    abs_exponent = abs(exponent)

    result = 0
    if abs_exponent < 1 << _POW_EXPONENT_BITS:
        result = ONE
        squared = base
        if base > ONE - 1:
            squared = MAX_FIXED // squared
            invert = not invert

        for bit in range(_POW_EXPONENT_BITS):
            if abs_exponent & (1 << bit):
                result = (result * squared) >> FIX_POINT_BITS
            squared = (squared * squared) >> FIX_POINT_BITS

    # exponent too big, or base^exponent underflowed
    if result == 0:
        raise PowUnderflow(f"pow underflow for exponent {exponent}")

    return MAX_FIXED // result if invert else result
