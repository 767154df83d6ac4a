"""Unsigned integer helpers for on-chain arithmetic.

Python integers never overflow, so the width checks that the on-chain code
gets for free from its integer types are made explicit here:
- safe32/safe64/safe128 reject values with bits at or above the target width
- SafeInt subtraction raises Underflow instead of going negative
- Division by zero raises DivisionByZero
- to_uint(width) rejects values that would wrap the target register

Usage pattern:
    from binquote.safe_int import S, safe64

    def fee_amount(amount: int, total_fee: int) -> int:
        # Wrap at entry
        sa, sf = S(amount), S(total_fee)

        # Natural arithmetic - automatically safe
        fee = (sa * sf).ceiling_div(PRECISION)

        # Unwrap at exit, checking the on-chain width
        return safe64(fee.value)
"""

from __future__ import annotations

from binquote.errors import DivisionByZero, SafeCastOverflow, Underflow

UINT32_MAX = 2**32 - 1
UINT64_MAX = 2**64 - 1
UINT128_MAX = 2**128 - 1
UINT256_MAX = 2**256 - 1


def safe_cast(x: int, width: int) -> int:
    """Return x unchanged if it fits in `width` unsigned bits.

    Raises:
        SafeCastOverflow: If x is negative or has a bit set at position >= width
    """
    if x < 0 or x >> width != 0:
        raise SafeCastOverflow(width, x)
    return x


def safe32(x: int) -> int:
    return safe_cast(x, 32)


def safe64(x: int) -> int:
    return safe_cast(x, 64)


def safe128(x: int) -> int:
    return safe_cast(x, 128)


def safe256(x: int) -> int:
    return safe_cast(x, 256)


class SafeInt:
    """Integer with safe unsigned arithmetic operations.

    Wraps an integer and provides arithmetic operators that raise
    descriptive errors instead of producing invalid results:
    - Negative results from subtraction raise Underflow
    - Division by zero raises DivisionByZero
    - Values exceeding a register width raise SafeCastOverflow on to_uint()

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Raises:
            TypeError: If value is not an int or SafeInt
        """
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division (truncating; operands are unsigned).

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def __lshift__(self, bits: int) -> SafeInt:
        return SafeInt(self._value << bits)

    def __rshift__(self, bits: int) -> SafeInt:
        return SafeInt(self._value >> bits)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __index__(self) -> int:
        return self._value

    # --- Named operations ---

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Ceiling division: (self + other - 1) // other.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Ceiling division by zero: {self._value}")
        return SafeInt((self._value + other_val - 1) // other_val)

    def min(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(min(self._value, _extract_value(other)))

    def abs_diff(self, other: SafeInt | int) -> SafeInt:
        """Absolute difference |self - other|, never negative."""
        return SafeInt(abs(self._value - _extract_value(other)))

    def to_uint(self, width: int) -> int:
        """Convert to int, validating it fits in `width` unsigned bits.

        Raises:
            SafeCastOverflow: If value is negative or too wide
        """
        return safe_cast(self._value, width)


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
