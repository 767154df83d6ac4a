"""Shared field types for the snapshot wire models.

The chain indexer emits 64-bit amounts either as JSON numbers or as decimal
strings, and 256-bit accumulators always as decimal strings.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from binquote.safe_int import UINT64_MAX, UINT256_MAX


def _parse_unsigned(value: Any, bits: int, max_value: int) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Uint{bits} must be a number or decimal string, got bool")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint{bits} must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint{bits} must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint{bits} cannot be negative: {value}")
    if int_value > max_value:
        raise ValueError(f"Uint{bits} overflow: {value} > 2^{bits}-1")
    return int_value


def validate_uint64(value: Any) -> int:
    """Accept a u64 as a JSON number or a decimal string.

    Raises:
        ValueError: If value is not a non-negative integer below 2^64
    """
    return _parse_unsigned(value, 64, UINT64_MAX)


def validate_uint256(value: Any) -> str:
    """Validate that a value is a valid uint256 decimal string.

    Raises:
        ValueError: If value is not a non-negative integer within uint256 range
    """
    return str(_parse_unsigned(value, 256, UINT256_MAX))


# 64-bit unsigned integer, number or decimal string on the wire
Uint64 = Annotated[
    int,
    BeforeValidator(validate_uint64),
    Field(description="64-bit unsigned integer as number or decimal string"),
]

# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]
