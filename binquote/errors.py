"""Error classes for the quote engine.

Every failure of a quote computation is one of these. They are precondition
violations, not expected outcomes, so nothing inside the engine recovers from
them. The host boundary (binquote.quoter) maps each to its ``code``.
"""


class BinQuoteError(ArithmeticError):
    """Base error for quote engine operations."""

    code = "engine_error"


class StorageIdOutOfRange(BinQuoteError):
    """Storage id is not below 2^24 (or a real id maps outside that space)."""

    code = "storage_id_out_of_range"


class LogUnderflow(BinQuoteError):
    """Binary logarithm of zero."""

    code = "log_underflow"


class PowUnderflow(BinQuoteError):
    """Fixed-point power truncated to zero."""

    code = "pow_underflow"


class SafeCastOverflow(BinQuoteError):
    """Value does not fit in the target bit width."""

    code = "safe_cast_overflow"

    def __init__(self, width: int, value: int | None = None) -> None:
        self.width = width
        self.value = value
        if value is None:
            super().__init__(f"Value does not fit in {width} bits")
        else:
            super().__init__(f"Value {value} does not fit in {width} bits")


class FeeTooLarge(BinQuoteError):
    """Total fee exceeds the maximum fee rate."""

    code = "fee_too_large"


class LiquidityOverflow(BinQuoteError):
    """price * reserve_x or the sum with reserve_y << 128 overflows 256 bits."""

    code = "liquidity_overflow"


class MaxLiquidityPerBinExceeded(BinQuoteError):
    """Post-trade bin liquidity is above the per-bin ceiling."""

    code = "max_liquidity_per_bin_exceeded"


class MissingActiveBin(BinQuoteError):
    """The snapshot has no bin for its active index."""

    code = "missing_active_bin"


class TimestampRegression(BinQuoteError):
    """Timestamp is older than the parameters' time of last update."""

    code = "timestamp_regression"


class InvalidBinStep(BinQuoteError):
    """Bin step of zero, where a price ratio is needed."""

    code = "invalid_bin_step"


class UnknownVariant(BinQuoteError):
    """No pricing-model variant with the requested name."""

    code = "unknown_variant"


class InvalidSnapshot(BinQuoteError):
    """Pair snapshot data failed validation."""

    code = "invalid_snapshot"


class Underflow(BinQuoteError):
    """Unsigned subtraction would produce a negative result."""

    code = "underflow"


class DivisionByZero(BinQuoteError):
    """Division or modulo by zero."""

    code = "division_by_zero"


__all__ = [
    "BinQuoteError",
    "StorageIdOutOfRange",
    "LogUnderflow",
    "PowUnderflow",
    "SafeCastOverflow",
    "FeeTooLarge",
    "LiquidityOverflow",
    "MaxLiquidityPerBinExceeded",
    "MissingActiveBin",
    "TimestampRegression",
    "InvalidBinStep",
    "UnknownVariant",
    "InvalidSnapshot",
    "Underflow",
    "DivisionByZero",
]
