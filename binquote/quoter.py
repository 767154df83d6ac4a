"""Host-facing quote functions.

Each function wraps one engine operation and returns a QuoteResult instead
of raising, so a long-lived host (an API server, a bot loop) can treat every
engine failure as data:

    result = compute_swap_exact_in(pair_json, 1_000_000, True, now_ms)
    if result.is_error:
        log(result.error, result.error_detail)
    else:
        amount_out = result.value.amount_out

128.128 prices cross this boundary as decimal strings.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from binquote import price as price_ladder
from binquote.errors import BinQuoteError
from binquote.pair import PairSnapshot
from binquote.safe_int import safe64
from binquote.swap.router import BinSwapRouter, bin_swap_router
from binquote.swap.types import SwapInResult, SwapOutResult
from binquote.variants import ALMM, PoolVariant, get_variant

logger = structlog.get_logger()

PairInput = PairSnapshot | Mapping[str, Any] | str | bytes


class QuoteError(Enum):
    """Failure kinds reported at the host boundary (one per engine error code)."""

    STORAGE_ID_OUT_OF_RANGE = "storage_id_out_of_range"
    LOG_UNDERFLOW = "log_underflow"
    POW_UNDERFLOW = "pow_underflow"
    SAFE_CAST_OVERFLOW = "safe_cast_overflow"
    FEE_TOO_LARGE = "fee_too_large"
    LIQUIDITY_OVERFLOW = "liquidity_overflow"
    MAX_LIQUIDITY_PER_BIN_EXCEEDED = "max_liquidity_per_bin_exceeded"
    MISSING_ACTIVE_BIN = "missing_active_bin"
    TIMESTAMP_REGRESSION = "timestamp_regression"
    INVALID_BIN_STEP = "invalid_bin_step"
    UNKNOWN_VARIANT = "unknown_variant"
    INVALID_SNAPSHOT = "invalid_snapshot"
    UNDERFLOW = "underflow"
    DIVISION_BY_ZERO = "division_by_zero"
    INVALID_INPUT = "invalid_input"
    ENGINE_ERROR = "engine_error"

    @classmethod
    def from_exception(cls, exc: BinQuoteError) -> QuoteError:
        try:
            return cls(exc.code)
        except ValueError:
            return cls.ENGINE_ERROR


@dataclass(frozen=True)
class QuoteResult:
    """Outcome of a host-boundary call.

    Attributes:
        value: The computed value, or None on failure
        error: The failure kind, or None on success
        error_detail: Human-readable detail about the failure

    Examples:
        result = storage_id_from_real_id(1)
        assert result.is_valid and result.value == 8_388_609

        result = real_id_from_storage_id(1 << 24)
        assert result.error is QuoteError.STORAGE_ID_OUT_OF_RANGE
    """

    value: Any = None
    error: QuoteError | None = None
    error_detail: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def success(cls, value: Any) -> QuoteResult:
        return cls(value=value)

    @classmethod
    def with_error(cls, error: QuoteError, detail: str | None = None) -> QuoteResult:
        return cls(value=None, error=error, error_detail=detail)


def _call(operation: str, fn: Callable[..., Any], *args: Any) -> QuoteResult:
    try:
        return QuoteResult.success(fn(*args))
    except BinQuoteError as e:
        error = QuoteError.from_exception(e)
        logger.warning("quote_failed", operation=operation, error=error.value, detail=str(e))
        return QuoteResult.with_error(error, str(e))


def _resolve_variant(variant: PoolVariant | str) -> PoolVariant:
    if isinstance(variant, PoolVariant):
        return variant
    return get_variant(variant)


def _resolve_pair(pair: PairInput, variant: PoolVariant) -> PairSnapshot:
    if isinstance(pair, PairSnapshot):
        return pair
    return PairSnapshot.from_json(pair, variant)


# =============================================================================
# Price ladder
# =============================================================================


def storage_id_from_real_id(real_id: int) -> QuoteResult:
    return _call("storage_id_from_real_id", price_ladder.storage_id_from_real_id, real_id)


def real_id_from_storage_id(storage_id: int) -> QuoteResult:
    return _call("real_id_from_storage_id", price_ladder.real_id_from_storage_id, storage_id)


def price_from_storage_id(storage_id: int, bin_step: int) -> QuoteResult:
    """128.128 price of a bin as a decimal string."""
    return _call(
        "price_from_storage_id",
        lambda: str(price_ladder.price_from_storage_id(storage_id, bin_step)),
    )


def price_from_real_id(real_id: int, bin_step: int) -> QuoteResult:
    """128.128 price of a bin as a decimal string."""
    return _call(
        "price_from_real_id",
        lambda: str(price_ladder.price_from_real_id(real_id, bin_step)),
    )


def real_id_from_price(price: str, bin_step: int) -> QuoteResult:
    """Real id for a 128.128 price given as a decimal string."""
    try:
        price_value = int(price)
    except ValueError:
        logger.warning("quote_failed", operation="real_id_from_price", error="invalid_input")
        return QuoteResult.with_error(QuoteError.INVALID_INPUT, f"Not a decimal integer: {price!r}")
    if price_value < 0:
        return QuoteResult.with_error(QuoteError.INVALID_INPUT, f"Price cannot be negative: {price}")
    return _call("real_id_from_price", price_ladder.real_id_from_price, price_value, bin_step)


# =============================================================================
# Swaps
# =============================================================================


def _swap(
    operation: str,
    pair: PairInput,
    amount: int,
    swap_for_y: bool,
    timestamp_ms: int,
    variant: PoolVariant | str,
    router: BinSwapRouter,
) -> SwapOutResult | SwapInResult:
    snapshot = _resolve_pair(pair, _resolve_variant(variant))
    amount = safe64(amount)
    timestamp = safe64(timestamp_ms) // 1000
    if operation == "compute_swap_exact_in":
        return router.swap_out(snapshot, amount, swap_for_y, timestamp)
    return router.swap_in(snapshot, amount, swap_for_y, timestamp)


def compute_swap_exact_in(
    pair: PairInput,
    amount_in: int,
    swap_for_y: bool,
    timestamp_ms: int,
    variant: PoolVariant | str = ALMM,
    router: BinSwapRouter = bin_swap_router,
) -> QuoteResult:
    """Quote an exact-input swap; value is a SwapOutResult.

    Args:
        pair: PairSnapshot, decoded snapshot dict, or snapshot JSON text
        amount_in: Input amount, fee included (u64)
        swap_for_y: True to swap X for Y
        timestamp_ms: Current time in milliseconds
        variant: Pricing-model variant used to validate a raw snapshot
        router: Router to quote with (defaults to the shared instance)
    """
    operation = "compute_swap_exact_in"
    result = _call(operation, _swap, operation, pair, amount_in, swap_for_y, timestamp_ms, variant, router)
    if result.is_valid:
        logger.info(
            "quote_computed",
            operation=operation,
            amount_in=amount_in,
            amount_out=result.value.amount_out,
            amount_in_left=result.value.amount_in_left,
        )
    return result


def compute_swap_exact_out(
    pair: PairInput,
    amount_out: int,
    swap_for_y: bool,
    timestamp_ms: int,
    variant: PoolVariant | str = ALMM,
    router: BinSwapRouter = bin_swap_router,
) -> QuoteResult:
    """Quote an exact-output swap; value is a SwapInResult.

    Args are as for compute_swap_exact_in, with amount_out the desired output.
    """
    operation = "compute_swap_exact_out"
    result = _call(operation, _swap, operation, pair, amount_out, swap_for_y, timestamp_ms, variant, router)
    if result.is_valid:
        logger.info(
            "quote_computed",
            operation=operation,
            amount_out=amount_out,
            amount_in=result.value.amount_in,
            amount_out_left=result.value.amount_out_left,
        )
    return result


__all__ = [
    "QuoteError",
    "QuoteResult",
    "storage_id_from_real_id",
    "real_id_from_storage_id",
    "price_from_storage_id",
    "price_from_real_id",
    "real_id_from_price",
    "compute_swap_exact_in",
    "compute_swap_exact_out",
]
