"""Price ladder: bin ids and their 128.128 prices.

A bin has a signed real id (zero-centred) and an unsigned storage id (the
real id shifted by 2^23 into the dense key space [0, 2^24)). The price of a
bin is base^real_id with base = 1 + bin_step / 10,000, so every step away
from the centre multiplies the price by base.

Prices are the price of asset X in units of asset Y.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

from binquote.constants import DEFAULT_ENGINE_CONFIG, EngineConfig
from binquote.errors import InvalidBinStep, StorageIdOutOfRange
from binquote.math import u128x128
from binquote.safe_int import safe32, safe128

__all__ = [
    "storage_id_from_real_id",
    "real_id_from_storage_id",
    "get_base",
    "price_from_storage_id",
    "price_from_real_id",
    "real_id_from_price",
    "decimal_price_to_q128",
    "q128_price_to_decimal",
    "bin_price",
    "storage_id_from_ui_price",
    "storage_id_range_for_slippage",
    "DECIMAL_PRECISION",
]

# Significant digits for Decimal conversions; a 256-bit integer has 78
DECIMAL_PRECISION = 80


# =============================================================================
# Bin id mapping
# =============================================================================


def storage_id_from_real_id(real_id: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    """Map a signed real id to its storage id.

    Raises:
        StorageIdOutOfRange: If real_id is outside [-2^23, 2^23)
    """
    shift = config.real_id_shift
    if not -shift <= real_id < shift:
        raise StorageIdOutOfRange(f"Real id {real_id} outside [-{shift}, {shift})")
    if real_id >= 0:
        return real_id + shift
    return shift - abs(real_id)


def real_id_from_storage_id(storage_id: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    """Map a storage id back to its signed real id.

    Raises:
        StorageIdOutOfRange: If storage_id >= 2^24
    """
    shift = config.real_id_shift
    if not 0 <= storage_id < config.max_storage_id:
        raise StorageIdOutOfRange(f"Storage id {storage_id} outside [0, {config.max_storage_id})")
    if storage_id >= shift:
        return storage_id - shift
    return -(shift - storage_id)


# =============================================================================
# Prices
# =============================================================================


def get_base(bin_step: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    """Ratio between adjacent bin prices, 1 + bin_step / 10,000, in 128.128."""
    return config.scale + (bin_step << config.scale_offset) // config.basis_point_max


def price_from_storage_id(
    storage_id: int, bin_step: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> int:
    """128.128 price of the bin at storage_id."""
    base = get_base(bin_step, config)
    exponent = real_id_from_storage_id(storage_id, config)
    return u128x128.pow(base, exponent)


def price_from_real_id(real_id: int, bin_step: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    """128.128 price of the bin at real_id."""
    return price_from_storage_id(storage_id_from_real_id(real_id, config), bin_step, config)


def real_id_from_price(price: int, bin_step: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    """Real id of the bin whose price is closest below (in log terms) to price.

    Computed as log2(price) / log2(base) on the magnitudes, with the sign
    reconciled from the two logarithm signs.

    Raises:
        InvalidBinStep: If bin_step is zero
        LogUnderflow: If price is zero
        SafeCastOverflow: If the id magnitude does not fit in 32 bits
    """
    if bin_step == 0:
        raise InvalidBinStep("bin_step must be positive to invert a price")

    base = get_base(bin_step, config)
    price_abs, price_positive = u128x128.log2(price)
    base_abs, base_positive = u128x128.log2(base)
    real_id_abs = safe32(price_abs // base_abs)

    if price_positive != base_positive:
        return -real_id_abs
    return real_id_abs


# =============================================================================
# Decimal conversions
# =============================================================================


def decimal_price_to_q128(price: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    """Convert a price in 1e-9 units to 128.128 fixed point."""
    return u128x128.to_fixed(safe128(price), config.precision_decimals)


def q128_price_to_decimal(price: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    """Convert a 128.128 price to 1e-9 units (floored)."""
    return (price * config.precision) >> config.scale_offset


def bin_price(
    real_id: int,
    bin_step: int,
    decimals_x: int = 0,
    decimals_y: int = 0,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> Decimal:
    """Human-readable price of a bin (whole Y tokens per whole X token).

    Args:
        real_id: Signed bin id
        bin_step: Bin step in basis points
        decimals_x: Decimals of token X
        decimals_y: Decimals of token Y
    """
    price_q128 = price_from_real_id(real_id, bin_step, config)
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        price = Decimal(price_q128) / Decimal(config.scale)
        return price.scaleb(decimals_x - decimals_y)


def storage_id_from_ui_price(
    price: Decimal | str,
    bin_step: int,
    decimals_x: int,
    decimals_y: int,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> int:
    """Storage id of the bin holding a human-readable price.

    Args:
        price: Whole Y tokens per whole X token
        bin_step: Bin step in basis points
        decimals_x: Decimals of token X
        decimals_y: Decimals of token Y
    """
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        price_raw = Decimal(price).scaleb(decimals_y - decimals_x)
        price_q128 = int((price_raw * Decimal(config.scale)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    real_id = real_id_from_price(price_q128, bin_step, config)
    return storage_id_from_real_id(real_id, config)


def storage_id_range_for_slippage(
    active_real_id: int,
    bin_step: int,
    slippage_bps: int,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> tuple[int, int]:
    """Storage ids bounding the active bin price within a slippage tolerance.

    The active bin price is scaled by (1 - s) and (1 + s) with s in basis
    points, and each bound is mapped back to a bin.

    Returns:
        (min_storage_id, max_storage_id)
    """
    if not 0 <= slippage_bps < config.basis_point_max:
        raise ValueError(f"slippage_bps must be in [0, {config.basis_point_max}), got {slippage_bps}")

    price = price_from_real_id(active_real_id, bin_step, config)
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        slippage = Decimal(slippage_bps) / Decimal(config.basis_point_max)
        one = Decimal(1)
        min_price = (Decimal(price) * (one - slippage)).quantize(one, rounding=ROUND_HALF_UP)
        max_price = (Decimal(price) * (one + slippage)).quantize(one, rounding=ROUND_HALF_UP)

    min_id = storage_id_from_real_id(real_id_from_price(int(min_price), bin_step, config), config)
    max_id = storage_id_from_real_id(real_id_from_price(int(max_price), bin_step, config), config)
    return min_id, max_id
