"""Trade against a single bin.

Inside a bin the price is fixed, so converting between X and Y is a single
multiplication or division by the 128.128 price:
- X -> Y: amount_y = (amount_x * price) >> 128
- Y -> X: amount_x = (amount_y << 128) // price
"""

from __future__ import annotations

from dataclasses import dataclass

from binquote.constants import DEFAULT_ENGINE_CONFIG, EngineConfig
from binquote.errors import LiquidityOverflow, MaxLiquidityPerBinExceeded
from binquote.fees.amounts import fee_from_gross, fee_to_reach_net
from binquote.safe_int import UINT256_MAX, S, safe64


@dataclass(frozen=True)
class BinAmounts:
    """Amounts exchanged with one bin.

    Attributes:
        amount_in_with_fee: Input taken by the bin, fee included
        amount_out: Output released by the bin
        fee: Fee part of amount_in_with_fee
    """

    amount_in_with_fee: int
    amount_out: int
    fee: int


def convert_in_to_out(
    amount: int, price_q128: int, swap_for_y: bool, config: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> int:
    """Convert an input amount to output at the bin price (floored)."""
    if swap_for_y:
        return safe64((amount * price_q128) >> config.scale_offset)
    return safe64((amount << config.scale_offset) // price_q128)


def convert_out_to_in(
    amount: int, price_q128: int, swap_for_y: bool, config: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> int:
    """Convert an output amount to the input it costs at the bin price (floored)."""
    if swap_for_y:
        return safe64((amount << config.scale_offset) // price_q128)
    return safe64((amount * price_q128) >> config.scale_offset)


def get_liquidity(
    amount_x: int, amount_y: int, price_q128: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> int:
    """Liquidity of a bin: price * x + (y << 128), checked against 256 bits.

    Raises:
        LiquidityOverflow: If either term or their sum exceeds 256 bits
    """
    liquidity = 0
    if amount_x > 0:
        liquidity = price_q128 * amount_x
        if liquidity > UINT256_MAX:
            raise LiquidityOverflow(f"price * reserve_x overflows: {price_q128} * {amount_x}")
    if amount_y > 0:
        liquidity += amount_y << config.scale_offset
        if liquidity > UINT256_MAX:
            raise LiquidityOverflow(f"liquidity + reserve_y overflows for reserve_y={amount_y}")
    return liquidity


def verify_liquidity(
    reserve_x: int, reserve_y: int, price_q128: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> None:
    """Raise MaxLiquidityPerBinExceeded if the reserves exceed the per-bin ceiling."""
    liquidity = get_liquidity(reserve_x, reserve_y, price_q128, config)
    if liquidity > config.max_liquidity_per_bin:
        raise MaxLiquidityPerBinExceeded(
            f"Bin liquidity {liquidity} exceeds {config.max_liquidity_per_bin}"
        )


def verify_post_trade(
    reserve_x: int,
    reserve_y: int,
    amount_in: int,
    amount_out: int,
    price_q128: int,
    swap_for_y: bool,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> None:
    """Check the liquidity ceiling on the reserves a trade would leave behind."""
    if swap_for_y:
        new_x, new_y = S(reserve_x) + amount_in, S(reserve_y) - amount_out
    else:
        new_x, new_y = S(reserve_x) - amount_out, S(reserve_y) + amount_in
    verify_liquidity(new_x.value, new_y.value, price_q128, config)


def get_amounts(
    reserve_x: int,
    reserve_y: int,
    price_q128: int,
    total_fee: int,
    swap_for_y: bool,
    amount_in_left: int,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> BinAmounts:
    """Amounts exchanged when swapping up to amount_in_left into one bin.

    If amount_in_left covers the bin's whole output reserve (fee included),
    the bin is drained. Otherwise all of amount_in_left is taken: the fee is
    removed and the rest converted at the bin price, capped at the reserve.

    Args:
        reserve_x: Bin reserve of X
        reserve_y: Bin reserve of Y
        price_q128: Bin price (128.128)
        total_fee: Fee rate in 1e-9 units
        swap_for_y: True to swap X for Y
        amount_in_left: Remaining input, fee included

    Returns:
        BinAmounts for this bin
    """
    reserve_out = reserve_y if swap_for_y else reserve_x

    max_amount_in = convert_out_to_in(reserve_out, price_q128, swap_for_y, config)
    max_fee = fee_to_reach_net(max_amount_in, total_fee, config)
    max_amount_in_with_fee = safe64(max_amount_in + max_fee)

    if amount_in_left >= max_amount_in_with_fee:
        amounts = BinAmounts(
            amount_in_with_fee=max_amount_in_with_fee,
            amount_out=reserve_out,
            fee=max_fee,
        )
        # a drained bin is checked with the fee included
        amount_added = max_amount_in_with_fee
    else:
        fee = fee_from_gross(amount_in_left, total_fee, config)
        amount_in = (S(amount_in_left) - fee).value
        amount_out = min(convert_in_to_out(amount_in, price_q128, swap_for_y, config), reserve_out)
        amounts = BinAmounts(amount_in_with_fee=amount_in_left, amount_out=amount_out, fee=fee)
        amount_added = amount_in

    verify_post_trade(
        reserve_x,
        reserve_y,
        amount_added,
        amounts.amount_out,
        price_q128,
        swap_for_y,
        config,
    )
    return amounts


def get_amounts_for_output(
    reserve_x: int,
    reserve_y: int,
    price_q128: int,
    total_fee: int,
    swap_for_y: bool,
    amount_out_left: int,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> BinAmounts:
    """Amounts exchanged when taking up to amount_out_left out of one bin.

    The input is the floored conversion of the output at the bin price, and
    the fee is charged on that fee-exclusive input.
    """
    reserve_out = reserve_y if swap_for_y else reserve_x
    amount_out = min(reserve_out, amount_out_left)

    amount_in = convert_out_to_in(amount_out, price_q128, swap_for_y, config)
    fee = fee_from_gross(amount_in, total_fee, config)
    amounts = BinAmounts(amount_in_with_fee=safe64(amount_in + fee), amount_out=amount_out, fee=fee)

    verify_post_trade(
        reserve_x,
        reserve_y,
        amounts.amount_in_with_fee,
        amounts.amount_out,
        price_q128,
        swap_for_y,
        config,
    )
    return amounts


__all__ = [
    "BinAmounts",
    "convert_in_to_out",
    "convert_out_to_in",
    "get_liquidity",
    "verify_liquidity",
    "verify_post_trade",
    "get_amounts",
    "get_amounts_for_output",
]
