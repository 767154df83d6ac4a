"""Bin-traversal swap router.

A swap starts at the active bin and walks populated bins in the direction of
the trade, converting at each bin's fixed price and charging the base plus
volatility fee, until the requested amount is satisfied or no bin is left.

The router only quotes: it works on a copy of the pair parameters and never
writes to the snapshot, so one snapshot can serve concurrent quotes.
"""

from __future__ import annotations

import structlog

from binquote.constants import DEFAULT_ENGINE_CONFIG, EngineConfig
from binquote.pair import PairSnapshot
from binquote.price import price_from_storage_id
from binquote.safe_int import S, safe64
from binquote.swap.bin import get_amounts, get_amounts_for_output
from binquote.swap.types import SwapDirection, SwapInResult, SwapOutResult

logger = structlog.get_logger()


def _swap_for_y(direction: SwapDirection | bool) -> bool:
    if isinstance(direction, SwapDirection):
        return direction.swap_for_y
    return bool(direction)


class BinSwapRouter:
    """Computes exact-in and exact-out quotes against a pair snapshot."""

    def __init__(self, config: EngineConfig = DEFAULT_ENGINE_CONFIG):
        self.config = config

    def swap_out(
        self,
        snapshot: PairSnapshot,
        amount_in: int,
        direction: SwapDirection | bool,
        timestamp: int,
    ) -> SwapOutResult:
        """Quote the output for an exact input amount.

        Args:
            snapshot: Pair state to quote against
            amount_in: Input amount, fee included (u64)
            direction: SwapDirection, or True to swap X for Y
            timestamp: Unix seconds, not before the parameters' last update

        Returns:
            SwapOutResult; amount_in_left > 0 means liquidity ran out

        Raises:
            MissingActiveBin: If the active index has no bin
            TimestampRegression: If timestamp precedes the last update
            SafeCastOverflow: If amounts leave the u64 range
            FeeTooLarge / MaxLiquidityPerBinExceeded / LiquidityOverflow
        """
        config = self.config
        swap_for_y = _swap_for_y(direction)
        amount_in_left = S(safe64(amount_in))
        amount_out = S(0)
        fee = S(0)
        bins_crossed = 0

        snapshot.active_bin()
        params = snapshot.parameters.copy()
        params.update_references(timestamp, config)

        storage_id = snapshot.active_id
        while True:
            bin_ = snapshot.bins[storage_id]
            if bin_.reserve_out(swap_for_y) > 0:
                params.update_volatility_accumulator(storage_id, config)
                total_fee = params.get_total_fee(snapshot.bin_step, config)
                price_q128 = price_from_storage_id(storage_id, snapshot.bin_step, config)

                amounts = get_amounts(
                    bin_.reserve_x,
                    bin_.reserve_y,
                    price_q128,
                    total_fee,
                    swap_for_y,
                    amount_in_left.value,
                    config,
                )

                if amounts.amount_in_with_fee > 0:
                    amount_in_left = amount_in_left - amounts.amount_in_with_fee
                    amount_out = amount_out + amounts.amount_out
                    fee = fee + amounts.fee
                    bins_crossed += 1
                    logger.debug(
                        "swap_bin_applied",
                        storage_id=storage_id,
                        amount_in=amounts.amount_in_with_fee,
                        amount_out=amounts.amount_out,
                        fee=amounts.fee,
                        total_fee=total_fee,
                    )

            if amount_in_left == 0:
                break

            next_id = snapshot.next_bin_id(storage_id, swap_for_y)
            if next_id is None:
                logger.debug(
                    "swap_exhausted_liquidity",
                    last_storage_id=storage_id,
                    amount_in_left=amount_in_left.value,
                )
                break
            storage_id = next_id

        return SwapOutResult(
            amount_in_left=amount_in_left.to_uint(64),
            amount_out=amount_out.to_uint(64),
            fee=fee.to_uint(64),
            bins_crossed=bins_crossed,
        )

    def swap_in(
        self,
        snapshot: PairSnapshot,
        amount_out: int,
        direction: SwapDirection | bool,
        timestamp: int,
    ) -> SwapInResult:
        """Quote the input needed for an exact output amount.

        Args:
            snapshot: Pair state to quote against
            amount_out: Desired output amount (u64)
            direction: SwapDirection, or True to swap X for Y
            timestamp: Unix seconds, not before the parameters' last update

        Returns:
            SwapInResult; amount_out_left > 0 means liquidity ran out
        """
        config = self.config
        swap_for_y = _swap_for_y(direction)
        amount_out_left = S(safe64(amount_out))
        amount_in = S(0)
        fee = S(0)
        bins_crossed = 0

        snapshot.active_bin()
        params = snapshot.parameters.copy()
        params.update_references(timestamp, config)

        storage_id = snapshot.active_id
        while True:
            bin_ = snapshot.bins[storage_id]
            if bin_.reserve_out(swap_for_y) > 0:
                params.update_volatility_accumulator(storage_id, config)
                total_fee = params.get_total_fee(snapshot.bin_step, config)
                price_q128 = price_from_storage_id(storage_id, snapshot.bin_step, config)

                amounts = get_amounts_for_output(
                    bin_.reserve_x,
                    bin_.reserve_y,
                    price_q128,
                    total_fee,
                    swap_for_y,
                    amount_out_left.value,
                    config,
                )

                amount_in = amount_in + amounts.amount_in_with_fee
                amount_out_left = amount_out_left - amounts.amount_out
                fee = fee + amounts.fee
                bins_crossed += 1
                logger.debug(
                    "swap_bin_applied",
                    storage_id=storage_id,
                    amount_in=amounts.amount_in_with_fee,
                    amount_out=amounts.amount_out,
                    fee=amounts.fee,
                    total_fee=total_fee,
                )

            if amount_out_left == 0:
                break

            next_id = snapshot.next_bin_id(storage_id, swap_for_y)
            if next_id is None:
                logger.debug(
                    "swap_exhausted_liquidity",
                    last_storage_id=storage_id,
                    amount_out_left=amount_out_left.value,
                )
                break
            storage_id = next_id

        return SwapInResult(
            amount_in=amount_in.to_uint(64),
            amount_out_left=amount_out_left.to_uint(64),
            fee=fee.to_uint(64),
            bins_crossed=bins_crossed,
        )


# Singleton instance with the default engine configuration
bin_swap_router = BinSwapRouter()


__all__ = ["BinSwapRouter", "bin_swap_router"]
