"""Swap routing across bins.

Usage:
    from binquote.swap import bin_swap_router

    result = bin_swap_router.swap_out(snapshot, amount_in, swap_for_y=True, timestamp=now)
"""

from binquote.swap.bin import BinAmounts, get_amounts, get_amounts_for_output
from binquote.swap.router import BinSwapRouter, bin_swap_router
from binquote.swap.types import SwapDirection, SwapInResult, SwapOutResult

__all__ = [
    "BinAmounts",
    "get_amounts",
    "get_amounts_for_output",
    "BinSwapRouter",
    "bin_swap_router",
    "SwapDirection",
    "SwapInResult",
    "SwapOutResult",
]
