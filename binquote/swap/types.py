"""Result types for bin swaps."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum


class SwapDirection(str, Enum):
    """Which asset the trader receives."""

    TO_Y = "toY"
    TO_X = "toX"

    @property
    def swap_for_y(self) -> bool:
        return self is SwapDirection.TO_Y

    @classmethod
    def from_swap_for_y(cls, swap_for_y: bool) -> SwapDirection:
        return cls.TO_Y if swap_for_y else cls.TO_X


@dataclass(frozen=True)
class SwapOutResult:
    """Result of an exact-input swap.

    Attributes:
        amount_in_left: Input not absorbed by any bin (> 0 on a partial fill)
        amount_out: Output received
        fee: Total fee charged, in input units
        bins_crossed: Number of bins that took part in the trade
    """

    amount_in_left: int
    amount_out: int
    fee: int
    bins_crossed: int = 0

    @property
    def is_partial(self) -> bool:
        return self.amount_in_left > 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class SwapInResult:
    """Result of an exact-output swap.

    Attributes:
        amount_in: Input required, fee included
        amount_out_left: Requested output no bin could provide (> 0 on a partial fill)
        fee: Total fee charged, in input units
        bins_crossed: Number of bins that took part in the trade
    """

    amount_in: int
    amount_out_left: int
    fee: int
    bins_crossed: int = 0

    @property
    def is_partial(self) -> bool:
        return self.amount_out_left > 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


__all__ = ["SwapDirection", "SwapOutResult", "SwapInResult"]
