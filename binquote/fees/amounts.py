"""Fee amount formulas.

Fees are expressed in units of 1e-9 (PRECISION == 100%). Both formulas round
up so the pool never undercharges.
"""

from __future__ import annotations

from binquote.constants import DEFAULT_ENGINE_CONFIG, EngineConfig
from binquote.errors import FeeTooLarge
from binquote.safe_int import S, safe64


def verify_fee(total_fee: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> None:
    """Raise FeeTooLarge if total_fee is above the maximum fee rate."""
    if total_fee > config.max_fee:
        raise FeeTooLarge(f"Fee {total_fee} exceeds maximum {config.max_fee}")


def fee_from_gross(
    amount_with_fee: int, total_fee: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> int:
    """Fee contained in an amount that already includes it.

    ceil(amount_with_fee * total_fee / PRECISION)
    """
    verify_fee(total_fee, config)
    fee = (S(amount_with_fee) * S(total_fee)).ceiling_div(config.precision)
    return safe64(fee.value)


def fee_to_reach_net(
    amount_net: int, total_fee: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> int:
    """Fee to add on top of amount_net so that net + fee pays the fee rate.

    ceil(amount_net * total_fee / (PRECISION - total_fee))
    """
    verify_fee(total_fee, config)
    denominator = S(config.precision) - S(total_fee)
    fee = (S(amount_net) * S(total_fee)).ceiling_div(denominator)
    return safe64(fee.value)


__all__ = ["verify_fee", "fee_from_gross", "fee_to_reach_net"]
