"""Fee handling for bin swaps.

- PairParameters: the fee/volatility state machine of a pair
- fee_from_gross / fee_to_reach_net: fee amounts for a given fee rate

Usage:
    from binquote.fees import PairParameters, fee_from_gross

    params = snapshot.parameters.copy()
    params.update_volatility_parameters(active_id, timestamp)
    fee = fee_from_gross(amount_in, params.get_total_fee(bin_step))
"""

from binquote.fees.amounts import fee_from_gross, fee_to_reach_net, verify_fee
from binquote.fees.parameters import PairParameters

__all__ = ["PairParameters", "fee_from_gross", "fee_to_reach_net", "verify_fee"]
