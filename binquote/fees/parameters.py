"""Per-pair fee and volatility parameters.

The total fee of a swap is a static base fee plus a variable fee that grows
with recent price movement. Movement is tracked by the volatility
accumulator: on every swap the references are refreshed from the elapsed
time, and the accumulator is recomputed for each bin the swap crosses.

Units:
- base_factor * bin_step is already in fee units (1e-9)
- volatility_accumulator / volatility_reference are in basis points per bin
- reduction_factor is in basis points
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from binquote.constants import DEFAULT_ENGINE_CONFIG, EngineConfig
from binquote.errors import TimestampRegression
from binquote.safe_int import S, safe64


@dataclass
class PairParameters:
    """Fee/volatility state of a pair.

    Instances are advanced in place by the update methods; callers that must
    keep their copy untouched work on copy() (the swap router always does).
    """

    base_factor: int
    filter_period: int
    decay_period: int
    reduction_factor: int
    variable_fee_control: int
    max_volatility_accumulator: int
    volatility_accumulator: int
    volatility_reference: int
    index_reference: int
    time_of_last_update: int
    active_index: int
    # Informational, not consumed by the quote computation
    protocol_share: int = 0
    protocol_variable_share: int = 0
    oracle_index: int = 0

    def copy(self) -> PairParameters:
        return dataclasses.replace(self)

    # --- Fees ---

    def get_base_fee(self, bin_step: int) -> int:
        """Static fee: base_factor (bp) times bin_step (bp) gives 1e-9 units."""
        return self.base_factor * bin_step

    def get_variable_fee(self, bin_step: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
        """Volatility fee: (volatility_accumulator * bin_step)^2 * variable_fee_control.

        The product is in 1e-20 units; it is rounded up to a multiple of 100
        and then truncated to fee units, exactly as on chain.
        """
        if self.variable_fee_control == 0:
            return 0
        prod = self.volatility_accumulator * bin_step
        fee = S(prod * prod * self.variable_fee_control).ceiling_div(config.variable_fee_rounding)
        return safe64(fee.value // config.precision)

    def get_total_fee(self, bin_step: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
        return self.get_base_fee(bin_step) + self.get_variable_fee(bin_step, config)

    # --- State transitions ---

    def update_volatility_parameters(
        self, active_id: int, timestamp: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG
    ) -> None:
        """Refresh the references for timestamp, then the accumulator for active_id."""
        self.update_references(timestamp, config)
        self.update_volatility_accumulator(active_id, config)

    def update_references(self, timestamp: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> None:
        """Refresh index/volatility references from the time elapsed since the last update.

        After filter_period seconds the index reference moves to the active
        bin. Before decay_period the volatility reference decays by
        reduction_factor, after it the reference resets to zero.

        Raises:
            TimestampRegression: If timestamp < time_of_last_update
        """
        if timestamp < self.time_of_last_update:
            raise TimestampRegression(
                f"Timestamp {timestamp} is before last update {self.time_of_last_update}"
            )
        dt = timestamp - self.time_of_last_update

        if dt >= self.filter_period:
            self.index_reference = self.active_index
            if dt < self.decay_period:
                self.volatility_reference = (
                    self.volatility_accumulator * self.reduction_factor // config.basis_point_max
                )
            else:
                self.volatility_reference = 0

        self.time_of_last_update = timestamp

    def update_volatility_accumulator(
        self, active_id: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG
    ) -> None:
        """Accumulator = reference + bins moved * 10,000, capped at the maximum."""
        delta_id = S(active_id).abs_diff(self.index_reference)
        volatility_accumulator = S(self.volatility_reference) + delta_id * config.basis_point_max
        self.volatility_accumulator = volatility_accumulator.min(self.max_volatility_accumulator).value


__all__ = ["PairParameters"]
