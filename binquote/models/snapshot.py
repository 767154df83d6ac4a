"""Pydantic models for the pair-snapshot JSON emitted by the chain indexer.

Example (abridged):
    {
      "params": {"active_index": 8397927, "base_factor": 100000, ...,
                 "time_of_last_update": "1754900084"},
      "bins": [{"storage_id": 8397927, "reserve_x": "292841",
                "reserve_y": "8403240371", "price_q128": "3775...", ...}],
      "bin_step": 10
    }

Fields the engine does not use (fee_x, staked_liquidity, real_bin_id, ...)
are ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from binquote.errors import InvalidSnapshot
from binquote.fees.parameters import PairParameters
from binquote.models.types import Uint64, Uint256
from binquote.pair import Bin, PairSnapshot
from binquote.safe_int import UINT32_MAX, safe_cast
from binquote.variants import ALMM, PoolVariant

U16_MAX = 2**16 - 1


class PairParametersModel(BaseModel):
    """Fee and volatility parameters of a pair."""

    base_factor: int = Field(ge=0, le=UINT32_MAX)
    filter_period: int = Field(ge=0, le=U16_MAX)
    decay_period: int = Field(ge=0, le=U16_MAX)
    reduction_factor: int = Field(ge=0, le=U16_MAX)
    variable_fee_control: int = Field(ge=0, le=UINT32_MAX)
    protocol_share: int = Field(default=0, ge=0, le=U16_MAX)
    protocol_variable_share: int = Field(default=0, ge=0, le=U16_MAX)
    max_volatility_accumulator: int = Field(ge=0, le=UINT32_MAX)
    volatility_accumulator: int = Field(ge=0, le=UINT32_MAX)
    volatility_reference: int = Field(ge=0, le=UINT32_MAX)
    index_reference: int = Field(ge=0, le=UINT32_MAX)
    time_of_last_update: Uint64
    oracle_index: int = Field(default=0, ge=0, le=U16_MAX)
    active_index: int = Field(ge=0, le=UINT32_MAX)

    model_config = {"extra": "ignore"}

    def to_domain(self) -> PairParameters:
        return PairParameters(**self.model_dump())


class BinModel(BaseModel):
    """One bin of the snapshot."""

    storage_id: int = Field(ge=0, le=UINT32_MAX)
    reserve_x: Uint64
    reserve_y: Uint64
    price_q128: Uint256 = "0"
    fee_growth_x: Uint256 = "0"
    fee_growth_y: Uint256 = "0"
    distribution_growth: Uint256 = "0"
    rewarder_growth: list[Uint256] = Field(default_factory=list)

    model_config = {"extra": "ignore"}

    @field_validator("rewarder_growth", mode="before")
    @classmethod
    def unwrap_contents(cls, value: Any) -> Any:
        """Accept both {"contents": [...]} and a bare list."""
        if isinstance(value, Mapping):
            return value.get("contents", [])
        return value

    def to_domain(self, keep_rewarder_growth: bool) -> Bin:
        return Bin(
            storage_id=self.storage_id,
            reserve_x=self.reserve_x,
            reserve_y=self.reserve_y,
            price_q128=int(self.price_q128),
            fee_growth_x=int(self.fee_growth_x),
            fee_growth_y=int(self.fee_growth_y),
            distribution_growth=int(self.distribution_growth),
            rewarder_growth=(
                tuple(int(g) for g in self.rewarder_growth) if keep_rewarder_growth else ()
            ),
        )


class PairSnapshotModel(BaseModel):
    """Complete pair snapshot: parameters, bins and bin step."""

    params: PairParametersModel
    bins: list[BinModel]
    bin_step: int = Field(ge=0, le=U16_MAX)

    model_config = {"extra": "ignore"}

    def to_domain(self, variant: PoolVariant = ALMM) -> PairSnapshot:
        """Convert to a PairSnapshot, applying the variant's field widths.

        Raises:
            SafeCastOverflow: If base_factor does not fit the variant's width
            InvalidSnapshot: If two bins share a storage id
        """
        safe_cast(self.params.base_factor, variant.base_factor_bits)
        parameters = self.params.to_domain()
        if not variant.has_protocol_variable_share:
            parameters.protocol_variable_share = 0
        bins = [b.to_domain(variant.has_rewarder_growth) for b in self.bins]
        return PairSnapshot.from_bins(parameters, bins, self.bin_step, variant)


def parse_pair_snapshot(
    data: str | bytes | Mapping[str, Any], variant: PoolVariant = ALMM
) -> PairSnapshot:
    """Validate snapshot JSON (text or already-decoded dict) into a PairSnapshot.

    Raises:
        InvalidSnapshot: If the data does not match the snapshot schema
        SafeCastOverflow: If base_factor does not fit the variant's width
    """
    try:
        if isinstance(data, (str, bytes)):
            model = PairSnapshotModel.model_validate_json(data)
        else:
            model = PairSnapshotModel.model_validate(data)
    except ValidationError as e:
        raise InvalidSnapshot(f"Invalid pair snapshot: {e}") from e
    return model.to_domain(variant)


__all__ = [
    "PairParametersModel",
    "BinModel",
    "PairSnapshotModel",
    "parse_pair_snapshot",
]
