"""Pricing-model variants sharing one engine.

ALMM and DLMM pairs run the same fee, volatility and routing math. They differ
only in the width of the base fee factor and in whether bins carry reward
growth accumulators.
"""

from __future__ import annotations

from dataclasses import dataclass

from binquote.errors import UnknownVariant


@dataclass(frozen=True)
class PoolVariant:
    """Description of one pricing-model variant.

    Attributes:
        name: Variant identifier used in URLs and snapshots
        base_factor_bits: Width of the base_factor field
        has_rewarder_growth: Whether bins carry per-rewarder growth accumulators
        has_protocol_variable_share: Whether parameters carry a protocol share
            of the variable fee
    """

    name: str
    base_factor_bits: int
    has_rewarder_growth: bool
    has_protocol_variable_share: bool


ALMM = PoolVariant(
    name="almm",
    base_factor_bits=32,
    has_rewarder_growth=False,
    has_protocol_variable_share=True,
)

DLMM = PoolVariant(
    name="dlmm",
    base_factor_bits=16,
    has_rewarder_growth=True,
    has_protocol_variable_share=False,
)

VARIANTS = {variant.name: variant for variant in (ALMM, DLMM)}


def get_variant(name: str) -> PoolVariant:
    """Look up a variant by name (case-insensitive).

    Raises:
        UnknownVariant: If no variant has that name
    """
    try:
        return VARIANTS[name.lower()]
    except KeyError:
        raise UnknownVariant(f"Unknown pool variant: {name!r}") from None


__all__ = ["PoolVariant", "ALMM", "DLMM", "VARIANTS", "get_variant"]
