"""Pydantic wire models for pair snapshots."""

from binquote.models.snapshot import (
    BinModel,
    PairParametersModel,
    PairSnapshotModel,
    parse_pair_snapshot,
)
from binquote.models.types import Uint64, Uint256

__all__ = [
    "BinModel",
    "PairParametersModel",
    "PairSnapshotModel",
    "parse_pair_snapshot",
    "Uint64",
    "Uint256",
]
