"""Point-in-time pair snapshot: parameters, bins and bin step."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from binquote.errors import InvalidSnapshot, MissingActiveBin
from binquote.fees.parameters import PairParameters
from binquote.variants import ALMM, PoolVariant


@dataclass(frozen=True)
class Bin:
    """One price step holding reserves of both assets.

    Growth accumulators are informational; the quote computation reads only
    the reserves (the price is re-derived from storage_id).
    """

    storage_id: int
    reserve_x: int
    reserve_y: int
    price_q128: int = 0
    fee_growth_x: int = 0
    fee_growth_y: int = 0
    distribution_growth: int = 0
    rewarder_growth: tuple[int, ...] = ()

    def reserve_out(self, swap_for_y: bool) -> int:
        """Reserve on the output side of a swap."""
        return self.reserve_y if swap_for_y else self.reserve_x


@dataclass(frozen=True)
class PairSnapshot:
    """Bins, parameters and bin step of a pair at one point in time.

    The snapshot is never mutated: the swap router copies `parameters`
    before advancing them. Bins are indexed by storage id with a sorted key
    list for nearest-neighbour lookup.
    """

    parameters: PairParameters
    bins: Mapping[int, Bin]
    bin_step: int
    variant: PoolVariant = ALMM
    _sorted_ids: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        bins = MappingProxyType(dict(self.bins))
        object.__setattr__(self, "bins", bins)
        object.__setattr__(self, "_sorted_ids", tuple(sorted(bins)))

    @classmethod
    def from_bins(
        cls,
        parameters: PairParameters,
        bins: Iterable[Bin],
        bin_step: int,
        variant: PoolVariant = ALMM,
    ) -> PairSnapshot:
        """Build a snapshot from a list of bins.

        Raises:
            InvalidSnapshot: If two bins share a storage id
        """
        by_id: dict[int, Bin] = {}
        for b in bins:
            if b.storage_id in by_id:
                raise InvalidSnapshot(f"Duplicate bin storage id {b.storage_id}")
            by_id[b.storage_id] = b
        return cls(parameters=parameters, bins=by_id, bin_step=bin_step, variant=variant)

    @classmethod
    def from_json(cls, data: str | bytes | Mapping[str, Any], variant: PoolVariant = ALMM) -> PairSnapshot:
        """Parse a snapshot from its wire representation (JSON text or dict)."""
        from binquote.models.snapshot import parse_pair_snapshot

        return parse_pair_snapshot(data, variant)

    @property
    def active_id(self) -> int:
        return self.parameters.active_index

    def get_bin(self, storage_id: int) -> Bin | None:
        return self.bins.get(storage_id)

    def active_bin(self) -> Bin:
        """The bin at the active index.

        Raises:
            MissingActiveBin: If the snapshot has no bin there
        """
        active = self.bins.get(self.active_id)
        if active is None:
            raise MissingActiveBin(f"No bin for active index {self.active_id}")
        return active

    def next_bin_id(self, storage_id: int, swap_for_y: bool) -> int | None:
        """Nearest bin past storage_id in the direction of a swap.

        Swapping X for Y moves to the nearest strictly greater storage id,
        swapping Y for X to the nearest strictly lesser one, as the on-chain
        pair does. Returns None when no bin lies in that direction.
        """
        ids = self._sorted_ids
        if swap_for_y:
            i = bisect_right(ids, storage_id)
            return ids[i] if i < len(ids) else None
        i = bisect_left(ids, storage_id)
        return ids[i - 1] if i > 0 else None

    def __len__(self) -> int:
        return len(self.bins)


__all__ = ["Bin", "PairSnapshot"]
