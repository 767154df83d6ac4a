"""Test helpers module for shared test utilities.

- pairs: PairParameters / Bin / PairSnapshot builders and fixture loading
"""

from tests.helpers.pairs import (
    ACTIVE_ID,
    FIXTURE_PAIR_PATH,
    load_fixture_pair,
    load_fixture_pair_dict,
    make_bin,
    make_parameters,
    make_snapshot,
)

__all__ = [
    "ACTIVE_ID",
    "FIXTURE_PAIR_PATH",
    "load_fixture_pair",
    "load_fixture_pair_dict",
    "make_bin",
    "make_parameters",
    "make_snapshot",
]
