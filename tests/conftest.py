"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from binquote.pair import PairSnapshot
from tests.helpers import ACTIVE_ID, load_fixture_pair, load_fixture_pair_dict, make_snapshot

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# time_of_last_update of the fixture pair
FIXTURE_TIMESTAMP = 1_754_900_084


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the fixtures directory path."""
    return FIXTURES_DIR


@pytest.fixture
def fixture_pair() -> PairSnapshot:
    """Realistic ALMM snapshot: bin_step 10, active bin 8397927."""
    return load_fixture_pair()


@pytest.fixture
def fixture_pair_dict() -> dict:
    """The fixture snapshot as decoded JSON."""
    return load_fixture_pair_dict()


@pytest.fixture
def fixture_timestamp() -> int:
    """A quote time 10s after the fixture's last update (inside the filter period)."""
    return FIXTURE_TIMESTAMP + 10


@pytest.fixture
def unit_price_pair() -> PairSnapshot:
    """One bin at price 1.0 holding both assets, 0.01% flat fee."""
    return make_snapshot({ACTIVE_ID: (1_000_000, 1_000_000)})
