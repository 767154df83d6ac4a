"""Tests for parsing pair snapshots from indexer JSON."""

import json

import pytest

from binquote.errors import InvalidSnapshot, SafeCastOverflow
from binquote.models import PairSnapshotModel, parse_pair_snapshot
from binquote.pair import PairSnapshot
from binquote.variants import ALMM, DLMM


def minimal_pair(**param_overrides):
    params = {
        "active_index": 8_388_608,
        "base_factor": 5_000,
        "decay_period": 600,
        "filter_period": 30,
        "index_reference": 8_388_608,
        "max_volatility_accumulator": 350_000,
        "reduction_factor": 5_000,
        "time_of_last_update": 1_700_000_000,
        "variable_fee_control": 0,
        "volatility_accumulator": 0,
        "volatility_reference": 0,
    }
    params.update(param_overrides)
    return {
        "params": params,
        "bins": [
            {"storage_id": 8_388_608, "reserve_x": "1000", "reserve_y": 2000},
            {
                "storage_id": 8_388_607,
                "reserve_x": 0,
                "reserve_y": "500",
                "rewarder_growth": {"contents": ["7", "8"]},
            },
        ],
        "bin_step": 20,
    }


class TestParseFixture:
    """Tests against the indexer fixture."""

    def test_parses_fixture(self, fixture_pair_dict):
        """The fixture parses with all seven bins."""
        pair = parse_pair_snapshot(fixture_pair_dict)
        assert isinstance(pair, PairSnapshot)
        assert len(pair) == 7
        assert pair.bin_step == 10
        assert pair.active_id == 8_397_927
        assert pair.parameters.time_of_last_update == 1_754_900_084
        assert pair.parameters.protocol_variable_share == 1_000

    def test_fixture_bin_values(self, fixture_pair_dict):
        """Reserves and accumulators are converted to ints."""
        active = parse_pair_snapshot(fixture_pair_dict).active_bin()
        assert active.reserve_x == 292_841
        assert active.reserve_y == 8_403_240_371
        assert active.fee_growth_x == 69939395467293378764464362697779
        assert active.price_q128 == 3775786894786258229373795633742882229168175

    def test_json_text_and_dict_agree(self, fixture_pair_dict):
        """Text and decoded input give the same snapshot."""
        from_text = parse_pair_snapshot(json.dumps(fixture_pair_dict))
        from_bytes = parse_pair_snapshot(json.dumps(fixture_pair_dict).encode())
        from_dict = parse_pair_snapshot(fixture_pair_dict)
        assert from_text.parameters == from_dict.parameters
        assert dict(from_bytes.bins) == dict(from_dict.bins)

    def test_from_json_convenience(self, fixture_pair_dict):
        """PairSnapshot.from_json delegates to the wire models."""
        pair = PairSnapshot.from_json(json.dumps(fixture_pair_dict))
        assert pair.active_id == 8_397_927


class TestFieldFormats:
    """Tests for the accepted number encodings."""

    def test_u64_as_number_or_string(self):
        """time_of_last_update may be a number or a string."""
        as_str = parse_pair_snapshot(minimal_pair(time_of_last_update="1700000000"))
        as_int = parse_pair_snapshot(minimal_pair(time_of_last_update=1_700_000_000))
        assert as_str.parameters == as_int.parameters

    def test_reserves_mixed_encodings(self):
        """Reserves accept both encodings."""
        pair = parse_pair_snapshot(minimal_pair())
        assert pair.bins[8_388_608].reserve_x == 1_000
        assert pair.bins[8_388_608].reserve_y == 2_000

    def test_extra_fields_ignored(self):
        """Unknown fields do not fail validation."""
        data = minimal_pair()
        data["bins"][0]["staked_liquidity"] = "0"
        data["bins"][0]["real_bin_id"] = 0
        data["pair_address"] = "0xabc"
        parse_pair_snapshot(data)

    def test_rewarder_growth_bare_list(self):
        """rewarder_growth also accepts a plain list."""
        data = minimal_pair()
        data["bins"][1]["rewarder_growth"] = ["7", "8"]
        model = PairSnapshotModel.model_validate(data)
        assert model.bins[1].rewarder_growth == ["7", "8"]

    def test_optional_parameter_fields_default(self):
        """protocol_share and oracle_index default to zero."""
        pair = parse_pair_snapshot(minimal_pair())
        assert pair.parameters.protocol_share == 0
        assert pair.parameters.oracle_index == 0


class TestValidationErrors:
    """Tests for rejected snapshots."""

    def test_negative_reserve(self):
        """Reserves must be unsigned."""
        data = minimal_pair()
        data["bins"][0]["reserve_x"] = "-1"
        with pytest.raises(InvalidSnapshot):
            parse_pair_snapshot(data)

    def test_reserve_over_u64(self):
        """Reserves must fit 64 bits."""
        data = minimal_pair()
        data["bins"][0]["reserve_y"] = str(2**64)
        with pytest.raises(InvalidSnapshot):
            parse_pair_snapshot(data)

    def test_non_numeric_string(self):
        """Decimal strings only."""
        data = minimal_pair()
        data["bins"][0]["reserve_y"] = "lots"
        with pytest.raises(InvalidSnapshot):
            parse_pair_snapshot(data)

    def test_missing_params(self):
        """params is required."""
        data = minimal_pair()
        del data["params"]
        with pytest.raises(InvalidSnapshot):
            parse_pair_snapshot(data)

    def test_malformed_json(self):
        """Broken JSON text is an invalid snapshot."""
        with pytest.raises(InvalidSnapshot):
            parse_pair_snapshot('{"params": ')

    def test_duplicate_storage_ids(self):
        """Two bins may not share a storage id."""
        data = minimal_pair()
        data["bins"][1]["storage_id"] = 8_388_608
        with pytest.raises(InvalidSnapshot):
            parse_pair_snapshot(data)

    def test_price_over_u256(self):
        """256-bit fields are range checked."""
        data = minimal_pair()
        data["bins"][0]["price_q128"] = str(2**256)
        with pytest.raises(InvalidSnapshot):
            parse_pair_snapshot(data)


class TestVariants:
    """Tests for variant-specific field handling."""

    def test_almm_drops_rewarder_growth(self):
        """ALMM bins carry no reward accumulators."""
        pair = parse_pair_snapshot(minimal_pair(), ALMM)
        assert pair.bins[8_388_607].rewarder_growth == ()

    def test_dlmm_keeps_rewarder_growth(self):
        """DLMM bins keep their reward accumulators."""
        pair = parse_pair_snapshot(minimal_pair(), DLMM)
        assert pair.bins[8_388_607].rewarder_growth == (7, 8)
        assert pair.variant is DLMM

    def test_dlmm_drops_protocol_variable_share(self):
        """DLMM parameters have no protocol share of the variable fee."""
        pair = parse_pair_snapshot(minimal_pair(protocol_variable_share=1_000), DLMM)
        assert pair.parameters.protocol_variable_share == 0

    def test_dlmm_base_factor_width(self):
        """DLMM base factors are 16-bit."""
        with pytest.raises(SafeCastOverflow) as exc_info:
            parse_pair_snapshot(minimal_pair(base_factor=100_000), DLMM)
        assert exc_info.value.width == 16

    def test_almm_base_factor_width(self):
        """ALMM base factors are 32-bit."""
        pair = parse_pair_snapshot(minimal_pair(base_factor=100_000), ALMM)
        assert pair.parameters.base_factor == 100_000
