"""Tests for the host-facing quote functions."""

import json

from binquote import quoter
from binquote.math import ONE
from binquote.quoter import QuoteError, QuoteResult
from binquote.swap import SwapInResult, SwapOutResult
from binquote.variants import DLMM
from tests.helpers import ACTIVE_ID, make_snapshot

NOW_MS = (1_700_000_000 + 10) * 1000


class TestQuoteResult:
    """Tests for the result wrapper."""

    def test_success(self):
        """A success has a value and no error."""
        result = QuoteResult.success(5)
        assert result.is_valid
        assert not result.is_error
        assert result.value == 5

    def test_error(self):
        """An error has no value."""
        result = QuoteResult.with_error(QuoteError.LOG_UNDERFLOW, "log2(0)")
        assert result.is_error
        assert result.value is None
        assert result.error_detail == "log2(0)"


class TestLadderFunctions:
    """Tests for the price ladder functions."""

    def test_storage_id_from_real_id(self):
        """Successful mapping."""
        assert quoter.storage_id_from_real_id(1).value == 8_388_609

    def test_real_id_from_storage_id_out_of_range(self):
        """Failures become error results."""
        result = quoter.real_id_from_storage_id(1 << 24)
        assert result.error is QuoteError.STORAGE_ID_OUT_OF_RANGE
        assert result.error_detail

    def test_price_as_decimal_string(self):
        """Prices cross the boundary as strings."""
        result = quoter.price_from_storage_id(8_391_240, 50)
        assert result.value == "170967668064246121537697181132590453180080978"
        assert quoter.price_from_real_id(0, 10).value == str(ONE)

    def test_real_id_from_price(self):
        """Prices are accepted as strings."""
        assert quoter.real_id_from_price(str(ONE), 10).value == 0

    def test_real_id_from_price_zero(self):
        """log2(0) is reported as an error."""
        assert quoter.real_id_from_price("0", 10).error is QuoteError.LOG_UNDERFLOW

    def test_real_id_from_price_garbage(self):
        """Non-numeric prices are invalid input."""
        assert quoter.real_id_from_price("abc", 10).error is QuoteError.INVALID_INPUT
        assert quoter.real_id_from_price("-5", 10).error is QuoteError.INVALID_INPUT

    def test_real_id_from_price_zero_step(self):
        """A zero bin step is reported, not raised."""
        assert quoter.real_id_from_price(str(ONE), 0).error is QuoteError.INVALID_BIN_STEP


class TestComputeSwap:
    """Tests for the swap quote functions."""

    def test_exact_in_snapshot(self):
        """Quoting a PairSnapshot; the timestamp is converted from ms."""
        pair = make_snapshot({ACTIVE_ID: (0, 1_000_000)})
        result = quoter.compute_swap_exact_in(pair, 500_000, True, NOW_MS)
        assert result.is_valid
        assert result.value == SwapOutResult(0, 499_950, 50, 1)

    def test_exact_out_snapshot(self):
        """Exact-out values are SwapInResult."""
        pair = make_snapshot({ACTIVE_ID: (0, 1_000_000)})
        result = quoter.compute_swap_exact_out(pair, 500_000, True, NOW_MS)
        assert result.value == SwapInResult(500_050, 0, 50, 1)

    def test_exact_in_json(self, fixture_pair_dict, fixture_timestamp):
        """Raw JSON text and dicts are parsed first."""
        from_text = quoter.compute_swap_exact_in(
            json.dumps(fixture_pair_dict), 1_000, True, fixture_timestamp * 1000
        )
        from_dict = quoter.compute_swap_exact_in(fixture_pair_dict, 1_000, True, fixture_timestamp * 1000)
        assert from_text.is_valid
        assert from_text.value == from_dict.value

    def test_millisecond_truncation(self):
        """Sub-second parts of the timestamp are dropped."""
        pair = make_snapshot({ACTIVE_ID: (0, 1_000)}, time_of_last_update=1_700_000_000)
        result = quoter.compute_swap_exact_in(pair, 10, True, 1_700_000_000_999)
        assert result.is_valid

    def test_timestamp_regression(self):
        """A timestamp before the last update is an error result."""
        pair = make_snapshot({ACTIVE_ID: (0, 1_000)}, time_of_last_update=1_700_000_000)
        result = quoter.compute_swap_exact_in(pair, 10, True, 1_699_999_999_999)
        assert result.error is QuoteError.TIMESTAMP_REGRESSION

    def test_missing_active_bin(self):
        """A snapshot without its active bin is an error result."""
        pair = make_snapshot({ACTIVE_ID - 1: (0, 1_000)})
        result = quoter.compute_swap_exact_out(pair, 10, True, NOW_MS)
        assert result.error is QuoteError.MISSING_ACTIVE_BIN

    def test_amount_over_u64(self):
        """Amounts must fit u64."""
        pair = make_snapshot({ACTIVE_ID: (0, 1_000)})
        result = quoter.compute_swap_exact_in(pair, 2**64, True, NOW_MS)
        assert result.error is QuoteError.SAFE_CAST_OVERFLOW

    def test_invalid_snapshot(self):
        """Bad snapshot data is an error result."""
        result = quoter.compute_swap_exact_in({"bins": []}, 10, True, NOW_MS)
        assert result.error is QuoteError.INVALID_SNAPSHOT

    def test_variant_by_name(self, fixture_pair_dict, fixture_timestamp):
        """Variants can be named; DLMM rejects the fixture's 17-bit base factor."""
        result = quoter.compute_swap_exact_in(
            fixture_pair_dict, 1_000, True, fixture_timestamp * 1000, variant="dlmm"
        )
        assert result.error is QuoteError.SAFE_CAST_OVERFLOW

    def test_unknown_variant(self, fixture_pair_dict, fixture_timestamp):
        """Unknown variant names are error results."""
        result = quoter.compute_swap_exact_in(
            fixture_pair_dict, 1_000, True, fixture_timestamp * 1000, variant="nope"
        )
        assert result.error is QuoteError.UNKNOWN_VARIANT

    def test_dlmm_snapshot(self):
        """A DLMM snapshot quotes with the shared math."""
        pair = make_snapshot({ACTIVE_ID: (0, 1_000_000)}, variant=DLMM)
        result = quoter.compute_swap_exact_in(pair, 500_000, True, NOW_MS, variant=DLMM)
        assert result.value.amount_out == 499_950


class TestQuoteErrorMapping:
    """Every engine error code has a QuoteError."""

    def test_all_codes_mapped(self):
        """No engine error falls back to the generic code."""
        import binquote.errors as errors

        for name in errors.__all__:
            error_cls = getattr(errors, name)
            assert QuoteError(error_cls.code).value == error_cls.code
