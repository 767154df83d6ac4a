"""Tests for fee amount formulas."""

import pytest

from binquote.constants import MAX_FEE
from binquote.errors import FeeTooLarge
from binquote.fees import fee_from_gross, fee_to_reach_net, verify_fee


class TestVerifyFee:
    """Tests for the fee ceiling."""

    def test_max_fee_accepted(self):
        """Exactly 10% is allowed."""
        verify_fee(MAX_FEE)

    def test_above_max_rejected(self):
        """Anything above 10% is rejected."""
        with pytest.raises(FeeTooLarge):
            verify_fee(MAX_FEE + 1)


class TestFeeFromGross:
    """Tests for the fee contained in a fee-inclusive amount."""

    def test_exact(self):
        """0.01% of 500,000 is 50."""
        assert fee_from_gross(500_000, 100_000) == 50

    def test_rounds_up(self):
        """A fractional fee rounds up to the next unit."""
        assert fee_from_gross(10, 100_000) == 1
        assert fee_from_gross(1, 1) == 1

    def test_zero_amount(self):
        """No amount, no fee."""
        assert fee_from_gross(0, 100_000) == 0

    def test_zero_fee(self):
        """A zero rate charges nothing."""
        assert fee_from_gross(10**18, 0) == 0

    def test_rejects_large_fee(self):
        """The fee ceiling is enforced."""
        with pytest.raises(FeeTooLarge):
            fee_from_gross(1000, MAX_FEE + 1)


class TestFeeToReachNet:
    """Tests for the fee to add on top of a net amount."""

    def test_basic(self):
        """ceil(1e6 * 1e5 / (1e9 - 1e5)) == 101."""
        assert fee_to_reach_net(1_000_000, 100_000) == 101

    def test_max_fee(self):
        """At 10% the fee on 9 units is exactly 1."""
        assert fee_to_reach_net(9, MAX_FEE) == 1

    def test_zero(self):
        """Zero amount or zero rate charges nothing."""
        assert fee_to_reach_net(0, 100_000) == 0
        assert fee_to_reach_net(1_000_000, 0) == 0

    def test_rejects_large_fee(self):
        """The fee ceiling is enforced."""
        with pytest.raises(FeeTooLarge):
            fee_to_reach_net(1000, MAX_FEE + 1)

    @pytest.mark.parametrize("amount", [1, 999, 1_000_000, 123_456_789_012])
    @pytest.mark.parametrize("total_fee", [1, 100_000, 9_000_000, MAX_FEE])
    def test_consistent_with_fee_from_gross(self, amount, total_fee):
        """Charging net + fee_to_reach_net back through fee_from_gross leaves at least net."""
        fee = fee_to_reach_net(amount, total_fee)
        gross = amount + fee
        assert gross - fee_from_gross(gross, total_fee) >= amount - 1
        assert fee_to_reach_net(amount - fee_from_gross(amount, total_fee), total_fee) <= fee_from_gross(
            amount, total_fee
        )
