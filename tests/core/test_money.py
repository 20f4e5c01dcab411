from decimal import Decimal

import pytest

from school_office.shared.utils.money import MAX_AMOUNT, ZERO, round_money, sum_money, to_money


class TestRoundMoney:
    """Tests for round_money function."""

    def test_round_half_up(self):
        assert round_money(10.125) == Decimal("10.13")
        assert round_money(10.124) == Decimal("10.12")
        assert round_money(10.145) == Decimal("10.15")

    def test_from_decimal(self):
        assert round_money(Decimal("10.125")) == Decimal("10.13")
        assert round_money(Decimal("99.999")) == Decimal("100.00")

    def test_from_string(self):
        assert round_money("15000") == Decimal("15000.00")
        assert round_money("0.001") == Decimal("0.00")

    def test_from_int(self):
        assert round_money(100) == Decimal("100.00")
        assert round_money(0) == ZERO

    def test_negative_numbers(self):
        """Negative halves round toward zero."""
        assert round_money(-10.125) == Decimal("-10.12")
        assert round_money(-10.126) == Decimal("-10.13")

    def test_precision(self):
        """Result always has 2 decimal places."""
        assert str(round_money(10)) == "10.00"
        assert str(round_money(10.1)) == "10.10"


class TestSumMoney:
    def test_sums_mixed_inputs(self):
        assert sum_money([Decimal("12000"), 1500, "1500.50"]) == Decimal("15000.50")

    def test_empty(self):
        assert sum_money([]) == ZERO

    def test_float_inputs_do_not_drift(self):
        assert sum_money([0.1, 0.2]) == Decimal("0.30")


class TestToMoney:
    def test_rounds_like_round_money(self):
        assert to_money("10.125") == Decimal("10.13")
        assert to_money(-5) == Decimal("-5.00")

    def test_accepts_max_amount(self):
        assert to_money(MAX_AMOUNT) == MAX_AMOUNT
        assert to_money(-MAX_AMOUNT) == -MAX_AMOUNT

    @pytest.mark.parametrize(
        "value", ["1e26", "1e30", Decimal("10000000000000"), float("nan"), "-Infinity", "abc"]
    )
    def test_rejects_unrepresentable_amounts(self, value):
        with pytest.raises(ValueError):
            to_money(value)
