"""Money helpers: rounding and the exact-cents installment split."""

from decimal import Decimal

import pytest

from storeledger.money import format_money, round_money, split_installments, to_cents, to_decimal


class TestRounding:
    def test_half_up_to_the_cent(self):
        assert round_money("2.675") == Decimal("2.68")
        assert round_money("2.665") == Decimal("2.67")
        assert round_money(350 * 3) == Decimal("1050.00")

    def test_floats_go_through_str(self):
        assert to_decimal(0.1) == Decimal("0.1")
        assert round_money(0.1 + 0.2) == Decimal("0.30")

    @pytest.mark.parametrize("value", [None, True, "abc", "nan", "inf"])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(ValueError):
            to_decimal(value)

    def test_format_money(self):
        assert format_money(Decimal("5")) == "5.00"
        assert format_money("1983.335") == "1983.34"


class TestSplitInstallments:
    def test_remainder_cents_are_front_loaded(self):
        parts = split_installments(Decimal("5950.00"), 3)
        assert parts == [Decimal("1983.34"), Decimal("1983.33"), Decimal("1983.33")]

    def test_sum_is_exact(self):
        for amount in ("100.00", "0.05", "999.99", "1234.57"):
            for count in (1, 3, 4, 6):
                parts = split_installments(Decimal(amount), count)
                assert sum(parts) == Decimal(amount)
                cents = to_cents(amount)
                extra = cents % count
                assert all(p == parts[0] for p in parts[:extra])
                assert all(p == parts[-1] for p in parts[extra:])
                if extra:
                    assert parts[0] - parts[-1] == Decimal("0.01")

    def test_rejects_zero_count(self):
        with pytest.raises(ValueError):
            split_installments(Decimal("10.00"), 0)
