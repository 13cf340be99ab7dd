"""Installment sales: configuration checks, split and due dates."""

from datetime import date
from decimal import Decimal

import pytest


@pytest.fixture
def sell(ledger, make_product, make_customer):
    """Sell `quantity` of a 100.00 product on installments with the given config."""
    customer = make_customer()
    product = make_product("Watch", on_hand=50, price="100.00")

    def _sell(installments, quantity=1):
        request = {
            "customer_id": customer.id,
            "items": [{"product_id": product.id, "quantity": quantity}],
            "payment_mode": "installment",
        }
        if installments is not None:
            request["installments"] = installments
        return ledger.register_sale(request)

    _sell.product = product
    _sell.customer = customer
    return _sell


class TestInstallmentConfig:
    def test_missing_config(self, sell, ledger):
        result = sell(None)
        assert result.kind == "MissingInstallmentConfigError"
        assert ledger.get_product_stock(sell.product.id) == 50

    @pytest.mark.parametrize("count", [0, 2, 5, 12, "3", 3.0, None])
    def test_count_outside_allowed_set(self, sell, count):
        assert sell({"count": count, "due_day": 10}).kind == "InvalidInstallmentCountError"

    def test_down_payment_exceeds_total(self, sell, ledger):
        result = sell({"count": 3, "down_payment": "100.01", "due_day": 10})
        assert result.kind == "DownPaymentExceedsTotalError"
        assert ledger.sales == []

    def test_negative_down_payment(self, sell):
        assert sell({"count": 3, "down_payment": -5, "due_day": 10}).kind == "InvalidAmountError"

    def test_non_numeric_down_payment(self, sell):
        assert sell({"count": 3, "down_payment": "lots", "due_day": 10}).kind == "InvalidAmountError"

    def test_down_payment_equal_to_total_creates_no_receivables(self, sell, ledger, repository):
        result = sell({"count": 4, "down_payment": "100.00", "due_day": 10})
        assert result.ok, result.error
        assert result.value.sale.down_payment == Decimal("100.00")
        assert result.value.receivables == ()
        assert ledger.receivables == []
        assert "create_receivables" not in repository.names()

    def test_single_installment_requires_due_date(self, sell):
        assert sell({"count": 1}).kind == "MissingDueDateError"
        assert sell({"count": 1, "due_date": "  "}).kind == "MissingDueDateError"

    def test_single_installment_rejects_bad_date(self, sell):
        assert sell({"count": 1, "due_date": "2026-02-30"}).kind == "InvalidDateError"

    @pytest.mark.parametrize("due_day", [None, 0, 32, "10", 10.5])
    def test_multi_installment_requires_valid_due_day(self, sell, due_day):
        assert sell({"count": 3, "due_day": due_day}).kind == "InvalidDueDayError"


class TestSchedule:
    def test_single_installment_uses_given_date(self, sell):
        result = sell({"count": 1, "down_payment": "25.00", "due_date": "2026-04-02"})
        [receivable] = result.value.receivables
        assert receivable.due_date == date(2026, 4, 2)
        assert receivable.amount == Decimal("75.00")
        assert receivable.description == "Sale (Watch) (1/1)"
        assert receivable.customer_id == sell.customer.id
        assert receivable.status == "pending"

    def test_multi_installment_monthly_from_next_month(self, sell):
        result = sell({"count": 3, "due_day": 10})
        assert [r.due_date for r in result.value.receivables] == [
            date(2026, 4, 10),
            date(2026, 5, 10),
            date(2026, 6, 10),
        ]
        assert [r.description for r in result.value.receivables] == [
            "Sale (Watch) (1/3)",
            "Sale (Watch) (2/3)",
            "Sale (Watch) (3/3)",
        ]

    def test_due_day_is_clamped_per_month(self, sell):
        result = sell({"count": 6, "due_day": 31})
        assert [r.due_date for r in result.value.receivables] == [
            date(2026, 4, 30),
            date(2026, 5, 31),
            date(2026, 6, 30),
            date(2026, 7, 31),
            date(2026, 8, 31),
            date(2026, 9, 30),
        ]

    def test_split_after_down_payment(self, sell):
        result = sell({"count": 3, "down_payment": "0.01", "due_day": 5}, quantity=1)
        amounts = [r.amount for r in result.value.receivables]
        assert amounts == [Decimal("33.33"), Decimal("33.33"), Decimal("33.33")]
        assert sum(amounts) == Decimal("99.99")

    def test_remainder_goes_to_first_installments(self, sell):
        result = sell({"count": 6, "due_day": 5}, quantity=1)
        amounts = [r.amount for r in result.value.receivables]
        assert amounts == [Decimal("16.67")] * 4 + [Decimal("16.66")] * 2
        assert sum(amounts) == Decimal("100.00")

    def test_receivables_persisted_in_one_batch(self, sell, repository):
        repository.calls.clear()
        result = sell({"count": 4, "due_day": 15})
        assert repository.names()[-1] == "create_receivables"
        (batch,) = repository.last("create_receivables")
        assert list(batch) == list(result.value.receivables)
        assert len(batch) == 4
