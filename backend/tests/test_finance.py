"""Stock entries, receivable/payable status transitions and manual payables."""

from datetime import date
from decimal import Decimal

from conftest import FIXED_NOW
from storeledger.services.finance_service import effective_status, summarize


class TestStockEntry:
    def test_entry_increments_stock_and_creates_payable(self, ledger, make_product, repository):
        product = make_product("Shampoo", on_hand=4)
        repository.calls.clear()

        result = ledger.add_stock_entry(product.id, 6, " Acme Ltd ", "2.505")

        assert result.ok, result.error
        move, payable = result.value
        assert ledger.get_product_stock(product.id) == 10
        assert (move.direction, move.quantity, move.origin) == ("in", 6, "Purchase from Acme Ltd")
        assert payable.supplier == "Acme Ltd"
        assert payable.description == "Stock replenishment (6 items)"
        assert payable.amount == Decimal("15.03")
        assert payable.due_date == date(2026, 4, 14)
        assert payable.status == "pending"
        assert repository.names() == ["update_stock", "create_stock_moves", "create_payable"]

    def test_term_days_is_configurable(self, repository):
        from storeledger.services.ledger_store import LedgerStore

        store = LedgerStore(repository, clock=lambda: FIXED_NOW, payable_term_days=15)
        store.load()
        store.add_product({"name": "A", "category": "C", "brand": "B", "sale_price": 1})
        product = store.products[0]
        _, payable = store.add_stock_entry(product.id, 1, "Acme", 1).value
        assert payable.due_date == date(2026, 3, 30)

    def test_non_positive_quantity_is_a_no_op(self, ledger, make_product, repository):
        product = make_product("Shampoo", on_hand=4)
        repository.calls.clear()

        for quantity in (0, -3):
            result = ledger.add_stock_entry(product.id, quantity, "Acme", "1.00")
            assert result.ok
            assert result.value is None

        assert ledger.get_product_stock(product.id) == 4
        assert ledger.payables == []
        assert repository.calls == []

    def test_rejections(self, ledger, make_product, make_kit):
        product = make_product("A", on_hand=1)
        kit = make_kit("K", [(product, 1)])

        assert ledger.add_stock_entry("missing", 1, "Acme", 1).kind == "NotFoundError"
        assert ledger.add_stock_entry(kit.id, 1, "Acme", 1).kind == "InvalidComponentError"
        assert ledger.add_stock_entry(product.id, 1, "  ", 1).kind == "ValidationError"
        assert ledger.add_stock_entry(product.id, 1, "Acme", -1).kind == "InvalidAmountError"
        assert ledger.add_stock_entry(product.id, "many", "Acme", 1).kind == "ValidationError"
        assert ledger.get_product_stock(product.id) == 1
        assert ledger.payables == []


def _installment_receivable(ledger, make_product, make_customer):
    customer = make_customer()
    product = make_product("Watch", on_hand=5, price="90.00")
    receipt = ledger.register_sale({
        "customer_id": customer.id,
        "items": [{"product_id": product.id, "quantity": 1}],
        "payment_mode": "installment",
        "installments": {"count": 3, "due_day": 1},
    }).value
    return receipt.receivables[0]


class TestReceivables:
    def test_mark_paid(self, ledger, make_product, make_customer, repository):
        receivable = _installment_receivable(ledger, make_product, make_customer)

        result = ledger.mark_receivable_paid(receivable.id)

        assert result.ok
        assert result.value.status == "paid"
        assert result.value.paid_at == FIXED_NOW
        assert repository.last("update_receivable") == (result.value,)

    def test_mark_paid_twice_keeps_first_stamp(self, ledger, make_product, make_customer, repository):
        receivable = _installment_receivable(ledger, make_product, make_customer)
        ledger.mark_receivable_paid(receivable.id)
        writes = repository.names().count("update_receivable")

        again = ledger.mark_receivable_paid(receivable.id)

        assert again.ok
        assert again.value.paid_at == FIXED_NOW
        assert repository.names().count("update_receivable") == writes

    def test_unknown_ids(self, ledger):
        assert ledger.mark_receivable_paid("nope").kind == "NotFoundError"
        assert ledger.remove_receivable("nope").kind == "NotFoundError"

    def test_remove(self, ledger, make_product, make_customer):
        receivable = _installment_receivable(ledger, make_product, make_customer)
        assert ledger.remove_receivable(receivable.id).ok
        assert receivable.id not in [r.id for r in ledger.receivables]


class TestPayables:
    def test_manual_payable_label(self, ledger):
        result = ledger.add_manual_payable(
            kind="tax", reference="ISS 03/2026", description="Municipal tax", amount="120.5", due_date="2026-04-10"
        )
        assert result.ok, result.error
        payable = result.value
        assert payable.supplier == "Tax - ISS 03/2026"
        assert payable.amount == Decimal("120.50")
        assert payable.due_date == date(2026, 4, 10)

    def test_manual_payable_without_reference(self, ledger):
        payable = ledger.add_manual_payable(
            kind="fixed", reference="", description="Rent", amount=900, due_date="2026-04-05"
        ).value
        assert payable.supplier == "Fixed expense"

    def test_manual_payable_validation(self, ledger):
        base = dict(kind="bill", reference="", description="Power", amount=10, due_date="2026-04-05")
        assert ledger.add_manual_payable(**{**base, "kind": "loan"}).kind == "ValidationError"
        assert ledger.add_manual_payable(**{**base, "description": ""}).kind == "ValidationError"
        assert ledger.add_manual_payable(**{**base, "amount": 0}).kind == "InvalidAmountError"
        assert ledger.add_manual_payable(**{**base, "due_date": "tomorrow"}).kind == "InvalidDateError"
        assert ledger.add_manual_payable(**{**base, "amount": "0.001"}).kind == "InvalidAmountError"
        assert ledger.add_manual_payable(**{**base, "kind": ["bill"]}).kind == "ValidationError"
        assert ledger.payables == []

    def test_update_payable(self, ledger):
        payable = ledger.add_manual_payable(
            kind="bill", reference="", description="Power", amount=10, due_date="2026-04-05"
        ).value

        result = ledger.update_payable(
            payable.id, supplier="", description="Power (March)", amount="12.40", due_date="2026-04-06"
        )

        assert result.ok, result.error
        assert result.value.supplier == "Bill"
        assert result.value.description == "Power (March)"
        assert result.value.amount == Decimal("12.40")
        assert result.value.due_date == date(2026, 4, 6)

    def test_paid_payable_cannot_be_edited(self, ledger):
        payable = ledger.add_manual_payable(
            kind="bill", reference="", description="Power", amount=10, due_date="2026-04-05"
        ).value
        assert ledger.mark_payable_paid(payable.id).ok

        result = ledger.update_payable(
            payable.id, supplier="X", description="Y", amount=1, due_date="2026-04-06"
        )

        assert result.kind == "AlreadyPaidError"
        assert ledger.payables[0].description == "Power"

    def test_update_rejects_amount_below_one_cent(self, ledger):
        payable = ledger.add_manual_payable(
            kind="bill", reference="", description="Power", amount=10, due_date="2026-04-05"
        ).value
        result = ledger.update_payable(
            payable.id, supplier="", description="Power", amount="0.004", due_date="2026-04-05"
        )
        assert result.kind == "InvalidAmountError"
        assert ledger.payables[0].amount == Decimal("10.00")

    def test_unknown_ids(self, ledger):
        assert ledger.mark_payable_paid("nope").kind == "NotFoundError"
        assert ledger.remove_payable("nope").kind == "NotFoundError"
        assert ledger.update_payable(
            "nope", supplier="", description="d", amount=1, due_date="2026-01-01"
        ).kind == "NotFoundError"


class TestOverdueProjection:
    def test_effective_status_and_summary(self, ledger):
        early = ledger.add_manual_payable(
            kind="bill", reference="", description="Old", amount=10, due_date="2026-03-01"
        ).value
        ledger.add_manual_payable(kind="bill", reference="", description="New", amount=5, due_date="2026-04-01")
        paid = ledger.add_manual_payable(
            kind="bill", reference="", description="Done", amount=7, due_date="2026-02-01"
        ).value
        ledger.mark_payable_paid(paid.id)

        today = FIXED_NOW.date()
        assert effective_status(early, today) == "overdue"
        assert early.status == "pending"
        assert effective_status(paid, today) == "paid"

        totals = summarize(ledger.receivables, ledger.payables, today)
        assert totals["payable_open"] == Decimal("15.00")
        assert totals["payable_overdue"] == Decimal("10.00")
        assert totals["receivable_open"] == Decimal("0.00")
