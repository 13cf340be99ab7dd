"""Sale registration: validation order, stock deduction, stock moves."""

from decimal import Decimal

import pytest

from conftest import FIXED_NOW


def _cash(customer, *items):
    return {
        "customer_id": customer.id,
        "items": [{"product_id": p.id, "quantity": q} for p, q in items],
        "payment_mode": "cash",
    }


class TestCashSale:
    def test_cash_sale_effects(self, ledger, make_product, make_customer, repository):
        customer = make_customer()
        product = make_product("Perfume", on_hand=20, price="350.00")
        repository.calls.clear()

        result = ledger.register_sale(_cash(customer, (product, 3)))

        assert result.ok, result.error
        receipt = result.value
        assert receipt.sale.total == Decimal("1050.00")
        assert receipt.sale.down_payment == Decimal("0.00")
        assert receipt.sale.created_at == FIXED_NOW
        assert ledger.get_product_stock(product.id) == 17
        assert len(ledger.sales) == 1
        assert receipt.receivables == ()
        assert ledger.receivables == []

        [move] = ledger.stock_moves
        assert (move.product_id, move.direction, move.quantity, move.origin) == (product.id, "out", 3, "Sale")

        assert repository.names() == ["update_stock", "create_stock_moves", "create_sale"]
        assert repository.last("update_stock") == (product.id, 17)

    def test_unit_price_is_frozen_on_the_line(self, ledger, make_product, make_customer):
        customer = make_customer()
        product = make_product("Soap", on_hand=5, price="2.50")
        receipt = ledger.register_sale(_cash(customer, (product, 2))).value
        [line] = receipt.sale.lines
        assert line.unit_price == Decimal("2.50")
        assert line.line_total == Decimal("5.00")

    def test_total_rounds_to_cents(self, ledger, make_product, make_customer):
        customer = make_customer()
        product = make_product("Gum", on_hand=10, price="0.335")
        receipt = ledger.register_sale(_cash(customer, (product, 3))).value
        assert receipt.sale.total == Decimal("1.02")

    def test_duplicate_lines_are_coalesced(self, ledger, make_product, make_customer):
        customer = make_customer()
        product = make_product("Soap", on_hand=5, price="1.00")
        request = _cash(customer, (product, 2), (product, 1))

        receipt = ledger.register_sale(request).value

        assert [(l.product_id, l.quantity) for l in receipt.sale.lines] == [(product.id, 3)]
        assert ledger.get_product_stock(product.id) == 2

    def test_can_sell_exact_stock(self, ledger, make_product, make_customer):
        customer = make_customer()
        product = make_product("Last one", on_hand=1)
        assert ledger.register_sale(_cash(customer, (product, 1))).ok
        assert ledger.get_product_stock(product.id) == 0


class TestRejectedSale:
    def test_insufficient_stock_changes_nothing(self, ledger, make_product, make_customer, repository):
        customer = make_customer()
        a = make_product("A", on_hand=5)
        b = make_product("B", on_hand=1)
        repository.calls.clear()

        result = ledger.register_sale(_cash(customer, (a, 2), (b, 2)))

        assert not result.ok
        assert result.kind == "InsufficientStockError"
        assert "B" in result.error
        assert result.details["product_id"] == b.id
        assert ledger.get_product_stock(a.id) == 5
        assert ledger.get_product_stock(b.id) == 1
        assert ledger.sales == []
        assert ledger.stock_moves == []
        assert repository.calls == []

    def test_empty_order(self, ledger, make_customer):
        customer = make_customer()
        result = ledger.register_sale({"customer_id": customer.id, "items": []})
        assert result.kind == "EmptyOrderError"

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, "2", None, True])
    def test_invalid_quantity(self, ledger, make_product, make_customer, quantity):
        customer = make_customer()
        product = make_product("A", on_hand=5)
        result = ledger.register_sale({
            "customer_id": customer.id,
            "items": [{"product_id": product.id, "quantity": quantity}],
        })
        assert result.kind == "InvalidQuantityError"

    def test_unknown_product(self, ledger, make_customer):
        customer = make_customer()
        result = ledger.register_sale({
            "customer_id": customer.id,
            "items": [{"product_id": "nope", "quantity": 1}],
        })
        assert result.kind == "UnknownProductError"

    def test_quantity_is_checked_before_product_existence(self, ledger, make_customer):
        customer = make_customer()
        result = ledger.register_sale({
            "customer_id": customer.id,
            "items": [{"product_id": "nope", "quantity": 0}],
        })
        assert result.kind == "InvalidQuantityError"

    def test_malformed_product_id_is_rejected_as_unknown(self, ledger, make_customer):
        customer = make_customer()
        for product_id in (["x"], {"id": "x"}, None, 7):
            result = ledger.register_sale({
                "customer_id": customer.id,
                "items": [{"product_id": product_id, "quantity": 1}],
            })
            assert result.kind == "UnknownProductError", product_id
        assert ledger.sales == []

    def test_malformed_id_still_reports_bad_quantity_first(self, ledger, make_customer):
        customer = make_customer()
        result = ledger.register_sale({
            "customer_id": customer.id,
            "items": [{"product_id": ["x"], "quantity": 1}, {"product_id": "a", "quantity": 0}],
        })
        assert result.kind == "InvalidQuantityError"

    @pytest.mark.parametrize("request_body", [["not", "an", "object"], "sale", None])
    def test_request_must_be_an_object(self, ledger, request_body):
        result = ledger.register_sale(request_body)
        assert result.kind == "ValidationError"

    def test_items_and_installments_must_be_well_shaped(self, ledger, make_product, make_customer):
        customer = make_customer()
        product = make_product("A", on_hand=5)
        assert ledger.register_sale({"customer_id": customer.id, "items": 5}).kind == "ValidationError"
        result = ledger.register_sale({
            "customer_id": customer.id,
            "items": [{"product_id": product.id, "quantity": 1}],
            "payment_mode": "installment",
            "installments": [3],
        })
        assert result.kind == "ValidationError"
        assert ledger.get_product_stock(product.id) == 5

    def test_unknown_payment_mode(self, ledger, make_product, make_customer):
        customer = make_customer()
        product = make_product("A", on_hand=5)
        request = _cash(customer, (product, 1))
        request["payment_mode"] = "barter"
        result = ledger.register_sale(request)
        assert result.kind == "ValidationError"
        assert ledger.get_product_stock(product.id) == 5


class TestKitSale:
    def test_kit_sale_deducts_components_and_logs_one_move_each(self, ledger, make_product, make_kit, make_customer):
        customer = make_customer()
        a = make_product("A", on_hand=10)
        b = make_product("B", on_hand=3)
        kit = make_kit("Box", [(a, 2), (b, 1)], price="40.00")

        result = ledger.register_sale(_cash(customer, (kit, 2)))

        assert result.ok, result.error
        assert ledger.get_product_stock(a.id) == 6
        assert ledger.get_product_stock(b.id) == 1
        assert ledger.get_product_stock(kit.id) == 1
        assert result.value.sale.total == Decimal("80.00")

        moves = {(m.product_id, m.quantity, m.origin) for m in ledger.stock_moves}
        assert moves == {(a.id, 4, "Sale of kit Box"), (b.id, 2, "Sale of kit Box")}

    def test_kit_and_component_in_same_sale_share_stock(self, ledger, make_product, make_kit, make_customer):
        customer = make_customer()
        a = make_product("A", on_hand=5)
        kit = make_kit("Pair", [(a, 2)])

        result = ledger.register_sale(_cash(customer, (kit, 2), (a, 2)))

        assert result.kind == "InsufficientStockError"
        assert ledger.get_product_stock(a.id) == 5

    def test_kit_with_deleted_component_cannot_be_sold(self, ledger, make_product, make_kit, make_customer):
        customer = make_customer()
        a = make_product("A", on_hand=5)
        kit = make_kit("Solo", [(a, 1)])
        ledger.remove_product(a.id)

        result = ledger.register_sale(_cash(customer, (kit, 1)))

        assert result.kind == "InvalidComponentError"
        assert ledger.sales == []


def test_scenario_cash_then_installments(ledger, make_product, make_customer):
    customer = make_customer()
    product = make_product("Perfume", on_hand=20, price="350.00")

    cash = ledger.register_sale(_cash(customer, (product, 3)))
    assert cash.value.sale.total == Decimal("1050.00")
    assert ledger.get_product_stock(product.id) == 17

    credit = ledger.register_sale({
        "customer_id": customer.id,
        "items": [{"product_id": product.id, "quantity": 17}],
        "payment_mode": "installment",
        "installments": {"count": 3, "down_payment": 0, "due_day": 10},
    })

    assert credit.ok, credit.error
    receivables = credit.value.receivables
    assert credit.value.sale.total == Decimal("5950.00")
    assert [r.amount for r in receivables] == [Decimal("1983.34"), Decimal("1983.33"), Decimal("1983.33")]
    assert sum(r.amount for r in receivables) == Decimal("5950.00")
    assert ledger.get_product_stock(product.id) == 0
    assert len(ledger.sales) == 2
