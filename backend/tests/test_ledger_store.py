"""LedgerStore plumbing: Result shape, subscribers, persistence failures, reload."""

import logging

import pytest

from conftest import FIXED_NOW, RecordingRepository
from storeledger.entities import Product
from storeledger.services.ledger_store import LedgerStore


def test_failed_result_shape(ledger):
    result = ledger.add_category("")
    assert not result
    assert result.to_dict() == {"error": "Enter the category name.", "kind": "ValidationError"}


def test_successful_result_serializes_value(ledger):
    result = ledger.add_customer(name="Ana")
    body = result.to_dict()
    assert body["ok"] is True
    assert body["value"]["name"] == "Ana"
    assert body["value"]["created_at"] == "2026-03-15T10:30:00Z"


def test_subscribers_hear_successful_mutations_only(ledger):
    heard = []
    unsubscribe = ledger.subscribe(heard.append)

    ledger.add_brand("Natura")
    ledger.add_brand("natura")
    unsubscribe()
    ledger.add_brand("Other")

    assert heard == ["add_brand"]


def test_rejections_are_logged_at_info(ledger, caplog):
    with caplog.at_level(logging.INFO, logger="storeledger.services.ledger_store"):
        ledger.remove_product("missing")
    assert "remove_product rejected (NotFoundError)" in caplog.text


def test_persistence_failure_propagates_and_reload_recovers(caplog):
    repository = RecordingRepository(fail_on={"create_customer"})
    store = LedgerStore(repository, clock=lambda: FIXED_NOW)
    store.load()

    with caplog.at_level(logging.ERROR):
        with pytest.raises(RuntimeError):
            store.add_customer(name="Ana")
    assert "add_customer failed" in caplog.text
    assert repository.rollbacks == 1
    assert repository.commits == 0

    # In-memory state ran ahead of the failed write
    assert len(store.customers) == 1

    store.reload()
    assert store.customers == []


def test_one_commit_per_successful_call(ledger, repository, make_product, make_customer):
    product = make_product("Soap", on_hand=5)
    customer = make_customer()
    repository.commits = 0

    ledger.register_sale({
        "customer_id": customer.id,
        "items": [{"product_id": product.id, "quantity": 2}],
        "payment_mode": "installment",
        "installments": {"count": 3, "due_day": 5},
    })
    assert repository.names()[-4:] == ["update_stock", "create_stock_moves", "create_sale", "create_receivables"]
    assert repository.commits == 1

    ledger.add_category("")
    assert repository.commits == 1
    assert repository.rollbacks == 0


def test_failed_commit_rolls_back_and_propagates():
    repository = RecordingRepository(fail_on={"commit"})
    store = LedgerStore(repository, clock=lambda: FIXED_NOW)
    store.load()

    with pytest.raises(RuntimeError):
        store.add_brand("House")
    assert repository.rollbacks == 1


def test_load_reads_every_collection():
    product = Product("p1", "Soap", "simple", "C", "B", 3, 0, 1)
    repository = RecordingRepository(initial={"products": [product], "categories": ["C"], "brands": ["B"]})
    store = LedgerStore(repository)
    heard = []
    store.subscribe(heard.append)

    store.load()

    assert store.products == [product]
    assert store.categories == ["C"]
    assert store.brands == ["B"]
    assert store.get_product_stock("p1") == 3
    assert heard == ["load"]


def test_ensure_loaded_is_lazy_and_once():
    repository = RecordingRepository(initial={"categories": ["C"]})
    store = LedgerStore(repository)
    assert store.categories == []
    store.ensure_loaded()
    store.add_category("D")
    store.ensure_loaded()
    assert store.categories == ["D", "C"]


def test_read_side_returns_copies(ledger):
    ledger.add_category("A")
    ledger.categories.append("B")
    assert ledger.categories == ["A"]
