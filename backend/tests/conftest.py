"""
Pytest fixtures for storeledger backend tests.

Provides the Flask app on in-memory SQLite, a test client, a per-test clean
database, and engine fixtures built on a recording in-memory repository
with a fixed clock.
"""

from datetime import datetime

import pytest

from storeledger import create_app
from storeledger.extensions import db
from storeledger.services.ledger_store import LedgerStore

# Sunday 2026-03-15 10:30 UTC
FIXED_NOW = datetime(2026, 3, 15, 10, 30)


class RecordingRepository:
    """
    In-memory LedgerRepository double.

    list_* methods return what was seeded in `initial`; every other write
    is recorded as (name, args). commit/rollback are counted, not recorded.
    Names in `fail_on` raise RuntimeError.
    """

    def __init__(self, initial=None, fail_on=()):
        self.initial = dict(initial or {})
        self.fail_on = set(fail_on)
        self.calls = []
        self.commits = 0
        self.rollbacks = 0

    def commit(self):
        if "commit" in self.fail_on:
            raise RuntimeError("commit failed")
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def __getattr__(self, name):
        if name.startswith("list_"):
            key = name[len("list_"):]
            return lambda: list(self.initial.get(key, []))

        def record(*args, **kwargs):
            if name in self.fail_on:
                raise RuntimeError(f"{name} failed")
            self.calls.append((name, args))

        return record

    def names(self):
        return [name for name, _ in self.calls]

    def last(self, name):
        return next(args for call, args in reversed(self.calls) if call == name)


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app, db_session):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database (and a freshly loaded ledger) for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        app.extensions["storeledger"].reload()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def repository():
    return RecordingRepository()


@pytest.fixture(scope='function')
def ledger(repository):
    """LedgerStore on the recording repository, clock fixed at FIXED_NOW."""
    store = LedgerStore(repository, clock=lambda: FIXED_NOW)
    store.load()
    return store


@pytest.fixture(scope='function')
def make_product(ledger):
    """Factory: register a simple product and return it."""

    def _make(name, on_hand=0, price="10.00", minimum=0, **extra):
        payload = {
            "name": name,
            "category": extra.pop("category", "General"),
            "brand": extra.pop("brand", "House"),
            "sale_price": price,
            "quantity_on_hand": on_hand,
            "minimum_quantity": minimum,
            **extra,
        }
        result = ledger.add_product(payload)
        assert result.ok, result.error
        return result.value

    return _make


@pytest.fixture(scope='function')
def make_kit(ledger):
    """Factory: register a kit from [(product, quantity), ...]."""

    def _make(name, components, price="50.00"):
        result = ledger.add_kit({
            "name": name,
            "category": "Kits",
            "brand": "House",
            "sale_price": price,
            "components": [{"product_id": p.id, "quantity": q} for p, q in components],
        })
        assert result.ok, result.error
        return result.value

    return _make


@pytest.fixture(scope='function')
def make_customer(ledger):
    def _make(name="Ana"):
        result = ledger.add_customer(name=name, phone="555-0100")
        assert result.ok, result.error
        return result.value

    return _make
