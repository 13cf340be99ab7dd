# Overview: Service-layer operations for the customer registry.

from __future__ import annotations

from datetime import datetime

from ..entities import CUSTOMER_STATUSES, NOT_INFORMED, Customer
from ..validation import NotFoundError, ValidationError, require_text
from .repository import LedgerRepository
from .state import LedgerState, new_id


def add_customer(
    state: LedgerState,
    repository: LedgerRepository,
    *,
    name: str,
    phone: str | None = None,
    status: str = "new",
    notes: str | None = None,
    now: datetime,
) -> Customer:
    """Register a customer. A blank phone is stored as "Not informed"."""
    name = require_text(name, "Enter the customer name.")
    if status not in CUSTOMER_STATUSES:
        raise ValidationError("Customer status must be one of: new, returning, inactive.")

    customer = Customer(
        id=new_id(),
        name=name,
        phone=(phone or "").strip() or NOT_INFORMED,
        status=status,
        created_at=now,
        notes=(notes or "").strip() or None,
    )
    state.customers.insert(0, customer)
    repository.create_customer(customer)
    return customer


def remove_customer(state: LedgerState, repository: LedgerRepository, customer_id: str) -> None:
    # Sales and receivables keep their customer_id; orphans are tolerated.
    customer = state.find_customer(customer_id)
    if customer is None:
        raise NotFoundError("Customer not found.")
    state.customers.remove(customer)
    repository.delete_customer(customer_id)
