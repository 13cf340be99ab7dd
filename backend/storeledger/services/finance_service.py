# Overview: Service-layer operations for inbound stock, receivables and payables.

"""
Stock entries and financial status transitions

- A stock entry increments a SIMPLE product's on-hand quantity, appends one
  IN stock move naming the supplier and creates one pending payable for
  quantity * unit_cost, due `term_days` after today.
- Receivables and payables only move pending -> paid here. Marking an
  already-paid record again is accepted and keeps the first paid_at.
- A paid payable can no longer be edited.
- "overdue" is never set by the engine; it is a projection over due_date.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from ..entities import (
    KIND_SIMPLE,
    MOVE_IN,
    STATUS_OVERDUE,
    STATUS_PAID,
    STATUS_PENDING,
    Payable,
    Receivable,
    StockMove,
)
from ..money import ZERO, round_money
from ..time_utils import add_days, parse_calendar_date
from ..validation import (
    AlreadyPaidError,
    InvalidAmountError,
    InvalidComponentError,
    InvalidDateError,
    NotFoundError,
    ValidationError,
    coerce_amount,
    coerce_int,
    require_positive_amount,
    require_text,
)
from .repository import LedgerRepository
from .state import LedgerState, new_id

logger = logging.getLogger(__name__)

MANUAL_PAYABLE_LABELS = {
    "bill": "Bill",
    "tax": "Tax",
    "fixed": "Fixed expense",
}


def _parse_due_date(value) -> date:
    try:
        return parse_calendar_date(value)
    except ValueError:
        raise InvalidDateError("Invalid due date. Use the YYYY-MM-DD format.")


def add_stock_entry(
    state: LedgerState,
    repository: LedgerRepository,
    product_id: str,
    quantity,
    supplier: str,
    unit_cost,
    *,
    now: datetime,
    term_days: int = 30,
) -> tuple[StockMove, Payable] | None:
    """
    Receive stock from a supplier.

    Returns None (and changes nothing) when quantity <= 0.
    """
    quantity = coerce_int(quantity, "quantity")
    if quantity <= 0:
        return None

    product = state.find_product(product_id)
    if product is None:
        raise NotFoundError("Product not found.")
    if product.kind != KIND_SIMPLE:
        raise InvalidComponentError("Stock entries apply to simple products only; kit stock is derived.")

    supplier = require_text(supplier, "Enter the supplier name.")
    unit_cost = coerce_amount(unit_cost, "unit_cost")
    if unit_cost < 0:
        raise InvalidAmountError("Unit cost cannot be negative.")

    product.quantity_on_hand += quantity

    move = StockMove(
        id=new_id(),
        product_id=product.id,
        direction=MOVE_IN,
        quantity=quantity,
        created_at=now,
        origin=f"Purchase from {supplier}",
    )
    state.stock_moves.insert(0, move)

    payable = Payable(
        id=new_id(),
        supplier=supplier,
        description=f"Stock replenishment ({quantity} items)",
        amount=round_money(unit_cost * quantity),
        due_date=add_days(now.date(), term_days),
    )
    state.payables.insert(0, payable)

    repository.update_stock(product.id, product.quantity_on_hand)
    repository.create_stock_moves([move])
    repository.create_payable(payable)

    logger.info("Stock entry for %s: +%d from %s", product.id, quantity, supplier)
    return move, payable


def mark_receivable_paid(
    state: LedgerState, repository: LedgerRepository, receivable_id: str, *, now: datetime
) -> Receivable:
    receivable = state.find_receivable(receivable_id)
    if receivable is None:
        raise NotFoundError("Receivable not found.")
    if receivable.status == STATUS_PAID:
        return receivable

    receivable.status = STATUS_PAID
    receivable.paid_at = now
    repository.update_receivable(receivable)
    return receivable


def mark_payable_paid(
    state: LedgerState, repository: LedgerRepository, payable_id: str, *, now: datetime
) -> Payable:
    payable = state.find_payable(payable_id)
    if payable is None:
        raise NotFoundError("Payable not found.")
    if payable.status == STATUS_PAID:
        return payable

    payable.status = STATUS_PAID
    payable.paid_at = now
    repository.update_payable(payable)
    return payable


def add_manual_payable(
    state: LedgerState,
    repository: LedgerRepository,
    *,
    kind: str,
    reference: str,
    description: str,
    amount,
    due_date,
) -> Payable:
    """
    Register a bill, tax or fixed expense.

    The supplier column reads "<Label> - <reference>", or just the label when
    no reference is given.
    """
    label = MANUAL_PAYABLE_LABELS.get(kind) if isinstance(kind, str) else None
    if label is None:
        raise ValidationError("Payable kind must be one of: bill, tax, fixed.")
    description = require_text(description, "Enter the payable description.")
    amount = require_positive_amount(amount, "Amount must be greater than zero.")
    due = _parse_due_date(due_date)

    reference = (reference or "").strip()
    payable = Payable(
        id=new_id(),
        supplier=f"{label} - {reference}" if reference else label,
        description=description,
        amount=amount,
        due_date=due,
    )
    state.payables.insert(0, payable)
    repository.create_payable(payable)
    return payable


def update_payable(
    state: LedgerState,
    repository: LedgerRepository,
    payable_id: str,
    *,
    supplier: str,
    description: str,
    amount,
    due_date,
) -> Payable:
    description = require_text(description, "Enter the payable description.")
    amount = require_positive_amount(amount, "Amount must be greater than zero.")
    due = _parse_due_date(due_date)

    payable = state.find_payable(payable_id)
    if payable is None:
        raise NotFoundError("Payable not found.")
    if payable.status == STATUS_PAID:
        raise AlreadyPaidError("A paid payable cannot be edited.")

    payable.supplier = (supplier or "").strip() or payable.supplier
    payable.description = description
    payable.amount = amount
    payable.due_date = due
    repository.update_payable(payable)
    return payable


def remove_receivable(state: LedgerState, repository: LedgerRepository, receivable_id: str) -> None:
    receivable = state.find_receivable(receivable_id)
    if receivable is None:
        raise NotFoundError("Receivable not found.")
    state.receivables.remove(receivable)
    repository.delete_receivable(receivable_id)


def remove_payable(state: LedgerState, repository: LedgerRepository, payable_id: str) -> None:
    payable = state.find_payable(payable_id)
    if payable is None:
        raise NotFoundError("Payable not found.")
    state.payables.remove(payable)
    repository.delete_payable(payable_id)


def effective_status(record: Receivable | Payable, today: date) -> str:
    """Pending records past their due date read as overdue."""
    if record.status == STATUS_PENDING and record.due_date < today:
        return STATUS_OVERDUE
    return record.status


def summarize(receivables: list[Receivable], payables: list[Payable], today: date) -> dict:
    """Open totals per side, with the overdue share broken out."""
    totals = {
        "receivable_open": ZERO,
        "receivable_overdue": ZERO,
        "payable_open": ZERO,
        "payable_overdue": ZERO,
    }
    for side, records in (("receivable", receivables), ("payable", payables)):
        for record in records:
            status = effective_status(record, today)
            if status == STATUS_PAID:
                continue
            totals[f"{side}_open"] += record.amount
            if status == STATUS_OVERDUE:
                totals[f"{side}_overdue"] += record.amount
    return totals
