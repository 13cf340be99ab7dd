# Overview: Service-layer operations for purchase-order drafting.

"""
Purchase-order drafts

Draft items queue up until the user finalizes a selection of them. The
selected drafts are copied into a new immutable PurchaseOrder and removed
from the queue; unselected drafts stay where they are.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from ..entities import PurchaseOrder, PurchaseOrderItem
from ..validation import (
    InvalidQuantityError,
    NoItemsSelectedError,
    NotFoundError,
    ValidationError,
    require_text,
)
from .repository import LedgerRepository
from .state import LedgerState, new_id


def _require_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidQuantityError("Quantity must be greater than zero.")
    return quantity


def _require_item(state: LedgerState, item_id: str) -> PurchaseOrderItem:
    item = state.find_purchase_order_item(item_id)
    if item is None:
        raise NotFoundError("Purchase order item not found.")
    return item


def add_purchase_order_item(
    state: LedgerState, repository: LedgerRepository, name: str, code: str, quantity
) -> PurchaseOrderItem:
    item = PurchaseOrderItem(
        id=new_id(),
        name=require_text(name, "Enter the item name."),
        code=require_text(code, "Enter the item code."),
        quantity=_require_quantity(quantity),
    )
    state.purchase_order_items.append(item)
    repository.create_purchase_order_item(item)
    return item


def update_purchase_order_item_quantity(
    state: LedgerState, repository: LedgerRepository, item_id: str, quantity
) -> PurchaseOrderItem:
    quantity = _require_quantity(quantity)
    item = _require_item(state, item_id)
    item.quantity = quantity
    repository.update_purchase_order_item(item)
    return item


def update_purchase_order_item(
    state: LedgerState, repository: LedgerRepository, item_id: str, name: str, code: str
) -> PurchaseOrderItem:
    name = require_text(name, "Enter the item name.")
    code = require_text(code, "Enter the item code.")
    item = _require_item(state, item_id)
    item.name = name
    item.code = code
    repository.update_purchase_order_item(item)
    return item


def remove_purchase_order_item(state: LedgerState, repository: LedgerRepository, item_id: str) -> None:
    item = _require_item(state, item_id)
    state.purchase_order_items.remove(item)
    repository.delete_purchase_order_item(item_id)


def finalize_purchase_order(
    state: LedgerState,
    repository: LedgerRepository,
    selected_ids: list[str],
    *,
    now: datetime,
) -> PurchaseOrder:
    if not selected_ids:
        raise NoItemsSelectedError("Select at least one item to finalize the order.")
    if not isinstance(selected_ids, (list, tuple)) or not all(isinstance(i, str) for i in selected_ids):
        raise ValidationError("Selected items must be a list of item ids.")

    wanted = list(dict.fromkeys(selected_ids))
    selected = [_require_item(state, item_id) for item_id in wanted]

    order = PurchaseOrder(
        id=new_id(),
        created_at=now,
        items=tuple(replace(item) for item in selected),
    )
    state.purchase_orders.insert(0, order)
    removed = set(wanted)
    state.purchase_order_items[:] = [
        item for item in state.purchase_order_items if item.id not in removed
    ]
    repository.finalize_purchase_order(order, wanted)
    return order


def delete_purchase_order(state: LedgerState, repository: LedgerRepository, order_id: str) -> None:
    order = state.find_purchase_order(order_id)
    if order is None:
        raise NotFoundError("Purchase order not found.")
    state.purchase_orders.remove(order)
    repository.delete_purchase_order(order_id)
