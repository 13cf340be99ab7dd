# Overview: The in-memory ledger snapshot that every service mutates.

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from ..entities import (
    Customer,
    Payable,
    Product,
    PurchaseOrder,
    PurchaseOrderItem,
    Receivable,
    Sale,
    StockMove,
)


def new_id() -> str:
    return uuid.uuid4().hex


def same_name(a: str, b: str) -> bool:
    return a.casefold() == b.casefold()


@dataclass
class LedgerState:
    """
    Normalized snapshot of the catalog and the financial records.

    Collections read newest-first (new records are inserted at the front),
    except purchase-order drafts which keep insertion order.
    """
    products: list[Product] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    brands: list[str] = field(default_factory=list)
    customers: list[Customer] = field(default_factory=list)
    sales: list[Sale] = field(default_factory=list)
    stock_moves: list[StockMove] = field(default_factory=list)
    receivables: list[Receivable] = field(default_factory=list)
    payables: list[Payable] = field(default_factory=list)
    purchase_order_items: list[PurchaseOrderItem] = field(default_factory=list)
    purchase_orders: list[PurchaseOrder] = field(default_factory=list)

    def find_product(self, product_id: str) -> Product | None:
        return next((p for p in self.products if p.id == product_id), None)

    def find_customer(self, customer_id: str) -> Customer | None:
        return next((c for c in self.customers if c.id == customer_id), None)

    def find_receivable(self, receivable_id: str) -> Receivable | None:
        return next((r for r in self.receivables if r.id == receivable_id), None)

    def find_payable(self, payable_id: str) -> Payable | None:
        return next((p for p in self.payables if p.id == payable_id), None)

    def find_purchase_order_item(self, item_id: str) -> PurchaseOrderItem | None:
        return next((i for i in self.purchase_order_items if i.id == item_id), None)

    def find_purchase_order(self, order_id: str) -> PurchaseOrder | None:
        return next((o for o in self.purchase_orders if o.id == order_id), None)
