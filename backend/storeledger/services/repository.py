# Overview: Interface the ledger engine expects from its durable store.

"""
Persistence collaborator contract.

LedgerStore updates its in-memory state first and then calls the write
methods below as the last step of each mutation. Writes of one engine call
form one unit of work: LedgerStore ends every successful call with commit()
and every failed one with rollback(), so a mutation is stored whole or not
at all. Implementations own the storage layout entirely; the engine only
relies on:

- per-entity create/update/delete/list,
- batch inserts for stock moves and receivables (a multi-installment sale
  persists all installments together),
- update_stock() for on-hand changes (there is no full product update).

Implementations may raise; the engine rolls back, logs and propagates
(see LedgerStore).
"""

from __future__ import annotations

from typing import Protocol

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


class LedgerRepository(Protocol):
    # Unit of work
    def commit(self) -> None: ...
    def rollback(self) -> None: ...

    # Catalog
    def list_products(self) -> list[Product]: ...
    def create_product(self, product: Product) -> None: ...
    def update_stock(self, product_id: str, quantity: int) -> None: ...
    def delete_product(self, product_id: str) -> None: ...

    def list_categories(self) -> list[str]: ...
    def add_category(self, name: str) -> None: ...
    def rename_category(self, old_name: str, new_name: str) -> None: ...
    def delete_category(self, name: str) -> None: ...

    def list_brands(self) -> list[str]: ...
    def add_brand(self, name: str) -> None: ...
    def rename_brand(self, old_name: str, new_name: str) -> None: ...
    def delete_brand(self, name: str) -> None: ...

    # Customers
    def list_customers(self) -> list[Customer]: ...
    def create_customer(self, customer: Customer) -> None: ...
    def delete_customer(self, customer_id: str) -> None: ...

    # Sales and stock ledger
    def list_sales(self) -> list[Sale]: ...
    def create_sale(self, sale: Sale) -> None: ...

    def list_stock_moves(self) -> list[StockMove]: ...
    def create_stock_moves(self, moves: list[StockMove]) -> None: ...

    # Receivables / payables
    def list_receivables(self) -> list[Receivable]: ...
    def create_receivables(self, receivables: list[Receivable]) -> None: ...
    def update_receivable(self, receivable: Receivable) -> None: ...
    def delete_receivable(self, receivable_id: str) -> None: ...

    def list_payables(self) -> list[Payable]: ...
    def create_payable(self, payable: Payable) -> None: ...
    def update_payable(self, payable: Payable) -> None: ...
    def delete_payable(self, payable_id: str) -> None: ...

    # Purchase orders
    def list_purchase_order_items(self) -> list[PurchaseOrderItem]: ...
    def create_purchase_order_item(self, item: PurchaseOrderItem) -> None: ...
    def update_purchase_order_item(self, item: PurchaseOrderItem) -> None: ...
    def delete_purchase_order_item(self, item_id: str) -> None: ...

    def list_purchase_orders(self) -> list[PurchaseOrder]: ...
    def finalize_purchase_order(self, order: PurchaseOrder, removed_item_ids: list[str]) -> None: ...
    def delete_purchase_order(self, order_id: str) -> None: ...
