# Overview: The Ledger & Sale Engine; owns the in-memory state and serializes every mutation.

"""
LedgerStore

Explicit state container for the catalog, customers, sales, stock moves,
receivables, payables and purchase-order drafts.

Every public operation:
1. runs under one re-entrant lock (a critical section per call),
2. validates before touching state (rejections leave no trace),
3. mutates the in-memory state,
4. writes the change through the repository and commits it once,
5. notifies subscribers,
and returns a Result instead of raising for business rejections.

Persistence failures are NOT business rejections. The repository is rolled
back, so storage keeps none of the call's writes, and the error is logged and
re-raised. The in-memory state is already ahead of storage at that point and
reload() is the recovery path (re-read everything from storage).
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from ..entities import Customer, Payable, Product, PurchaseOrder, PurchaseOrderItem, Receivable, Sale, StockMove
from ..time_utils import utcnow
from ..validation import LedgerError
from . import catalog_service, customer_service, finance_service, purchase_order_service, sales_service
from .repository import LedgerRepository
from .results import Result
from .sales_service import SaleRequest
from .state import LedgerState
from .stock_service import available_stock

logger = logging.getLogger(__name__)

Subscriber = Callable[[str], None]


class LedgerStore:
    def __init__(
        self,
        repository: LedgerRepository,
        *,
        clock: Callable = utcnow,
        payable_term_days: int = 30,
    ):
        self._repository = repository
        self._clock = clock
        self._payable_term_days = payable_term_days
        self._lock = threading.RLock()
        self._state = LedgerState()
        self._subscribers: list[Subscriber] = []
        self._loaded = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Replace the in-memory state with everything the repository holds."""
        with self._lock:
            repo = self._repository
            self._state = LedgerState(
                products=list(repo.list_products()),
                categories=list(repo.list_categories()),
                brands=list(repo.list_brands()),
                customers=list(repo.list_customers()),
                sales=list(repo.list_sales()),
                stock_moves=list(repo.list_stock_moves()),
                receivables=list(repo.list_receivables()),
                payables=list(repo.list_payables()),
                purchase_order_items=list(repo.list_purchase_order_items()),
                purchase_orders=list(repo.list_purchase_orders()),
            )
            self._loaded = True
            logger.info(
                "Ledger loaded: %d products, %d sales, %d receivables, %d payables",
                len(self._state.products), len(self._state.sales),
                len(self._state.receivables), len(self._state.payables),
            )
        self._notify("load")

    reload = load

    def ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register callback(operation_name); returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, operation: str) -> None:
        for callback in list(self._subscribers):
            callback(operation)

    # ------------------------------------------------------------------
    # Core dispatch
    # ------------------------------------------------------------------

    def _run(self, operation: str, func, *args, **kwargs) -> Result:
        with self._lock:
            try:
                value = func(self._state, self._repository, *args, **kwargs)
                self._repository.commit()
            except LedgerError as exc:
                logger.info("%s rejected (%s): %s", operation, exc.kind, exc)
                return Result.failure(exc)
            except Exception:
                self._repository.rollback()
                logger.exception(
                    "%s failed; in-memory state may be ahead of the repository", operation
                )
                raise
        self._notify(operation)
        return Result.success(value)

    # ------------------------------------------------------------------
    # Read side (list copies; the records in them are the engine's own objects
    # and must be treated as read-only)
    # ------------------------------------------------------------------

    @property
    def products(self) -> list[Product]:
        return list(self._state.products)

    @property
    def categories(self) -> list[str]:
        return list(self._state.categories)

    @property
    def brands(self) -> list[str]:
        return list(self._state.brands)

    @property
    def customers(self) -> list[Customer]:
        return list(self._state.customers)

    @property
    def sales(self) -> list[Sale]:
        return list(self._state.sales)

    @property
    def stock_moves(self) -> list[StockMove]:
        return list(self._state.stock_moves)

    @property
    def receivables(self) -> list[Receivable]:
        return list(self._state.receivables)

    @property
    def payables(self) -> list[Payable]:
        return list(self._state.payables)

    @property
    def purchase_order_items(self) -> list[PurchaseOrderItem]:
        return list(self._state.purchase_order_items)

    @property
    def purchase_orders(self) -> list[PurchaseOrder]:
        return list(self._state.purchase_orders)

    def find_product(self, product_id: str) -> Product | None:
        return self._state.find_product(product_id)

    def get_product_stock(self, product_id: str) -> int:
        """On-hand for simple products, derived availability for kits, 0 if unknown."""
        with self._lock:
            product = self._state.find_product(product_id)
            if product is None:
                return 0
            return available_stock(product, self._state.products)

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def add_category(self, name: str) -> Result:
        return self._run("add_category", catalog_service.add_category, name)

    def add_brand(self, name: str) -> Result:
        return self._run("add_brand", catalog_service.add_brand, name)

    def update_category(self, old_name: str, new_name: str) -> Result:
        return self._run("update_category", catalog_service.update_category, old_name, new_name)

    def update_brand(self, old_name: str, new_name: str) -> Result:
        return self._run("update_brand", catalog_service.update_brand, old_name, new_name)

    def remove_category(self, name: str) -> Result:
        return self._run("remove_category", catalog_service.remove_category, name)

    def remove_brand(self, name: str) -> Result:
        return self._run("remove_brand", catalog_service.remove_brand, name)

    def add_product(self, payload: dict) -> Result:
        return self._run("add_product", catalog_service.add_product, payload)

    def add_kit(self, payload: dict) -> Result:
        return self._run("add_kit", catalog_service.add_kit, payload)

    def remove_product(self, product_id: str) -> Result:
        return self._run("remove_product", catalog_service.remove_product, product_id)

    # ------------------------------------------------------------------
    # Customers
    # ------------------------------------------------------------------

    def add_customer(self, name: str, phone: str | None = None, status: str = "new", notes: str | None = None) -> Result:
        return self._run(
            "add_customer",
            customer_service.add_customer,
            name=name, phone=phone, status=status, notes=notes, now=self._clock(),
        )

    def remove_customer(self, customer_id: str) -> Result:
        return self._run("remove_customer", customer_service.remove_customer, customer_id)

    # ------------------------------------------------------------------
    # Sales
    # ------------------------------------------------------------------

    def register_sale(self, request: SaleRequest | dict) -> Result:
        return self._run("register_sale", sales_service.register_sale, request, now=self._clock())

    # ------------------------------------------------------------------
    # Stock entries & finance
    # ------------------------------------------------------------------

    def add_stock_entry(self, product_id: str, quantity, supplier: str, unit_cost) -> Result:
        return self._run(
            "add_stock_entry",
            finance_service.add_stock_entry,
            product_id, quantity, supplier, unit_cost,
            now=self._clock(), term_days=self._payable_term_days,
        )

    def mark_receivable_paid(self, receivable_id: str) -> Result:
        return self._run(
            "mark_receivable_paid", finance_service.mark_receivable_paid, receivable_id, now=self._clock()
        )

    def mark_payable_paid(self, payable_id: str) -> Result:
        return self._run(
            "mark_payable_paid", finance_service.mark_payable_paid, payable_id, now=self._clock()
        )

    def add_manual_payable(self, *, kind: str, reference: str, description: str, amount, due_date) -> Result:
        return self._run(
            "add_manual_payable",
            finance_service.add_manual_payable,
            kind=kind, reference=reference, description=description, amount=amount, due_date=due_date,
        )

    def update_payable(self, payable_id: str, *, supplier: str, description: str, amount, due_date) -> Result:
        return self._run(
            "update_payable",
            finance_service.update_payable,
            payable_id,
            supplier=supplier, description=description, amount=amount, due_date=due_date,
        )

    def remove_receivable(self, receivable_id: str) -> Result:
        return self._run("remove_receivable", finance_service.remove_receivable, receivable_id)

    def remove_payable(self, payable_id: str) -> Result:
        return self._run("remove_payable", finance_service.remove_payable, payable_id)

    # ------------------------------------------------------------------
    # Purchase orders
    # ------------------------------------------------------------------

    def add_purchase_order_item(self, name: str, code: str, quantity) -> Result:
        return self._run(
            "add_purchase_order_item", purchase_order_service.add_purchase_order_item, name, code, quantity
        )

    def update_purchase_order_item_quantity(self, item_id: str, quantity) -> Result:
        return self._run(
            "update_purchase_order_item_quantity",
            purchase_order_service.update_purchase_order_item_quantity,
            item_id, quantity,
        )

    def update_purchase_order_item(self, item_id: str, name: str, code: str) -> Result:
        return self._run(
            "update_purchase_order_item",
            purchase_order_service.update_purchase_order_item,
            item_id, name, code,
        )

    def remove_purchase_order_item(self, item_id: str) -> Result:
        return self._run(
            "remove_purchase_order_item", purchase_order_service.remove_purchase_order_item, item_id
        )

    def finalize_purchase_order(self, selected_ids: list[str]) -> Result:
        return self._run(
            "finalize_purchase_order",
            purchase_order_service.finalize_purchase_order,
            list(selected_ids or []),
            now=self._clock(),
        )

    def delete_purchase_order(self, order_id: str) -> Result:
        return self._run("delete_purchase_order", purchase_order_service.delete_purchase_order, order_id)
