# Overview: Flask-SQLAlchemy implementation of the ledger persistence contract.

"""
SqlLedgerRepository

Durable store behind LedgerStore. Write methods only stage rows on
db.session and flush; nothing is committed until LedgerStore calls
commit() at the end of the engine call, so every write of one operation
(stock, moves, sale and receivables of a sale) lands in a single
transaction. On failure LedgerStore calls rollback() and none of them land.

ORDERING:
- Lists are returned newest-first, matching LedgerState, by surrogate pk.
- Batched rows share a batch_no; within a batch the original order is kept.
- Purchase-order drafts are returned oldest-first.

Must be called inside a Flask app context (uses db.session).
"""

from __future__ import annotations

from .. import models
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
from ..extensions import db


def _next_batch_no(model) -> int:
    current = db.session.query(db.func.max(model.batch_no)).scalar()
    return (current or 0) + 1


def _get_row(model, public_id: str):
    return model.query.filter_by(id=public_id).one_or_none()


class SqlLedgerRepository:
    # ------------------------------------------------------------------
    # Unit of work
    # ------------------------------------------------------------------

    def commit(self) -> None:
        db.session.commit()

    def rollback(self) -> None:
        db.session.rollback()

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def list_products(self) -> list[Product]:
        rows = models.Product.query.order_by(models.Product.pk.desc()).all()
        return [row.to_entity() for row in rows]

    def create_product(self, product: Product) -> None:
        db.session.add(models.Product.from_entity(product))
        db.session.flush()

    def update_stock(self, product_id: str, quantity: int) -> None:
        models.Product.query.filter_by(id=product_id).update({"quantity_on_hand": quantity})
        db.session.flush()

    def delete_product(self, product_id: str) -> None:
        row = _get_row(models.Product, product_id)
        if row is not None:
            db.session.delete(row)
            db.session.flush()

    def _list_names(self, model) -> list[str]:
        return [row.name for row in model.query.order_by(model.pk.desc()).all()]

    def _rename(self, model, column: str, old_name: str, new_name: str) -> None:
        model.query.filter_by(name=old_name).update({"name": new_name})
        models.Product.query.filter(getattr(models.Product, column) == old_name).update({column: new_name})
        db.session.flush()

    def list_categories(self) -> list[str]:
        return self._list_names(models.Category)

    def add_category(self, name: str) -> None:
        db.session.add(models.Category(name=name))
        db.session.flush()

    def rename_category(self, old_name: str, new_name: str) -> None:
        self._rename(models.Category, "category", old_name, new_name)

    def delete_category(self, name: str) -> None:
        models.Category.query.filter_by(name=name).delete()
        db.session.flush()

    def list_brands(self) -> list[str]:
        return self._list_names(models.Brand)

    def add_brand(self, name: str) -> None:
        db.session.add(models.Brand(name=name))
        db.session.flush()

    def rename_brand(self, old_name: str, new_name: str) -> None:
        self._rename(models.Brand, "brand", old_name, new_name)

    def delete_brand(self, name: str) -> None:
        models.Brand.query.filter_by(name=name).delete()
        db.session.flush()

    # ------------------------------------------------------------------
    # Customers
    # ------------------------------------------------------------------

    def list_customers(self) -> list[Customer]:
        rows = models.Customer.query.order_by(models.Customer.pk.desc()).all()
        return [row.to_entity() for row in rows]

    def create_customer(self, customer: Customer) -> None:
        db.session.add(models.Customer.from_entity(customer))
        db.session.flush()

    def delete_customer(self, customer_id: str) -> None:
        models.Customer.query.filter_by(id=customer_id).delete()
        db.session.flush()

    # ------------------------------------------------------------------
    # Sales and stock ledger
    # ------------------------------------------------------------------

    def list_sales(self) -> list[Sale]:
        rows = models.Sale.query.order_by(models.Sale.pk.desc()).all()
        return [row.to_entity() for row in rows]

    def create_sale(self, sale: Sale) -> None:
        db.session.add(models.Sale.from_entity(sale))
        db.session.flush()

    def list_stock_moves(self) -> list[StockMove]:
        rows = models.StockMove.query.order_by(
            models.StockMove.batch_no.desc(), models.StockMove.pk.asc()
        ).all()
        return [row.to_entity() for row in rows]

    def create_stock_moves(self, moves: list[StockMove]) -> None:
        if not moves:
            return
        batch_no = _next_batch_no(models.StockMove)
        db.session.add_all([models.StockMove.from_entity(move, batch_no) for move in moves])
        db.session.flush()

    # ------------------------------------------------------------------
    # Receivables / payables
    # ------------------------------------------------------------------

    def list_receivables(self) -> list[Receivable]:
        rows = models.Receivable.query.order_by(
            models.Receivable.batch_no.desc(), models.Receivable.pk.asc()
        ).all()
        return [row.to_entity() for row in rows]

    def create_receivables(self, receivables: list[Receivable]) -> None:
        if not receivables:
            return
        batch_no = _next_batch_no(models.Receivable)
        db.session.add_all([models.Receivable.from_entity(r, batch_no) for r in receivables])
        db.session.flush()

    def update_receivable(self, receivable: Receivable) -> None:
        row = _get_row(models.Receivable, receivable.id)
        if row is None:
            raise LookupError(f"receivable {receivable.id} is not persisted")
        row.apply(receivable)
        db.session.flush()

    def delete_receivable(self, receivable_id: str) -> None:
        models.Receivable.query.filter_by(id=receivable_id).delete()
        db.session.flush()

    def list_payables(self) -> list[Payable]:
        rows = models.Payable.query.order_by(models.Payable.pk.desc()).all()
        return [row.to_entity() for row in rows]

    def create_payable(self, payable: Payable) -> None:
        db.session.add(models.Payable.from_entity(payable))
        db.session.flush()

    def update_payable(self, payable: Payable) -> None:
        row = _get_row(models.Payable, payable.id)
        if row is None:
            raise LookupError(f"payable {payable.id} is not persisted")
        row.apply(payable)
        db.session.flush()

    def delete_payable(self, payable_id: str) -> None:
        models.Payable.query.filter_by(id=payable_id).delete()
        db.session.flush()

    # ------------------------------------------------------------------
    # Purchase orders
    # ------------------------------------------------------------------

    def list_purchase_order_items(self) -> list[PurchaseOrderItem]:
        rows = models.PurchaseOrderItem.query.order_by(models.PurchaseOrderItem.pk.asc()).all()
        return [row.to_entity() for row in rows]

    def create_purchase_order_item(self, item: PurchaseOrderItem) -> None:
        db.session.add(models.PurchaseOrderItem.from_entity(item))
        db.session.flush()

    def update_purchase_order_item(self, item: PurchaseOrderItem) -> None:
        models.PurchaseOrderItem.query.filter_by(id=item.id).update(
            {"name": item.name, "code": item.code, "quantity": item.quantity}
        )
        db.session.flush()

    def delete_purchase_order_item(self, item_id: str) -> None:
        models.PurchaseOrderItem.query.filter_by(id=item_id).delete()
        db.session.flush()

    def list_purchase_orders(self) -> list[PurchaseOrder]:
        rows = models.PurchaseOrder.query.order_by(models.PurchaseOrder.pk.desc()).all()
        return [row.to_entity() for row in rows]

    def finalize_purchase_order(self, order: PurchaseOrder, removed_item_ids: list[str]) -> None:
        db.session.add(models.PurchaseOrder.from_entity(order))
        if removed_item_ids:
            models.PurchaseOrderItem.query.filter(
                models.PurchaseOrderItem.id.in_(removed_item_ids)
            ).delete(synchronize_session=False)
        db.session.flush()

    def delete_purchase_order(self, order_id: str) -> None:
        row = _get_row(models.PurchaseOrder, order_id)
        if row is not None:
            db.session.delete(row)
            db.session.flush()
