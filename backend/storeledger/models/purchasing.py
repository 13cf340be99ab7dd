from __future__ import annotations

from ..entities import PurchaseOrder as PurchaseOrderEntity, PurchaseOrderItem as PurchaseOrderItemEntity
from ..extensions import db


class PurchaseOrderItem(db.Model):
    """Draft line waiting to be finalized into a purchase order."""
    __tablename__ = "purchase_order_items"
    __table_args__ = ({"sqlite_autoincrement": True},)

    pk = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(32), nullable=False, unique=True)

    name = db.Column(db.String(255), nullable=False)
    code = db.Column(db.String(64), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)

    @classmethod
    def from_entity(cls, item: PurchaseOrderItemEntity) -> "PurchaseOrderItem":
        return cls(id=item.id, name=item.name, code=item.code, quantity=item.quantity)

    def to_entity(self) -> PurchaseOrderItemEntity:
        return PurchaseOrderItemEntity(id=self.id, name=self.name, code=self.code, quantity=self.quantity)


class PurchaseOrder(db.Model):
    """
    Finalized purchase order.

    IMMUTABLE: lines are copies of the drafts at finalize time, so later
    draft edits never reach an existing order.
    """
    __tablename__ = "purchase_orders"
    __table_args__ = ({"sqlite_autoincrement": True},)

    pk = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(32), nullable=False, unique=True)
    created_at = db.Column(db.DateTime, nullable=False)

    lines = db.relationship(
        "PurchaseOrderLine",
        order_by="PurchaseOrderLine.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @classmethod
    def from_entity(cls, order: PurchaseOrderEntity) -> "PurchaseOrder":
        return cls(
            id=order.id,
            created_at=order.created_at,
            lines=[
                PurchaseOrderLine(
                    position=index,
                    item_id=item.id,
                    name=item.name,
                    code=item.code,
                    quantity=item.quantity,
                )
                for index, item in enumerate(order.items)
            ],
        )

    def to_entity(self) -> PurchaseOrderEntity:
        return PurchaseOrderEntity(
            id=self.id,
            created_at=self.created_at,
            items=tuple(
                PurchaseOrderItemEntity(id=line.item_id, name=line.name, code=line.code, quantity=line.quantity)
                for line in self.lines
            ),
        )


class PurchaseOrderLine(db.Model):
    __tablename__ = "purchase_order_lines"
    __table_args__ = (
        db.UniqueConstraint("order_id", "position", name="uq_purchase_order_lines_order_position"),
        {"sqlite_autoincrement": True},
    )

    pk = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(
        db.String(32), db.ForeignKey("purchase_orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = db.Column(db.Integer, nullable=False)

    item_id = db.Column(db.String(32), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    code = db.Column(db.String(64), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
