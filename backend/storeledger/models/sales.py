from __future__ import annotations

from ..entities import Sale as SaleEntity, SaleLine as SaleLineEntity
from ..extensions import db
from ..money import from_cents, to_cents


class Sale(db.Model):
    """
    Immutable sale header.

    IMMUTABLE: written once by register_sale, never updated or deleted.
    The unit price of every line is frozen at sale time.
    """
    __tablename__ = "sales"
    __table_args__ = (
        db.Index("ix_sales_customer_id", "customer_id"),
        {"sqlite_autoincrement": True},
    )

    pk = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(32), nullable=False, unique=True)

    customer_id = db.Column(db.String(32), nullable=True)
    total_cents = db.Column(db.Integer, nullable=False)
    down_payment_cents = db.Column(db.Integer, nullable=False, default=0)
    payment_mode = db.Column(db.String(16), nullable=False)  # cash, installment

    created_at = db.Column(db.DateTime, nullable=False)

    lines = db.relationship(
        "SaleLine",
        order_by="SaleLine.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @classmethod
    def from_entity(cls, sale: SaleEntity) -> "Sale":
        return cls(
            id=sale.id,
            customer_id=sale.customer_id,
            total_cents=to_cents(sale.total),
            down_payment_cents=to_cents(sale.down_payment),
            payment_mode=sale.payment_mode,
            created_at=sale.created_at,
            lines=[
                SaleLine(
                    position=index,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    unit_price_cents=to_cents(line.unit_price),
                )
                for index, line in enumerate(sale.lines)
            ],
        )

    def to_entity(self) -> SaleEntity:
        return SaleEntity(
            id=self.id,
            customer_id=self.customer_id,
            lines=tuple(
                SaleLineEntity(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    unit_price=from_cents(line.unit_price_cents),
                )
                for line in self.lines
            ),
            total=from_cents(self.total_cents),
            down_payment=from_cents(self.down_payment_cents),
            created_at=self.created_at,
            payment_mode=self.payment_mode,
        )


class SaleLine(db.Model):
    __tablename__ = "sale_lines"
    __table_args__ = (
        db.UniqueConstraint("sale_id", "position", name="uq_sale_lines_sale_position"),
        {"sqlite_autoincrement": True},
    )

    pk = db.Column(db.Integer, primary_key=True)
    sale_id = db.Column(db.String(32), db.ForeignKey("sales.id", ondelete="CASCADE"), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False)

    product_id = db.Column(db.String(32), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    unit_price_cents = db.Column(db.Integer, nullable=False)
