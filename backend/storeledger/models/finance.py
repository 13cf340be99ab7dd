from __future__ import annotations

from ..entities import STATUS_PENDING, Payable as PayableEntity, Receivable as ReceivableEntity
from ..extensions import db
from ..money import from_cents, to_cents


class Receivable(db.Model):
    """
    Amount owed by a customer (one row per installment).

    STATUS: pending -> paid. "overdue" is derived from due_date by readers.
    """
    __tablename__ = "receivables"
    __table_args__ = (
        db.Index("ix_receivables_status_due", "status", "due_date"),
        {"sqlite_autoincrement": True},
    )

    pk = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(32), nullable=False, unique=True)
    batch_no = db.Column(db.Integer, nullable=False)

    customer_id = db.Column(db.String(32), nullable=True, index=True)
    description = db.Column(db.String(255), nullable=False)
    amount_cents = db.Column(db.Integer, nullable=False)
    due_date = db.Column(db.Date, nullable=False)
    status = db.Column(db.String(16), nullable=False, default=STATUS_PENDING)
    paid_at = db.Column(db.DateTime, nullable=True)

    @classmethod
    def from_entity(cls, receivable: ReceivableEntity, batch_no: int) -> "Receivable":
        row = cls(id=receivable.id, batch_no=batch_no, customer_id=receivable.customer_id)
        row.apply(receivable)
        return row

    def apply(self, receivable: ReceivableEntity) -> None:
        self.description = receivable.description
        self.amount_cents = to_cents(receivable.amount)
        self.due_date = receivable.due_date
        self.status = receivable.status
        self.paid_at = receivable.paid_at

    def to_entity(self) -> ReceivableEntity:
        return ReceivableEntity(
            id=self.id,
            customer_id=self.customer_id,
            description=self.description,
            amount=from_cents(self.amount_cents),
            due_date=self.due_date,
            status=self.status,
            paid_at=self.paid_at,
        )


class Payable(db.Model):
    """
    Amount owed to a supplier, a bill, a tax or a fixed expense.

    A paid payable is frozen; the engine refuses edits after payment.
    """
    __tablename__ = "payables"
    __table_args__ = (
        db.Index("ix_payables_status_due", "status", "due_date"),
        {"sqlite_autoincrement": True},
    )

    pk = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(32), nullable=False, unique=True)

    supplier = db.Column(db.String(255), nullable=False)
    description = db.Column(db.String(255), nullable=False)
    amount_cents = db.Column(db.Integer, nullable=False)
    due_date = db.Column(db.Date, nullable=False)
    status = db.Column(db.String(16), nullable=False, default=STATUS_PENDING)
    paid_at = db.Column(db.DateTime, nullable=True)

    @classmethod
    def from_entity(cls, payable: PayableEntity) -> "Payable":
        row = cls(id=payable.id)
        row.apply(payable)
        return row

    def apply(self, payable: PayableEntity) -> None:
        self.supplier = payable.supplier
        self.description = payable.description
        self.amount_cents = to_cents(payable.amount)
        self.due_date = payable.due_date
        self.status = payable.status
        self.paid_at = payable.paid_at

    def to_entity(self) -> PayableEntity:
        return PayableEntity(
            id=self.id,
            supplier=self.supplier,
            description=self.description,
            amount=from_cents(self.amount_cents),
            due_date=self.due_date,
            status=self.status,
            paid_at=self.paid_at,
        )
