from __future__ import annotations

from ..entities import Customer as CustomerEntity
from ..extensions import db


class Customer(db.Model):
    """
    Customer registry.

    Sales and receivables reference customers by id without an FK;
    removing a customer leaves those records in place.
    """
    __tablename__ = "customers"
    __table_args__ = ({"sqlite_autoincrement": True},)

    pk = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(32), nullable=False, unique=True)

    name = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(64), nullable=False)
    status = db.Column(db.String(16), nullable=False, default="new")  # new, returning, inactive
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False)

    @classmethod
    def from_entity(cls, customer: CustomerEntity) -> "Customer":
        return cls(
            id=customer.id,
            name=customer.name,
            phone=customer.phone,
            status=customer.status,
            notes=customer.notes,
            created_at=customer.created_at,
        )

    def to_entity(self) -> CustomerEntity:
        return CustomerEntity(
            id=self.id,
            name=self.name,
            phone=self.phone,
            status=self.status,
            created_at=self.created_at,
            notes=self.notes,
        )
