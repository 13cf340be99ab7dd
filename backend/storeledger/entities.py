# Overview: In-memory ledger entities owned by LedgerStore.

"""
Entity dataclasses for the in-memory ledger state.

Invariants:
- Product.quantity_on_hand is authoritative for SIMPLE products only and never
  goes negative. BUNDLE products keep 0 there; their sellable quantity is
  derived from component stock on every read (see stock_service).
- Category and brand are stored by value on products; renames rewrite them.
- Sale, SaleLine, StockMove, KitComponent and PurchaseOrder are immutable.
- Receivable/Payable only move pending -> paid inside the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from .money import format_money
from .time_utils import to_iso_date, to_utc_z

KIND_SIMPLE = "simple"
KIND_BUNDLE = "bundle"

CUSTOMER_STATUSES = ("new", "returning", "inactive")
NOT_INFORMED = "Not informed"

PAYMENT_CASH = "cash"
PAYMENT_INSTALLMENT = "installment"
PAYMENT_MODES = (PAYMENT_CASH, PAYMENT_INSTALLMENT)

MOVE_IN = "in"
MOVE_OUT = "out"
MOVE_ADJUSTMENT = "adjustment"

STATUS_PENDING = "pending"
STATUS_PAID = "paid"
STATUS_OVERDUE = "overdue"


@dataclass(frozen=True)
class KitComponent:
    product_id: str
    quantity: int

    def to_dict(self) -> dict:
        return {"product_id": self.product_id, "quantity": self.quantity}


@dataclass
class Product:
    id: str
    name: str
    kind: str
    category: str
    brand: str
    quantity_on_hand: int
    minimum_quantity: int
    sale_price: Decimal
    consumption_days: int | None = None
    components: tuple[KitComponent, ...] = ()

    @property
    def is_bundle(self) -> bool:
        return self.kind == KIND_BUNDLE

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "kind": self.kind,
            "category": self.category,
            "brand": self.brand,
            "quantity_on_hand": self.quantity_on_hand,
            "minimum_quantity": self.minimum_quantity,
            "sale_price": format_money(self.sale_price),
            "consumption_days": self.consumption_days,
        }
        if self.is_bundle:
            data["components"] = [c.to_dict() for c in self.components]
        return data


@dataclass(frozen=True)
class Customer:
    id: str
    name: str
    phone: str
    status: str
    created_at: datetime
    notes: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "status": self.status,
            "created_at": to_utc_z(self.created_at),
            "notes": self.notes,
        }


@dataclass(frozen=True)
class SaleLine:
    product_id: str
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "quantity": self.quantity,
            "unit_price": format_money(self.unit_price),
        }


@dataclass(frozen=True)
class Sale:
    id: str
    customer_id: str
    lines: tuple[SaleLine, ...]
    total: Decimal
    down_payment: Decimal
    created_at: datetime
    payment_mode: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customer_id": self.customer_id,
            "lines": [line.to_dict() for line in self.lines],
            "total": format_money(self.total),
            "down_payment": format_money(self.down_payment),
            "created_at": to_utc_z(self.created_at),
            "payment_mode": self.payment_mode,
        }


@dataclass(frozen=True)
class StockMove:
    id: str
    product_id: str
    direction: str
    quantity: int
    created_at: datetime
    origin: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "product_id": self.product_id,
            "direction": self.direction,
            "quantity": self.quantity,
            "created_at": to_utc_z(self.created_at),
            "origin": self.origin,
        }


@dataclass
class Receivable:
    id: str
    customer_id: str
    description: str
    amount: Decimal
    due_date: date
    status: str = STATUS_PENDING
    paid_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customer_id": self.customer_id,
            "description": self.description,
            "amount": format_money(self.amount),
            "due_date": to_iso_date(self.due_date),
            "status": self.status,
            "paid_at": to_utc_z(self.paid_at),
        }


@dataclass
class Payable:
    id: str
    supplier: str
    description: str
    amount: Decimal
    due_date: date
    status: str = STATUS_PENDING
    paid_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "supplier": self.supplier,
            "description": self.description,
            "amount": format_money(self.amount),
            "due_date": to_iso_date(self.due_date),
            "status": self.status,
            "paid_at": to_utc_z(self.paid_at),
        }


@dataclass
class PurchaseOrderItem:
    id: str
    name: str
    code: str
    quantity: int

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "code": self.code, "quantity": self.quantity}


@dataclass(frozen=True)
class PurchaseOrder:
    id: str
    created_at: datetime
    items: tuple[PurchaseOrderItem, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "created_at": to_utc_z(self.created_at),
            "items": [item.to_dict() for item in self.items],
        }
