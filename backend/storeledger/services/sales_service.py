# Overview: Service-layer operations for sales; validation, stock deduction and receivable schedules.

"""
Sale registration

One call validates, prices, deducts stock, logs stock moves and (on credit)
generates the receivable schedule for a single sale.

Validation order (fail fast; nothing is mutated until every check passes):
1. item list non-empty                        -> EmptyOrderError
2. every quantity > 0                         -> InvalidQuantityError
3. every product id exists                    -> UnknownProductError
4. expand bundles into base-product deductions -> InvalidComponentError
5. deduction <= on-hand per base product      -> InsufficientStockError
6. total = round(sum(unit_price * quantity)) over the coalesced lines
7. payment mode / installment configuration   -> Missing*/Invalid*/DownPayment*

Duplicate product ids in the request are coalesced (quantities summed, first
appearance order kept) before the lines are priced or expanded.

Mutation order:
(a) decrement on-hand per base product
(b) one OUT stock move per coalesced line (bundles: one per component)
(c) immutable Sale record
(d) receivables, when the financed amount is > 0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from ..entities import (
    KIND_SIMPLE,
    MOVE_OUT,
    PAYMENT_CASH,
    PAYMENT_INSTALLMENT,
    PAYMENT_MODES,
    Product,
    Receivable,
    Sale,
    SaleLine,
    StockMove,
)
from ..money import ZERO, round_money, split_installments, to_decimal
from ..time_utils import month_offset_date, parse_calendar_date
from ..validation import (
    DownPaymentExceedsTotalError,
    EmptyOrderError,
    InsufficientStockError,
    InvalidAmountError,
    InvalidComponentError,
    InvalidDateError,
    InvalidDueDayError,
    InvalidInstallmentCountError,
    InvalidQuantityError,
    MissingDueDateError,
    MissingInstallmentConfigError,
    UnknownProductError,
    ValidationError,
)
from .repository import LedgerRepository
from .state import LedgerState, new_id

logger = logging.getLogger(__name__)

ALLOWED_INSTALLMENT_COUNTS = (1, 3, 4, 6)
SALE_ORIGIN = "Sale"


@dataclass(frozen=True)
class InstallmentConfig:
    """
    count: 1, 3, 4 or 6
    down_payment: paid up front, subtracted from the total before splitting
    due_date: explicit due date, required when count == 1
    due_day: day of month (1-31) for every installment when count > 1
    """
    count: int
    down_payment: object = 0
    due_date: object = None
    due_day: object = None

    @classmethod
    def from_dict(cls, data: dict | None) -> "InstallmentConfig | None":
        if data is None:
            return None
        if not isinstance(data, dict):
            raise ValidationError("Installment configuration must be an object.")
        return cls(
            count=data.get("count"),
            down_payment=data.get("down_payment", 0),
            due_date=data.get("due_date"),
            due_day=data.get("due_day"),
        )


@dataclass(frozen=True)
class SaleRequest:
    customer_id: str
    items: list = field(default_factory=list)
    payment_mode: str = PAYMENT_CASH
    installments: InstallmentConfig | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "SaleRequest":
        if not isinstance(data, dict):
            raise ValidationError("The sale request must be an object.")
        items = data.get("items") or []
        if not isinstance(items, list):
            raise ValidationError("Sale items must be a list.")
        return cls(
            customer_id=data.get("customer_id"),
            items=list(items),
            payment_mode=data.get("payment_mode", PAYMENT_CASH),
            installments=InstallmentConfig.from_dict(data.get("installments")),
        )


@dataclass(frozen=True)
class SaleReceipt:
    sale: Sale
    stock_moves: tuple[StockMove, ...]
    receivables: tuple[Receivable, ...]

    def to_dict(self) -> dict:
        return {
            "sale": self.sale.to_dict(),
            "stock_moves": [m.to_dict() for m in self.stock_moves],
            "receivables": [r.to_dict() for r in self.receivables],
        }


@dataclass(frozen=True)
class _PlannedInstallment:
    amount: Decimal
    due_date: date
    description: str


def _coalesce_items(items: list) -> dict[str, int]:
    if not items:
        raise EmptyOrderError("Add at least one item to the sale.")

    quantities: dict[str, int] = {}
    malformed_id = False
    for item in items:
        quantity = item.get("quantity") if isinstance(item, dict) else None
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidQuantityError("Quantity must be greater than zero.")
        product_id = item.get("product_id")
        if not isinstance(product_id, str):
            malformed_id = True
            continue
        quantities[product_id] = quantities.get(product_id, 0) + quantity

    # Ids that cannot name a product fail with the unknown-product check, after quantities
    if malformed_id:
        raise UnknownProductError("One of the selected products does not exist.")
    return quantities


def _resolve_lines(state: LedgerState, quantities: dict[str, int]) -> list[tuple[Product, int]]:
    lines = []
    for product_id, quantity in quantities.items():
        product = state.find_product(product_id)
        if product is None:
            raise UnknownProductError(
                "One of the selected products does not exist.",
                details={"product_id": product_id},
            )
        lines.append((product, quantity))
    return lines


def _base_deductions(state: LedgerState, lines: list[tuple[Product, int]]) -> dict[str, int]:
    """Flatten sale lines into one deduction per SIMPLE product."""
    deductions: dict[str, int] = {}
    for product, quantity in lines:
        if product.kind == KIND_SIMPLE:
            deductions[product.id] = deductions.get(product.id, 0) + quantity
            continue
        for component in product.components:
            deductions[component.product_id] = (
                deductions.get(component.product_id, 0) + component.quantity * quantity
            )

    for product_id in deductions:
        base = state.find_product(product_id)
        if base is None or base.kind != KIND_SIMPLE:
            raise InvalidComponentError(
                "Invalid base product in the sale composition.",
                details={"product_id": product_id},
            )
    return deductions


def _check_stock(state: LedgerState, deductions: dict[str, int]) -> None:
    for product_id, deduction in deductions.items():
        base = state.find_product(product_id)
        if base.quantity_on_hand < deduction:
            raise InsufficientStockError(
                f"Insufficient stock for {base.name}.",
                details={
                    "product_id": base.id,
                    "requested_quantity": deduction,
                    "on_hand": base.quantity_on_hand,
                },
            )


def _plan_installments(
    config: InstallmentConfig | None,
    total: Decimal,
    sale_description: str,
    today: date,
) -> tuple[Decimal, list[_PlannedInstallment]]:
    """Return (down_payment, planned receivables) for an installment sale."""
    if config is None:
        raise MissingInstallmentConfigError("Installment configuration not provided.")

    count = config.count
    if isinstance(count, bool) or not isinstance(count, int) or count not in ALLOWED_INSTALLMENT_COUNTS:
        raise InvalidInstallmentCountError("Installments must be 1, 3, 4 or 6.")

    try:
        down_payment = round_money(config.down_payment if config.down_payment is not None else 0)
    except ValueError:
        raise InvalidAmountError("Down payment must be a number.")
    if down_payment < 0:
        raise InvalidAmountError("Down payment cannot be negative.")
    if down_payment > total:
        raise DownPaymentExceedsTotalError("Down payment cannot exceed the sale total.")

    financed = round_money(total - down_payment)
    if financed == 0:
        return down_payment, []

    if count == 1:
        if config.due_date is None or (isinstance(config.due_date, str) and not config.due_date.strip()):
            raise MissingDueDateError("Enter the due date for a single installment.")
        try:
            due_date = parse_calendar_date(config.due_date)
        except ValueError:
            raise InvalidDateError("Invalid due date. Use the YYYY-MM-DD format.")
        return down_payment, [
            _PlannedInstallment(financed, due_date, f"Sale ({sale_description}) (1/1)")
        ]

    due_day = config.due_day
    if isinstance(due_day, bool) or not isinstance(due_day, int) or not 1 <= due_day <= 31:
        raise InvalidDueDayError("Enter a valid due day (1-31).")

    planned = []
    for index, amount in enumerate(split_installments(financed, count)):
        planned.append(
            _PlannedInstallment(
                amount=amount,
                due_date=month_offset_date(today, index + 1, due_day),
                description=f"Sale ({sale_description}) ({index + 1}/{count})",
            )
        )
    return down_payment, planned


def register_sale(
    state: LedgerState,
    repository: LedgerRepository,
    request: SaleRequest | dict,
    *,
    now: datetime,
) -> SaleReceipt:
    if not isinstance(request, SaleRequest):
        request = SaleRequest.from_dict(request)
    quantities = _coalesce_items(request.items)
    lines = _resolve_lines(state, quantities)
    deductions = _base_deductions(state, lines)
    _check_stock(state, deductions)

    total = round_money(sum((to_decimal(p.sale_price) * q for p, q in lines), ZERO))

    if request.payment_mode not in PAYMENT_MODES:
        raise ValidationError("Payment mode must be 'cash' or 'installment'.")

    down_payment = ZERO
    planned: list[_PlannedInstallment] = []
    if request.payment_mode == PAYMENT_INSTALLMENT:
        sale_description = ", ".join(p.name for p, _ in lines)
        down_payment, planned = _plan_installments(
            request.installments, total, sale_description, now.date()
        )

    # Every check passed; from here on the sale is applied in full.
    for product_id, deduction in deductions.items():
        state.find_product(product_id).quantity_on_hand -= deduction

    moves: list[StockMove] = []
    for product, quantity in lines:
        if product.kind == KIND_SIMPLE:
            moves.append(StockMove(new_id(), product.id, MOVE_OUT, quantity, now, SALE_ORIGIN))
            continue
        for component in product.components:
            moves.append(
                StockMove(
                    new_id(),
                    component.product_id,
                    MOVE_OUT,
                    component.quantity * quantity,
                    now,
                    f"Sale of kit {product.name}",
                )
            )
    state.stock_moves[:0] = moves

    sale = Sale(
        id=new_id(),
        customer_id=request.customer_id,
        lines=tuple(SaleLine(p.id, q, p.sale_price) for p, q in lines),
        total=total,
        down_payment=down_payment,
        created_at=now,
        payment_mode=request.payment_mode,
    )
    state.sales.insert(0, sale)

    receivables = [
        Receivable(
            id=new_id(),
            customer_id=request.customer_id,
            description=p.description,
            amount=p.amount,
            due_date=p.due_date,
        )
        for p in planned
    ]
    state.receivables[:0] = receivables

    for product_id in deductions:
        repository.update_stock(product_id, state.find_product(product_id).quantity_on_hand)
    repository.create_stock_moves(moves)
    repository.create_sale(sale)
    if receivables:
        repository.create_receivables(receivables)

    logger.info(
        "Registered sale %s: %d lines, total %s, %d receivables",
        sale.id, len(sale.lines), total, len(receivables),
    )
    return SaleReceipt(sale=sale, stock_moves=tuple(moves), receivables=tuple(receivables))
