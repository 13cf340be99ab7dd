# Overview: Flask API routes for receivables, payables and the open-balance summary.

# backend/storeledger/routes/finance.py
"""
Receivables & payables routes.

Listed records carry an extra "effective_status": pending records whose due
date has passed read as "overdue". Stored status only ever moves
pending -> paid.
"""
from flask import Blueprint, request, jsonify

from ..money import format_money
from ..services.finance_service import effective_status, summarize
from ..time_utils import utcnow
from .responses import deleted_response, get_ledger, internal_error, invalid_body, json_object, result_response

finance_bp = Blueprint("finance", __name__, url_prefix="/api")


def _with_effective_status(record, today) -> dict:
    data = record.to_dict()
    data["effective_status"] = effective_status(record, today)
    return data


# ----------------------------------------------------------------------
# Receivables
# ----------------------------------------------------------------------

@finance_bp.get("/receivables")
def list_receivables():
    """
    Query params:
    - customer_id: filter to one customer (optional)
    """
    today = utcnow().date()
    customer_id = request.args.get("customer_id")
    records = [
        r for r in get_ledger().receivables
        if customer_id is None or r.customer_id == customer_id
    ]
    return jsonify({"receivables": [_with_effective_status(r, today) for r in records]})


@finance_bp.post("/receivables/<string:receivable_id>/pay")
def pay_receivable(receivable_id: str):
    try:
        result = get_ledger().mark_receivable_paid(receivable_id)
    except Exception:
        return internal_error("mark receivable paid")
    return result_response(result, "receivable")


@finance_bp.delete("/receivables/<string:receivable_id>")
def delete_receivable(receivable_id: str):
    try:
        result = get_ledger().remove_receivable(receivable_id)
    except Exception:
        return internal_error("remove receivable")
    return deleted_response(result)


# ----------------------------------------------------------------------
# Payables
# ----------------------------------------------------------------------

@finance_bp.get("/payables")
def list_payables():
    today = utcnow().date()
    return jsonify({"payables": [_with_effective_status(p, today) for p in get_ledger().payables]})


@finance_bp.post("/payables")
def create_payable():
    """
    Register a bill, tax or fixed expense.

    Body: {kind: "bill" | "tax" | "fixed", reference?, description, amount, due_date}
    """
    data = json_object()
    if data is None:
        return invalid_body()
    try:
        result = get_ledger().add_manual_payable(
            kind=data.get("kind"),
            reference=data.get("reference"),
            description=data.get("description"),
            amount=data.get("amount"),
            due_date=data.get("due_date"),
        )
    except Exception:
        return internal_error("add payable")
    return result_response(result, "payable", 201)


@finance_bp.put("/payables/<string:payable_id>")
def edit_payable(payable_id: str):
    data = json_object()
    if data is None:
        return invalid_body()
    try:
        result = get_ledger().update_payable(
            payable_id,
            supplier=data.get("supplier"),
            description=data.get("description"),
            amount=data.get("amount"),
            due_date=data.get("due_date"),
        )
    except Exception:
        return internal_error("update payable")
    return result_response(result, "payable")


@finance_bp.post("/payables/<string:payable_id>/pay")
def pay_payable(payable_id: str):
    try:
        result = get_ledger().mark_payable_paid(payable_id)
    except Exception:
        return internal_error("mark payable paid")
    return result_response(result, "payable")


@finance_bp.delete("/payables/<string:payable_id>")
def delete_payable(payable_id: str):
    try:
        result = get_ledger().remove_payable(payable_id)
    except Exception:
        return internal_error("remove payable")
    return deleted_response(result)


@finance_bp.get("/finance/summary")
def finance_summary():
    store = get_ledger()
    totals = summarize(store.receivables, store.payables, utcnow().date())
    return jsonify({"summary": {key: format_money(value) for key, value in totals.items()}})
