# Overview: Flask API routes for sales; parses the sale request and returns the receipt.

# backend/storeledger/routes/sales.py
"""Sales API routes"""

from flask import Blueprint, jsonify

from .responses import get_ledger, internal_error, invalid_body, json_object, result_response

sales_bp = Blueprint("sales", __name__, url_prefix="/api/sales")


@sales_bp.get("")
def list_sales():
    return jsonify({"sales": [s.to_dict() for s in get_ledger().sales]})


@sales_bp.post("")
def register_sale_route():
    """
    Register a sale.

    Body:
    {
      "customer_id": "...",
      "items": [{"product_id": "...", "quantity": 2}, ...],
      "payment_mode": "cash" | "installment",
      "installments": {"count": 3, "down_payment": "50.00", "due_day": 10}
    }

    Returns the sale, the stock moves and any receivables it generated.
    """
    data = json_object()
    if data is None:
        return invalid_body()
    try:
        result = get_ledger().register_sale(data)
    except Exception:
        return internal_error("register sale")
    return result_response(result, "receipt", 201)
