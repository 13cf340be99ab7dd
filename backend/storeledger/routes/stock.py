# Overview: Flask API routes for inbound stock entries and the stock move ledger.

from flask import Blueprint, request, jsonify

from .responses import error_response, get_ledger, internal_error, invalid_body, json_object

stock_bp = Blueprint("stock", __name__, url_prefix="/api/stock")


@stock_bp.post("/entries")
def create_stock_entry():
    """
    Receive stock from a supplier.

    Body: {product_id, quantity, supplier, unit_cost}

    A non-positive quantity is accepted as a no-op (200, nothing recorded).
    """
    data = json_object()
    if data is None:
        return invalid_body()
    try:
        result = get_ledger().add_stock_entry(
            data.get("product_id"),
            data.get("quantity"),
            data.get("supplier"),
            data.get("unit_cost"),
        )
    except Exception:
        return internal_error("add stock entry")

    if not result.ok:
        return error_response(result)
    if result.value is None:
        return jsonify({"stock_move": None, "payable": None}), 200
    move, payable = result.value
    return jsonify({"stock_move": move.to_dict(), "payable": payable.to_dict()}), 201


@stock_bp.get("/moves")
def list_stock_moves():
    """
    Query params:
    - product_id: filter to one product (optional)
    """
    product_id = request.args.get("product_id")
    moves = [
        m for m in get_ledger().stock_moves
        if product_id is None or m.product_id == product_id
    ]
    return jsonify({"stock_moves": [m.to_dict() for m in moves]})
