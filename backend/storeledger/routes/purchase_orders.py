# Overview: Flask API routes for purchase-order drafts and finalized orders.

from flask import Blueprint, jsonify

from .responses import deleted_response, get_ledger, internal_error, invalid_body, json_object, result_response

purchase_orders_bp = Blueprint("purchase_orders", __name__, url_prefix="/api/purchase-orders")


@purchase_orders_bp.get("/items")
def list_items():
    return jsonify({"items": [i.to_dict() for i in get_ledger().purchase_order_items]})


@purchase_orders_bp.post("/items")
def create_item():
    data = json_object()
    if data is None:
        return invalid_body()
    try:
        result = get_ledger().add_purchase_order_item(data.get("name"), data.get("code"), data.get("quantity"))
    except Exception:
        return internal_error("add purchase order item")
    return result_response(result, "item", 201)


@purchase_orders_bp.patch("/items/<string:item_id>")
def edit_item(item_id: str):
    """
    Body: {quantity} to change the quantity, or {name, code} to relabel.
    """
    data = json_object()
    if data is None:
        return invalid_body()
    try:
        if "quantity" in data:
            result = get_ledger().update_purchase_order_item_quantity(item_id, data.get("quantity"))
        else:
            result = get_ledger().update_purchase_order_item(item_id, data.get("name"), data.get("code"))
    except Exception:
        return internal_error("update purchase order item")
    return result_response(result, "item")


@purchase_orders_bp.delete("/items/<string:item_id>")
def delete_item(item_id: str):
    try:
        result = get_ledger().remove_purchase_order_item(item_id)
    except Exception:
        return internal_error("remove purchase order item")
    return deleted_response(result)


@purchase_orders_bp.get("")
def list_orders():
    return jsonify({"purchase_orders": [o.to_dict() for o in get_ledger().purchase_orders]})


@purchase_orders_bp.post("")
def finalize_order():
    """Body: {item_ids: [...]}; the selected drafts move into a new order."""
    data = json_object()
    if data is None:
        return invalid_body()
    try:
        result = get_ledger().finalize_purchase_order(data.get("item_ids") or [])
    except Exception:
        return internal_error("finalize purchase order")
    return result_response(result, "purchase_order", 201)


@purchase_orders_bp.delete("/<string:order_id>")
def delete_order(order_id: str):
    try:
        result = get_ledger().delete_purchase_order(order_id)
    except Exception:
        return internal_error("delete purchase order")
    return deleted_response(result)
