# Overview: Flask API routes for the customer registry.

from flask import Blueprint, jsonify

from .responses import deleted_response, get_ledger, internal_error, invalid_body, json_object, result_response

customers_bp = Blueprint("customers", __name__, url_prefix="/api/customers")


@customers_bp.get("")
def list_customers():
    return jsonify({"customers": [c.to_dict() for c in get_ledger().customers]})


@customers_bp.post("")
def create_customer():
    """
    Body: {name, phone?, status? ("new" | "returning" | "inactive"), notes?}
    """
    data = json_object()
    if data is None:
        return invalid_body()
    try:
        result = get_ledger().add_customer(
            name=data.get("name"),
            phone=data.get("phone"),
            status=data.get("status", "new"),
            notes=data.get("notes"),
        )
    except Exception:
        return internal_error("add customer")
    return result_response(result, "customer", 201)


@customers_bp.delete("/<string:customer_id>")
def delete_customer(customer_id: str):
    try:
        result = get_ledger().remove_customer(customer_id)
    except Exception:
        return internal_error("remove customer")
    return deleted_response(result)
