# Overview: Flask API routes for the catalog; categories, brands, products and kits.

# backend/storeledger/routes/catalog.py
"""
Catalog routes.

Products are serialized with an extra "available" field: on-hand for simple
products, derived availability for kits.
"""
from flask import Blueprint, request, jsonify

from ..services.stock_service import low_stock_products
from .responses import deleted_response, get_ledger, internal_error, invalid_body, json_object, result_response

catalog_bp = Blueprint("catalog", __name__, url_prefix="/api")


def _product_payload(store, product) -> dict:
    data = product.to_dict()
    data["available"] = store.get_product_stock(product.id)
    return data


# ----------------------------------------------------------------------
# Categories & brands
# ----------------------------------------------------------------------

@catalog_bp.get("/categories")
def list_categories():
    return jsonify({"categories": get_ledger().categories})


@catalog_bp.post("/categories")
def create_category():
    data = json_object()
    if data is None:
        return invalid_body()
    try:
        result = get_ledger().add_category(data.get("name"))
    except Exception:
        return internal_error("add category")
    return result_response(result, "category", 201)


@catalog_bp.put("/categories/<string:name>")
def rename_category(name: str):
    data = json_object()
    if data is None:
        return invalid_body()
    try:
        result = get_ledger().update_category(name, data.get("name"))
    except Exception:
        return internal_error("rename category")
    return result_response(result, "category")


@catalog_bp.delete("/categories/<string:name>")
def delete_category(name: str):
    try:
        result = get_ledger().remove_category(name)
    except Exception:
        return internal_error("remove category")
    return deleted_response(result)


@catalog_bp.get("/brands")
def list_brands():
    return jsonify({"brands": get_ledger().brands})


@catalog_bp.post("/brands")
def create_brand():
    data = json_object()
    if data is None:
        return invalid_body()
    try:
        result = get_ledger().add_brand(data.get("name"))
    except Exception:
        return internal_error("add brand")
    return result_response(result, "brand", 201)


@catalog_bp.put("/brands/<string:name>")
def rename_brand(name: str):
    data = json_object()
    if data is None:
        return invalid_body()
    try:
        result = get_ledger().update_brand(name, data.get("name"))
    except Exception:
        return internal_error("rename brand")
    return result_response(result, "brand")


@catalog_bp.delete("/brands/<string:name>")
def delete_brand(name: str):
    try:
        result = get_ledger().remove_brand(name)
    except Exception:
        return internal_error("remove brand")
    return deleted_response(result)


# ----------------------------------------------------------------------
# Products & kits
# ----------------------------------------------------------------------

@catalog_bp.get("/products")
def list_products():
    """
    List the catalog, newest first.

    Query params:
    - kind: "simple" | "bundle" (optional)
    """
    store = get_ledger()
    kind = request.args.get("kind")
    products = [p for p in store.products if kind is None or p.kind == kind]
    return jsonify({"products": [_product_payload(store, p) for p in products]})


@catalog_bp.get("/products/low-stock")
def list_low_stock():
    store = get_ledger()
    products = low_stock_products(store.products)
    return jsonify({"products": [_product_payload(store, p) for p in products]})


@catalog_bp.get("/products/<string:product_id>")
def get_product(product_id: str):
    store = get_ledger()
    product = store.find_product(product_id)
    if product is None:
        return jsonify({"error": "Product not found.", "kind": "NotFoundError"}), 404
    return jsonify({"product": _product_payload(store, product)})


@catalog_bp.post("/products")
def create_product():
    data = json_object()
    if data is None:
        return invalid_body()
    try:
        result = get_ledger().add_product(data)
    except Exception:
        return internal_error("add product")
    return result_response(result, "product", 201)


@catalog_bp.post("/kits")
def create_kit():
    data = json_object()
    if data is None:
        return invalid_body()
    try:
        result = get_ledger().add_kit(data)
    except Exception:
        return internal_error("add kit")
    return result_response(result, "product", 201)


@catalog_bp.delete("/products/<string:product_id>")
def delete_product(product_id: str):
    try:
        result = get_ledger().remove_product(product_id)
    except Exception:
        return internal_error("remove product")
    return deleted_response(result)
