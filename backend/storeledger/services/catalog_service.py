# Overview: Service-layer operations for the catalog; categories, brands, products and kits.

"""
Catalog registration & validation.

DESIGN:
- Categories and brands are plain strings, unique case-insensitively.
- Products store category/brand by value, so renames cascade by rewriting
  every product that carries the old name.
- Removals do not check whether products (or historical sales) still
  reference the removed entity. Orphaned references are tolerated.
"""

from __future__ import annotations

import logging

from ..entities import KIND_BUNDLE, KIND_SIMPLE, KitComponent, Product
from ..validation import (
    DuplicateError,
    EmptyCompositionError,
    InvalidComponentError,
    NegativeQuantityError,
    NotFoundError,
    ValidationError,
    coerce_int,
    require_positive_amount,
    require_text,
)
from .repository import LedgerRepository
from .state import LedgerState, new_id, same_name

logger = logging.getLogger(__name__)

# (collection attribute, label, repository suffix)
_CATEGORY = ("categories", "category", "category")
_BRAND = ("brands", "brand", "brand")


def _add_name(state: LedgerState, repository: LedgerRepository, table, name) -> str:
    attr, label, suffix = table
    normalized = require_text(name, f"Enter the {label} name.")
    names = getattr(state, attr)
    if any(same_name(existing, normalized) for existing in names):
        raise DuplicateError(f"The {label} '{normalized}' is already registered.")

    names.insert(0, normalized)
    getattr(repository, f"add_{suffix}")(normalized)
    return normalized


def _rename(state: LedgerState, repository: LedgerRepository, table, old_name, new_name) -> str:
    attr, label, suffix = table
    normalized = require_text(new_name, f"Enter the {label} name.")
    names = getattr(state, attr)
    if old_name not in names:
        raise NotFoundError(f"The {label} '{old_name}' does not exist.")
    if any(same_name(existing, normalized) and existing != old_name for existing in names):
        raise DuplicateError(f"The {label} '{normalized}' is already registered.")

    names[names.index(old_name)] = normalized
    for product in state.products:
        if getattr(product, label) == old_name:
            setattr(product, label, normalized)
    getattr(repository, f"rename_{suffix}")(old_name, normalized)
    return normalized


def _remove(state: LedgerState, repository: LedgerRepository, table, name) -> None:
    attr, label, suffix = table
    names = getattr(state, attr)
    if name not in names:
        raise NotFoundError(f"The {label} '{name}' does not exist.")
    names.remove(name)
    getattr(repository, f"delete_{suffix}")(name)


def add_category(state: LedgerState, repository: LedgerRepository, name: str) -> str:
    return _add_name(state, repository, _CATEGORY, name)


def add_brand(state: LedgerState, repository: LedgerRepository, name: str) -> str:
    return _add_name(state, repository, _BRAND, name)


def update_category(state: LedgerState, repository: LedgerRepository, old_name: str, new_name: str) -> str:
    """Rename a category and rewrite it on every product that uses it."""
    return _rename(state, repository, _CATEGORY, old_name, new_name)


def update_brand(state: LedgerState, repository: LedgerRepository, old_name: str, new_name: str) -> str:
    """Rename a brand and rewrite it on every product that uses it."""
    return _rename(state, repository, _BRAND, old_name, new_name)


def remove_category(state: LedgerState, repository: LedgerRepository, name: str) -> None:
    _remove(state, repository, _CATEGORY, name)


def remove_brand(state: LedgerState, repository: LedgerRepository, name: str) -> None:
    _remove(state, repository, _BRAND, name)


def _validate_common(payload: dict, noun: str) -> dict:
    name = require_text(payload.get("name"), f"Enter the {noun} name.")
    category = require_text(payload.get("category"), f"Select a category for the {noun}.")
    brand = require_text(payload.get("brand"), f"Select a brand for the {noun}.")
    price = require_positive_amount(payload.get("sale_price"), "Sale price must be greater than zero.")
    minimum = coerce_int(payload.get("minimum_quantity", 0), "minimum_quantity")
    if minimum < 0:
        raise NegativeQuantityError("Stock quantities cannot be negative.")

    consumption_days = payload.get("consumption_days")
    if consumption_days is not None:
        consumption_days = coerce_int(consumption_days, "consumption_days")
        if consumption_days <= 0:
            raise ValidationError("consumption_days must be a positive number of days.")

    return {
        "name": name,
        "category": category,
        "brand": brand,
        "sale_price": price,
        "minimum_quantity": minimum,
        "consumption_days": consumption_days,
    }


def add_product(state: LedgerState, repository: LedgerRepository, payload: dict) -> Product:
    """
    Register a SIMPLE product.

    payload keys: name, category, brand, sale_price, quantity_on_hand,
    minimum_quantity, consumption_days (optional).
    """
    fields = _validate_common(payload, "product")
    on_hand = coerce_int(payload.get("quantity_on_hand", 0), "quantity_on_hand")
    if on_hand < 0:
        raise NegativeQuantityError("Stock quantities cannot be negative.")

    product = Product(
        id=new_id(),
        kind=KIND_SIMPLE,
        quantity_on_hand=on_hand,
        **fields,
    )
    state.products.insert(0, product)
    repository.create_product(product)
    logger.info("Registered product %s (%s)", product.id, product.name)
    return product


def add_kit(state: LedgerState, repository: LedgerRepository, payload: dict) -> Product:
    """
    Register a BUNDLE product.

    payload["components"] is a list of {product_id, quantity}. Every
    component must be an existing SIMPLE product with a positive per-bundle
    quantity. The kit's own on-hand quantity is fixed at 0.
    """
    fields = _validate_common(payload, "kit")

    raw_components = payload.get("components") or []
    if not raw_components:
        raise EmptyCompositionError("Add at least one product to the kit.")

    components = []
    for raw in raw_components:
        if not isinstance(raw, dict):
            raise InvalidComponentError("The kit contains an invalid product.")
        product_id = raw.get("product_id")
        source = state.find_product(product_id)
        quantity = raw.get("quantity")
        valid_quantity = isinstance(quantity, int) and not isinstance(quantity, bool) and quantity > 0
        if source is None or source.kind != KIND_SIMPLE or not valid_quantity:
            raise InvalidComponentError(
                "The kit contains an invalid product.",
                details={"product_id": product_id},
            )
        components.append(KitComponent(product_id=source.id, quantity=quantity))

    kit = Product(
        id=new_id(),
        kind=KIND_BUNDLE,
        quantity_on_hand=0,
        components=tuple(components),
        **fields,
    )
    state.products.insert(0, kit)
    repository.create_product(kit)
    logger.info("Registered kit %s (%s) with %d components", kit.id, kit.name, len(components))
    return kit


def remove_product(state: LedgerState, repository: LedgerRepository, product_id: str) -> None:
    product = state.find_product(product_id)
    if product is None:
        raise NotFoundError("Product not found.")
    state.products.remove(product)
    repository.delete_product(product_id)
