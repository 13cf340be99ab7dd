# Overview: Derived stock for simple and bundle products.

"""
Kit stock derivation.

A bundle has no stock of its own. Its sellable quantity is

    min over components of floor(stock(component) / quantity_per_bundle)

where a missing component, or a component that is itself a bundle (nesting is
unsupported), counts as 0. A bundle with no components is never sellable.
Re-evaluated on every read; never cached or persisted.
"""

from __future__ import annotations

from typing import Iterable

from ..entities import Product, KIND_SIMPLE


def kit_stock(kit: Product, catalog: Iterable[Product]) -> int:
    if not kit.is_bundle or not kit.components:
        return 0

    by_id = {p.id: p for p in catalog}
    availability = []
    for component in kit.components:
        source = by_id.get(component.product_id)
        if source is None or source.kind != KIND_SIMPLE or component.quantity <= 0:
            availability.append(0)
            continue
        availability.append(source.quantity_on_hand // component.quantity)

    return min(availability) if availability else 0


def available_stock(product: Product, catalog: Iterable[Product]) -> int:
    if product.is_bundle:
        return kit_stock(product, catalog)
    return product.quantity_on_hand


def low_stock_products(catalog: list[Product]) -> list[Product]:
    """Simple products at or below their minimum quantity."""
    return [
        p for p in catalog
        if p.kind == KIND_SIMPLE and p.quantity_on_hand <= p.minimum_quantity
    ]
