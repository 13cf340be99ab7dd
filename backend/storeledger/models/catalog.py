from __future__ import annotations

from ..entities import KIND_SIMPLE, KitComponent, Product as ProductEntity
from ..extensions import db
from ..money import from_cents, to_cents


class Category(db.Model):
    """
    Category names, stored by value on products.

    Uniqueness is case-insensitive and enforced by the engine, not here
    (SQLite's default collation is case-sensitive).
    """
    __tablename__ = "categories"
    __table_args__ = ({"sqlite_autoincrement": True},)

    pk = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False, unique=True)


class Brand(db.Model):
    __tablename__ = "brands"
    __table_args__ = ({"sqlite_autoincrement": True},)

    pk = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False, unique=True)


class Product(db.Model):
    """
    Sellable catalog entry, simple or bundle (kit).

    STOCK:
    - quantity_on_hand is authoritative for simple products.
    - Kits keep 0 here; availability is derived from components on read.

    category/brand are denormalized names (no FK); renames rewrite them.
    """
    __tablename__ = "products"
    __table_args__ = (
        db.Index("ix_products_kind", "kind"),
        {"sqlite_autoincrement": True},
    )

    pk = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(32), nullable=False, unique=True)

    name = db.Column(db.String(255), nullable=False)
    kind = db.Column(db.String(16), nullable=False, default=KIND_SIMPLE)  # simple, bundle
    category = db.Column(db.String(128), nullable=False)
    brand = db.Column(db.String(128), nullable=False)

    quantity_on_hand = db.Column(db.Integer, nullable=False, default=0)
    minimum_quantity = db.Column(db.Integer, nullable=False, default=0)

    # Authoritative storage in cents
    sale_price_cents = db.Column(db.Integer, nullable=False)
    consumption_days = db.Column(db.Integer, nullable=True)

    components = db.relationship(
        "KitItem",
        order_by="KitItem.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r} kind={self.kind}>"

    @classmethod
    def from_entity(cls, product: ProductEntity) -> "Product":
        row = cls(id=product.id)
        row.apply(product)
        row.components = [
            KitItem(position=index, component_product_id=c.product_id, quantity=c.quantity)
            for index, c in enumerate(product.components)
        ]
        return row

    def apply(self, product: ProductEntity) -> None:
        self.name = product.name
        self.kind = product.kind
        self.category = product.category
        self.brand = product.brand
        self.quantity_on_hand = product.quantity_on_hand
        self.minimum_quantity = product.minimum_quantity
        self.sale_price_cents = to_cents(product.sale_price)
        self.consumption_days = product.consumption_days

    def to_entity(self) -> ProductEntity:
        return ProductEntity(
            id=self.id,
            name=self.name,
            kind=self.kind,
            category=self.category,
            brand=self.brand,
            quantity_on_hand=self.quantity_on_hand,
            minimum_quantity=self.minimum_quantity,
            sale_price=from_cents(self.sale_price_cents),
            consumption_days=self.consumption_days,
            components=tuple(
                KitComponent(product_id=item.component_product_id, quantity=item.quantity)
                for item in self.components
            ),
        )


class KitItem(db.Model):
    """
    One component line of a kit.

    component_product_id has no FK: deleting a base product leaves the kit
    pointing at a missing component, which derives to zero availability.
    """
    __tablename__ = "kit_items"
    __table_args__ = (
        db.UniqueConstraint("kit_id", "position", name="uq_kit_items_kit_position"),
        {"sqlite_autoincrement": True},
    )

    pk = db.Column(db.Integer, primary_key=True)
    kit_id = db.Column(db.String(32), db.ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False)
    component_product_id = db.Column(db.String(32), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
