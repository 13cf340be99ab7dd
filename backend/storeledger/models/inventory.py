from __future__ import annotations

from ..entities import StockMove as StockMoveEntity
from ..extensions import db


class StockMove(db.Model):
    """
    Append-only stock ledger.

    DIRECTIONS:
    - in: supplier stock entry
    - out: sale (one row per simple line, one per component for kits)
    - adjustment: reserved, never written by the engine

    batch_no groups the moves written by one engine call so that a reload
    keeps them in the order they were produced.
    """
    __tablename__ = "stock_moves"
    __table_args__ = (
        db.Index("ix_stock_moves_batch", "batch_no"),
        {"sqlite_autoincrement": True},
    )

    pk = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(32), nullable=False, unique=True)
    batch_no = db.Column(db.Integer, nullable=False)

    product_id = db.Column(db.String(32), nullable=False, index=True)
    direction = db.Column(db.String(16), nullable=False)  # in, out, adjustment
    quantity = db.Column(db.Integer, nullable=False)
    origin = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime, nullable=False)

    @classmethod
    def from_entity(cls, move: StockMoveEntity, batch_no: int) -> "StockMove":
        return cls(
            id=move.id,
            batch_no=batch_no,
            product_id=move.product_id,
            direction=move.direction,
            quantity=move.quantity,
            origin=move.origin,
            created_at=move.created_at,
        )

    def to_entity(self) -> StockMoveEntity:
        return StockMoveEntity(
            id=self.id,
            product_id=self.product_id,
            direction=self.direction,
            quantity=self.quantity,
            created_at=self.created_at,
            origin=self.origin,
        )
