"""
db/models/price.py

Persisted price entries.
One row per ``(id, create_date)`` natural key.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import Index, PrimaryKeyConstraint
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base

PRICE_KEY_CONSTRAINT = "pk_prices_id_create_date"


class Price(Base):
    """
    One ingested price entry.

    ``id`` is supplied by the uploading client and is not generated here.
    The composite primary key on ``(id, create_date)`` is the store-level
    uniqueness guarantee behind ingestion deduplication: two concurrent
    batches can never both persist the same key.
    """

    __tablename__ = "prices"

    id: Mapped[int] = mapped_column(autoincrement=False)
    name: Mapped[str]
    category: Mapped[str]
    price: Mapped[Decimal] = mapped_column(comment="Non-negative price rounded to cents")
    create_date: Mapped[date]

    __table_args__ = (
        PrimaryKeyConstraint("id", "create_date", name=PRICE_KEY_CONSTRAINT),
        Index("ix_prices_create_date_id", "create_date", "id"),
        Index("ix_prices_price", "price"),
    )
