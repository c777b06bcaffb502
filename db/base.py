"""
db/base.py

Declarative base for all SQLAlchemy models.
"""

from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import BigInteger, Date, Numeric, Text
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Project-wide declarative base.
    All models must inherit from this class.

    Plain ``Mapped[...]`` annotations resolve to the store types below, so
    every price amount is ``NUMERIC(10, 2)`` and every identifier a ``BIGINT``.
    """

    type_annotation_map: dict[type, Any] = {
        int: BigInteger,
        str: Text,
        Decimal: Numeric(10, 2),
        date: Date,
    }
