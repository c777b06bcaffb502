"""
Model package exports.

Import all SQLAlchemy models here so metadata registration works
without extra imports.
"""

from db.models.price import Price

__all__ = [
    "Price",
]
