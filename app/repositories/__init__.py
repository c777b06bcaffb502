"""
app/repositories package marker.
"""

from app.repositories.errors import PriceStoreError, QueryError, TransactionError
from app.repositories.price_repository import PriceRepository

__all__ = [
    "PriceRepository",
    "PriceStoreError",
    "QueryError",
    "TransactionError",
]
