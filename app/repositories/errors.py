"""
Repository-layer exceptions for the price store.
"""

from __future__ import annotations


class PriceStoreError(Exception):
    """Base exception for price store failures."""


class QueryError(PriceStoreError):
    """Raised when a read against the price store fails."""


class TransactionError(PriceStoreError):
    """Raised when an ingestion transaction fails and is rolled back."""
