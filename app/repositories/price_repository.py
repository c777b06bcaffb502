"""
app/repositories/price_repository.py

Persistence layer for price entries.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy import Select, distinct, exists, func, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.prices import PriceExportFilters, PriceRecord
from app.repositories.errors import QueryError
from db.models.price import Price

_CENTS = Decimal("0.01")


class PriceRepository:
    """
    Repository for key lookups, inserts, aggregates and filtered reads of prices.

    Methods never commit; the caller owns the transaction (see ``transaction``).
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def transaction(self) -> Any:
        """
        Open the unit of work for one ingestion batch.

        Commits on normal exit and rolls back on any exception. When the
        session is already inside a transaction a SAVEPOINT is used so the
        batch still rolls back as one unit.
        """

        if self._session.in_transaction():
            return self._session.begin_nested()
        return self._session.begin()

    def exists(self, record: PriceRecord) -> bool:
        """
        Return True when a row with the record's ``(id, create_date)`` is stored.
        """

        stmt = select(
            exists().where(
                Price.id == record.id,
                Price.create_date == record.create_date,
            )
        )
        return bool(self._session.scalar(stmt))

    def insert(self, record: PriceRecord) -> None:
        self._session.execute(
            insert(Price).values(
                id=record.id,
                name=record.name,
                category=record.category,
                price=record.price.quantize(_CENTS, rounding=ROUND_HALF_UP),
                create_date=record.create_date,
            )
        )

    def count_all(self) -> int:
        return int(self._session.scalar(select(func.count()).select_from(Price)) or 0)

    def count_categories(self) -> int:
        stmt = select(func.count(distinct(Price.category)))
        return int(self._session.scalar(stmt) or 0)

    def sum_prices(self) -> Decimal:
        total = self._session.scalar(select(func.coalesce(func.sum(Price.price), 0)))
        return Decimal(str(total or 0)).quantize(_CENTS, rounding=ROUND_HALF_UP)

    def list_filtered(self, filters: PriceExportFilters) -> list[Price]:
        """
        Return every price matching all of *filters*, ordered by ``(create_date, id)``.

        Raises
        ------
        QueryError: on any store failure; no partial result is returned.
        """

        stmt = self._build_filtered_select(filters.normalized())
        try:
            return list(self._session.scalars(stmt).all())
        except SQLAlchemyError as exc:
            raise QueryError("Failed to query prices.") from exc

    @staticmethod
    def _build_filtered_select(filters: PriceExportFilters) -> Select[tuple[Price]]:
        stmt: Select[tuple[Price]] = select(Price)

        if filters.start_date is not None:
            stmt = stmt.where(Price.create_date >= filters.start_date)
        if filters.end_date is not None:
            stmt = stmt.where(Price.create_date <= filters.end_date)
        if filters.min_price is not None:
            stmt = stmt.where(Price.price >= filters.min_price)
        if filters.max_price is not None:
            stmt = stmt.where(Price.price <= filters.max_price)

        return stmt.order_by(Price.create_date.asc(), Price.id.asc())
