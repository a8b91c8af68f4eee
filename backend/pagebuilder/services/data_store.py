"""Generic table-level store over an AsyncSession.

Records go in and come out as plain dicts keyed by column name, so callers
stay agnostic of the ORM. Driver failures are translated into the domain
errors in ``pagebuilder.core.exceptions``; every write runs inside a
SAVEPOINT so a failed statement leaves the session usable for a refetch.
"""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pagebuilder.core.exceptions import InsertError, NotFoundError, UpstreamUnavailableError
from pagebuilder.models import Order, Page, PageComponent, Product

logger = logging.getLogger(__name__)

TABLES: dict[str, Table] = {
    "orders": Order.__table__,
    "pages": Page.__table__,
    "page_components": PageComponent.__table__,
    "products": Product.__table__,
}


class DataStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _table(name: str) -> Table:
        try:
            return TABLES[name]
        except KeyError:
            raise ValueError(f"Unknown table: {name}") from None

    async def select(
        self,
        table: str,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Equality-filtered select, optionally ordered and limited."""
        t = self._table(table)
        stmt = select(t)
        for column, value in (filters or {}).items():
            stmt = stmt.where(t.c[column] == value)
        if order_by is not None:
            col = t.c[order_by]
            stmt = stmt.order_by(col.desc() if descending else col.asc())
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as exc:
            raise UpstreamUnavailableError(f"select from {table} failed: {exc}") from exc
        return [dict(row._mapping) for row in result]

    async def insert(self, table: str, record: Mapping[str, Any]) -> dict[str, Any]:
        """Insert one record and return it with server-assigned fields."""
        t = self._table(table)
        stmt = insert(t).values(**record).returning(*t.c)
        try:
            async with self.db.begin_nested():
                result = await self.db.execute(stmt)
                row = result.one()
        except IntegrityError as exc:
            raise InsertError(f"insert into {table} rejected: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            raise UpstreamUnavailableError(f"insert into {table} failed: {exc}") from exc
        return dict(row._mapping)

    async def update(self, table: str, key: Any, values: Mapping[str, Any]) -> None:
        """Update the row with primary key ``key``; NotFoundError if it is gone."""
        t = self._table(table)
        stmt = update(t).where(t.c.id == key).values(**values)
        try:
            async with self.db.begin_nested():
                result = await self.db.execute(stmt)
        except SQLAlchemyError as exc:
            raise UpstreamUnavailableError(f"update of {table}/{key} failed: {exc}") from exc
        if result.rowcount == 0:
            raise NotFoundError(f"{table}/{key} not found")

    async def delete(self, table: str, key: Any) -> None:
        t = self._table(table)
        stmt = delete(t).where(t.c.id == key)
        try:
            async with self.db.begin_nested():
                result = await self.db.execute(stmt)
        except SQLAlchemyError as exc:
            raise UpstreamUnavailableError(f"delete of {table}/{key} failed: {exc}") from exc
        if result.rowcount == 0:
            raise NotFoundError(f"{table}/{key} not found")
        logger.debug("Deleted %s/%s", table, key)
