"""
SQLAlchemy implementation of the table store.

Each write runs as its own transaction: execute, commit, and on failure
roll back and report the error as a StoreResult instead of raising. This
keeps the session usable for the follow-up read after a duplicate-key
conflict.

Duplicate-key mapping:
  PostgreSQL reports SQLSTATE 23505 (asyncpg `sqlstate`, psycopg `pgcode`).
  SQLite has no SQLSTATE; its "UNIQUE constraint failed" integrity errors
  are mapped onto 23505 so the writers see one signal for both.
"""

from typing import Any, Mapping, Optional

from sqlalchemy import Table, insert, select, update
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from event_admin.models import Event, Registration
from event_admin.services.interfaces.store import Store, StoreError, StoreResult, UNIQUE_VIOLATION

TABLES: dict[str, Table] = {
    "events": Event.__table__,
    "eventsregistrations": Registration.__table__,
}


def _sqlstate(orig: Any) -> Optional[str]:
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return str(code)
    return None


def store_error_from(exc: DBAPIError) -> StoreError:
    orig = exc.orig if exc.orig is not None else exc
    message = str(orig)
    code = _sqlstate(orig)
    if code is None and "UNIQUE constraint failed" in message:
        code = UNIQUE_VIOLATION
    return StoreError(message=message, code=code)


class SqlAlchemyStore(Store):
    """Store backed by an AsyncSession; one instance per request."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _table(self, name: str) -> Table:
        try:
            return TABLES[name]
        except KeyError:
            raise ValueError(f"Unknown table: {name}") from None

    @staticmethod
    def _where(table: Table, filters: Mapping[str, Any]) -> list:
        return [table.c[column] == value for column, value in filters.items()]

    async def _fail(self, exc: SQLAlchemyError) -> StoreResult:
        await self.session.rollback()
        if isinstance(exc, DBAPIError):
            return StoreResult(error=store_error_from(exc))
        return StoreResult(error=StoreError(message=str(exc)))

    async def insert(self, table: str, row: Mapping[str, Any]) -> StoreResult:
        target = self._table(table)
        # Omitted keys fall back to column defaults (generated id, timestamps)
        values = {key: value for key, value in row.items() if value is not None}
        try:
            result = await self.session.execute(
                insert(target).values(**values).returning(*target.c)
            )
            created = dict(result.mappings().one())
            await self.session.commit()
        except SQLAlchemyError as e:
            return await self._fail(e)
        return StoreResult(data=created)

    async def update(
        self,
        table: str,
        changes: Mapping[str, Any],
        filters: Mapping[str, Any],
    ) -> StoreResult:
        target = self._table(table)
        try:
            result = await self.session.execute(
                update(target)
                .where(*self._where(target, filters))
                .values(**changes)
                .returning(*target.c)
            )
            updated = [dict(row) for row in result.mappings().all()]
            await self.session.commit()
        except SQLAlchemyError as e:
            return await self._fail(e)
        return StoreResult(data=updated)

    async def select_one(self, table: str, filters: Mapping[str, Any]) -> StoreResult:
        target = self._table(table)
        try:
            result = await self.session.execute(
                select(target).where(*self._where(target, filters)).limit(2)
            )
            rows = result.mappings().all()
        except SQLAlchemyError as e:
            return await self._fail(e)

        if len(rows) > 1:
            return StoreResult(error=StoreError(message="Multiple rows returned for a single-row read"))
        return StoreResult(data=dict(rows[0]) if rows else None)
