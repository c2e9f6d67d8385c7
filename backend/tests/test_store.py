"""
Tests for the SQLAlchemy store: result reporting and duplicate-key mapping.
"""

import sqlite3

import pytest
from sqlalchemy.exc import IntegrityError

from event_admin.infrastructure.sqlalchemy_store import SqlAlchemyStore, store_error_from
from event_admin.models import Event
from event_admin.services.interfaces.store import StoreError, UNIQUE_VIOLATION


class FakePgError(Exception):
    sqlstate = "23505"


class WrappedDriverError(Exception):
    """Adapter error whose SQLSTATE lives on the chained driver exception."""


def test_postgres_sqlstate_is_kept():
    error = store_error_from(IntegrityError("INSERT", {}, FakePgError("duplicate key value")))
    assert error == StoreError(message="duplicate key value", code=UNIQUE_VIOLATION)


def test_sqlstate_found_on_chained_driver_error():
    wrapped = WrappedDriverError("duplicate key value")
    wrapped.__cause__ = FakePgError("duplicate key value")

    error = store_error_from(IntegrityError("INSERT", {}, wrapped))

    assert error.code == UNIQUE_VIOLATION


def test_sqlite_unique_failure_maps_to_unique_violation():
    orig = sqlite3.IntegrityError("UNIQUE constraint failed: events.slug")
    error = store_error_from(IntegrityError("INSERT", {}, orig))
    assert error.code == UNIQUE_VIOLATION


def test_other_integrity_errors_have_no_conflict_code():
    orig = sqlite3.IntegrityError("NOT NULL constraint failed: events.title")
    error = store_error_from(IntegrityError("INSERT", {}, orig))
    assert error.code is None
    assert "NOT NULL" in error.message


def test_default_duplicate_detection():
    store = SqlAlchemyStore(session=None)
    assert store.is_duplicate_key_conflict(StoreError(message="dup", code=UNIQUE_VIOLATION))
    assert not store.is_duplicate_key_conflict(StoreError(message="fk", code="23503"))
    assert not store.is_duplicate_key_conflict(None)


@pytest.mark.asyncio
async def test_insert_generates_id_and_defaults(store: SqlAlchemyStore):
    result = await store.insert("events", {"title": "Demo Day", "slug": "demo-day", "venue": None})

    assert result.error is None
    assert result.data["id"]
    assert result.data["title"] == "Demo Day"
    assert result.data["is_gated"] is False
    assert result.data["venue"] is None
    assert result.data["created_at"] is not None


@pytest.mark.asyncio
async def test_insert_duplicate_reports_conflict(store: SqlAlchemyStore):
    await store.insert("events", {"title": "Demo Day", "slug": "demo-day"})

    result = await store.insert("events", {"title": "Demo Day again", "slug": "demo-day"})

    assert result.data is None
    assert store.is_duplicate_key_conflict(result.error)

    # The session is still usable after the failed write
    follow_up = await store.select_one("events", {"slug": "demo-day"})
    assert follow_up.data["title"] == "Demo Day"


@pytest.mark.asyncio
async def test_update_returns_matched_rows(store: SqlAlchemyStore, test_event):
    result = await store.update("events", {"venue": "Hall B"}, {"id": test_event.id})

    assert result.error is None
    assert len(result.data) == 1
    assert result.data[0]["venue"] == "Hall B"


@pytest.mark.asyncio
async def test_update_without_match_returns_no_rows(store: SqlAlchemyStore):
    result = await store.update("events", {"venue": "Hall B"}, {"id": "missing"})

    assert result.error is None
    assert result.data == []


@pytest.mark.asyncio
async def test_select_one_without_match(store: SqlAlchemyStore):
    result = await store.select_one("eventsregistrations", {"event_id": "missing"})
    assert result.data is None
    assert result.error is None


@pytest.mark.asyncio
async def test_select_one_with_several_matches_is_an_error(store: SqlAlchemyStore, test_event):
    for application_id in ("A1", "A2"):
        await store.insert("eventsregistrations", {"event_id": test_event.id, "application_id": application_id})

    result = await store.select_one("eventsregistrations", {"event_id": test_event.id})

    assert result.data is None
    assert result.error is not None


@pytest.mark.asyncio
async def test_unknown_table(store: SqlAlchemyStore):
    with pytest.raises(ValueError, match="Unknown table"):
        await store.select_one("bookings", {"id": 1})


def test_slug_constraint_matches_migration_name():
    names = {constraint.name for constraint in Event.__table__.constraints}
    assert "uq_events_slug" in names
    assert not Event.__table__.c.slug.unique
