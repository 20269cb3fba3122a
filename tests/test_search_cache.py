"""Tests for the SQL-backed search cache store and its model."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from repairhub.core.exceptions import CacheWriteFailure, ConfigurationFailure
from repairhub.models.search_cache import SearchCacheEntry
from repairhub.services.search.cache import SqlSearchCacheStore

from tests.conftest import FIXED_NOW, make_item

# ── Helpers ────────────────────────────────────────────────────────


def _entry(title: str, source: str = "guide-source", score: int = 50) -> SearchCacheEntry:
    return SearchCacheEntry(
        query="fan",
        title=title,
        source_url=f"https://example.com/{title}",
        image_url=None,
        source_name=source,
        description=f"About {title}",
        relevance_score=score,
        position=0,
        cached_until=FIXED_NOW + timedelta(hours=1),
    )


def _mock_session(execute_result=None, execute_error: Exception | None = None):
    db = MagicMock()
    db.execute = AsyncMock(return_value=execute_result, side_effect=execute_error)

    tx = MagicMock()
    tx.__aenter__ = AsyncMock(return_value=tx)
    tx.__aexit__ = AsyncMock(return_value=False)
    db.begin = MagicMock(return_value=tx)

    session_cm = MagicMock()
    session_cm.__aenter__ = AsyncMock(return_value=db)
    session_cm.__aexit__ = AsyncMock(return_value=False)
    session_maker = MagicMock(return_value=session_cm)
    return db, session_maker


def _rows_result(entries: list[SearchCacheEntry]):
    result = MagicMock()
    result.scalars.return_value.all.return_value = entries
    return result


# ── Lookup ────────────────────────────────────────────────────────


class TestLookup:
    @pytest.mark.asyncio
    async def test_maps_rows_to_items(self):
        db, maker = _mock_session(_rows_result([_entry("Fan blade", score=120), _entry("Fan noise", "forum-source", 90)]))
        store = SqlSearchCacheStore(lambda: maker)

        items = await store.lookup("fan", FIXED_NOW)

        assert [i.title for i in items] == ["Fan blade", "Fan noise"]
        assert items[1].source_name == "forum-source"
        assert items[0].relevance_score == 120
        assert items[0].description == "About Fan blade"

    @pytest.mark.asyncio
    async def test_query_filters_on_key_and_expiry(self):
        db, maker = _mock_session(_rows_result([]))
        store = SqlSearchCacheStore(lambda: maker)

        await store.lookup("fan", FIXED_NOW)

        stmt = db.execute.call_args[0][0]
        sql = str(stmt.compile(dialect=postgresql.dialect()))
        assert "web_search_results.query = " in sql
        assert "web_search_results.cached_until > " in sql
        assert "ORDER BY web_search_results.relevance_score DESC" in sql

    @pytest.mark.asyncio
    async def test_read_error_is_a_miss(self):
        _, maker = _mock_session(execute_error=OperationalError("SELECT", {}, Exception("down")))
        store = SqlSearchCacheStore(lambda: maker)

        assert await store.lookup("fan", FIXED_NOW) == []

    @pytest.mark.asyncio
    async def test_missing_configuration_propagates(self):
        def provider():
            raise ConfigurationFailure("Missing database configuration (DATABASE_URL)")

        store = SqlSearchCacheStore(provider)

        with pytest.raises(ConfigurationFailure):
            await store.lookup("fan", FIXED_NOW)


# ── Insert ────────────────────────────────────────────────────────


class TestInsert:
    @pytest.mark.asyncio
    async def test_bulk_insert_rows(self):
        db, maker = _mock_session()
        store = SqlSearchCacheStore(lambda: maker)
        until = FIXED_NOW + timedelta(hours=24)

        await store.insert("fan", [make_item("a", score=30), make_item("b", "video-source", score=20)], until)

        assert db.execute.await_count == 1
        rows = db.execute.call_args[0][1]
        assert [r["title"] for r in rows] == ["a", "b"]
        assert [r["position"] for r in rows] == [0, 1]
        assert all(r["query"] == "fan" and r["cached_until"] == until for r in rows)
        assert rows[1]["source_name"] == "video-source"
        assert rows[0]["relevance_score"] == 30
        db.begin.assert_called_once()

    @pytest.mark.asyncio
    async def test_empty_insert_skips_session(self):
        db, maker = _mock_session()
        store = SqlSearchCacheStore(lambda: maker)

        await store.insert("fan", [], FIXED_NOW)

        maker.assert_not_called()

    @pytest.mark.asyncio
    async def test_write_error_raises_cache_write_failure(self):
        _, maker = _mock_session(execute_error=OperationalError("INSERT", {}, Exception("disk full")))
        store = SqlSearchCacheStore(lambda: maker)

        with pytest.raises(CacheWriteFailure):
            await store.insert("fan", [make_item("a")], FIXED_NOW)


# ── Engine configuration ──────────────────────────────────────────


class TestEngineConfiguration:
    def test_missing_database_url(self):
        from repairhub import database

        database.get_engine.cache_clear()
        try:
            with patch("repairhub.database.get_settings") as mock_settings:
                mock_settings.return_value.database_url = ""
                with pytest.raises(ConfigurationFailure):
                    database.get_engine()
        finally:
            database.get_engine.cache_clear()


# ── Model ─────────────────────────────────────────────────────────


class TestSearchCacheEntryModel:
    def test_table_name(self):
        assert SearchCacheEntry.__tablename__ == "web_search_results"

    def test_fields(self):
        columns = {c.name for c in SearchCacheEntry.__table__.columns}
        assert columns == {
            "id",
            "query",
            "title",
            "source_url",
            "image_url",
            "source_name",
            "description",
            "relevance_score",
            "position",
            "cached_until",
            "created_at",
        }

    def test_lookup_index(self):
        indexes = {ix.name: [c.name for c in ix.columns] for ix in SearchCacheEntry.__table__.indexes}
        assert indexes["ix_web_search_results_lookup"] == ["query", "cached_until"]
