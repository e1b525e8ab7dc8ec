"""Tests for the record stores."""

from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from tests.test_records import _NOW, _row, _sighting_row
from wildlife_insight.domain.enums import RecordKind
from wildlife_insight.store.base import RecordQueryError, StoreUnavailableError
from wildlife_insight.store.memory import InMemoryRecordStore
from wildlife_insight.store.supabase_store import SupabaseRecordStore


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


class TestInMemoryRecordStore:
    @pytest.mark.asyncio
    async def test_fetch_since_filters_by_created_at(self, store: InMemoryRecordStore) -> None:
        await store.insert(RecordKind.SIGHTINGS, _sighting_row(age=timedelta(days=1)))
        await store.insert(RecordKind.SIGHTINGS, _sighting_row(age=timedelta(days=10)))
        rows = await store.fetch_since(RecordKind.SIGHTINGS, _NOW - timedelta(days=7))
        assert len(rows) == 1

    @pytest.mark.asyncio
    async def test_lower_bound_is_inclusive(self, store: InMemoryRecordStore) -> None:
        await store.insert(RecordKind.TASKS, _row(age=timedelta(days=7)))
        rows = await store.fetch_since(RecordKind.TASKS, _NOW - timedelta(days=7))
        assert len(rows) == 1

    @pytest.mark.asyncio
    async def test_kinds_are_separate(self, store: InMemoryRecordStore) -> None:
        await store.insert(RecordKind.HAZARDS, _row())
        assert await store.count(RecordKind.HAZARDS) == 1
        assert await store.count(RecordKind.SIGHTINGS) == 0

    @pytest.mark.asyncio
    async def test_returned_rows_are_copies(self, store: InMemoryRecordStore) -> None:
        await store.insert(RecordKind.HAZARDS, _row())
        rows = await store.fetch_since(RecordKind.HAZARDS, _NOW - timedelta(days=2))
        rows[0]["status"] = "mutated"
        again = await store.fetch_since(RecordKind.HAZARDS, _NOW - timedelta(days=2))
        assert again[0]["status"] == "open"

    @pytest.mark.asyncio
    async def test_insert_requires_created_at(self, store: InMemoryRecordStore) -> None:
        with pytest.raises(ValueError):
            await store.insert(RecordKind.TASKS, {"title": "no timestamp"})


def _mock_supabase(rows: list[dict]) -> MagicMock:
    client = MagicMock()
    query = client.table.return_value.select.return_value.gte.return_value
    query.execute.return_value = SimpleNamespace(data=rows)
    return client


class TestSupabaseRecordStore:
    @pytest.mark.asyncio
    async def test_queries_table_with_gte(self) -> None:
        client = _mock_supabase([_sighting_row()])
        store = SupabaseRecordStore("https://x.supabase.co", "key", client=client)
        since = _NOW - timedelta(days=7)
        rows = await store.fetch_since(RecordKind.SIGHTINGS, since)
        assert len(rows) == 1
        client.table.assert_called_once_with("wildlife_sightings")
        client.table.return_value.select.assert_called_once_with("*")
        client.table.return_value.select.return_value.gte.assert_called_once_with(
            "created_at", since.isoformat(),
        )

    @pytest.mark.asyncio
    async def test_null_data_is_empty(self) -> None:
        store = SupabaseRecordStore("u", "k", client=_mock_supabase(None))
        assert await store.fetch_since(RecordKind.TASKS, _NOW) == []

    @pytest.mark.asyncio
    async def test_query_failure_raises_record_query_error(self) -> None:
        client = MagicMock()
        client.table.side_effect = RuntimeError("relation does not exist")
        store = SupabaseRecordStore("u", "k", client=client)
        with pytest.raises(RecordQueryError) as info:
            await store.fetch_since(RecordKind.HAZARDS, _NOW)
        assert info.value.kind == RecordKind.HAZARDS

    @pytest.mark.asyncio
    async def test_missing_credentials_unavailable(self) -> None:
        store = SupabaseRecordStore("", "")
        with pytest.raises(StoreUnavailableError):
            await store.fetch_since(RecordKind.SIGHTINGS, _NOW)


class TestInMemoryRowTimestamps:
    @pytest.mark.asyncio
    async def test_naive_created_at_is_taken_as_utc(self, store: InMemoryRecordStore) -> None:
        naive = (_NOW - timedelta(hours=2)).replace(tzinfo=None).isoformat()
        await store.insert(RecordKind.SIGHTINGS, _sighting_row(created_at=naive))
        await store.insert(RecordKind.SIGHTINGS, _sighting_row())
        rows = await store.fetch_since(RecordKind.SIGHTINGS, _NOW - timedelta(days=7))
        assert len(rows) == 2

    @pytest.mark.asyncio
    async def test_unparseable_created_at_skips_only_that_row(self, store: InMemoryRecordStore) -> None:
        for _ in range(3):
            await store.insert(RecordKind.SIGHTINGS, _sighting_row())
        await store.insert(RecordKind.SIGHTINGS, _sighting_row(created_at="yesterday-ish"))
        rows = await store.fetch_since(RecordKind.SIGHTINGS, _NOW - timedelta(days=7))
        assert len(rows) == 3

    @pytest.mark.asyncio
    async def test_naive_since_is_taken_as_utc(self, store: InMemoryRecordStore) -> None:
        await store.insert(RecordKind.TASKS, _row())
        since = (_NOW - timedelta(days=2)).replace(tzinfo=None)
        assert len(await store.fetch_since(RecordKind.TASKS, since)) == 1
