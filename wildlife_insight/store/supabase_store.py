"""Supabase-backed record reader.

The hosted database exposes the dashboard tables through PostgREST.  The
supabase client is synchronous, so each query runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any

from wildlife_insight.domain.enums import RecordKind
from wildlife_insight.store.base import RecordQueryError, RecordReader, StoreUnavailableError

logger = logging.getLogger(__name__)


class SupabaseRecordStore(RecordReader):
    """Reads dashboard tables via the supabase-py client.

    The client is created lazily on first use.  Missing credentials or a
    client that cannot be constructed make the whole store unavailable.
    """

    def __init__(self, url: str, key: str, client: Any = None) -> None:
        self._url = url
        self._key = key
        self._client = client

    @property
    def backend_name(self) -> str:
        return "supabase"

    @property
    def client(self) -> Any:
        if self._client is None:
            if not self._url or not self._key:
                raise StoreUnavailableError(
                    "Supabase credentials not configured. Set WILDLIFE_SUPABASE_URL "
                    "and WILDLIFE_SUPABASE_KEY."
                )
            from supabase import create_client

            try:
                self._client = create_client(self._url, self._key)
            except Exception as exc:
                raise StoreUnavailableError(f"Cannot create Supabase client: {exc}") from exc
        return self._client

    async def fetch_since(self, kind: RecordKind, since: datetime) -> list[dict[str, Any]]:
        client = self.client
        return await asyncio.to_thread(self._query, client, kind, since)

    @staticmethod
    def _query(client: Any, kind: RecordKind, since: datetime) -> list[dict[str, Any]]:
        try:
            response = (
                client.table(kind.value)
                .select("*")
                .gte("created_at", since.isoformat())
                .execute()
            )
        except Exception as exc:
            raise RecordQueryError(kind, str(exc)) from exc
        rows = response.data or []
        logger.debug("Fetched %d %s row(s) since %s", len(rows), kind.value, since.isoformat())
        return rows
