"""In-memory record store with async-safe access.

Used for local runs and tests.  An asyncio.Lock guards all access so
concurrent period fetches never observe a half-applied insert.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any

from wildlife_insight.domain.enums import RecordKind
from wildlife_insight.foundation.clock import ensure_utc
from wildlife_insight.store.base import RecordReader

logger = logging.getLogger(__name__)


def _parse_created_at(value: Any) -> datetime:
    """Parse a row timestamp; naive values are taken as UTC.

    Raises:
        ValueError: If the value is not an ISO-8601 timestamp.
    """
    if not isinstance(value, datetime):
        value = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return ensure_utc(value)


class InMemoryRecordStore(RecordReader):
    """Async-safe, in-memory store of raw record rows keyed by kind."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._rows: dict[RecordKind, list[dict[str, Any]]] = {kind: [] for kind in RecordKind}

    @property
    def backend_name(self) -> str:
        return "memory"

    async def insert(self, kind: RecordKind, row: dict[str, Any]) -> None:
        """Append a row.  ``created_at`` is required."""
        if "created_at" not in row:
            raise ValueError("row must carry a created_at timestamp")
        async with self._lock:
            self._rows[kind].append(dict(row))
            logger.debug("Inserted %s row (total=%d)", kind.value, len(self._rows[kind]))

    async def fetch_since(self, kind: RecordKind, since: datetime) -> list[dict[str, Any]]:
        since = ensure_utc(since)
        matched: list[dict[str, Any]] = []
        async with self._lock:
            for row in self._rows[kind]:
                try:
                    created_at = _parse_created_at(row["created_at"])
                except ValueError as exc:
                    logger.warning("Skipping %s row %s with bad created_at: %s",
                                   kind.value, row.get("id", "?"), exc)
                    continue
                if created_at >= since:
                    matched.append(dict(row))
        return matched

    async def count(self, kind: RecordKind) -> int:
        async with self._lock:
            return len(self._rows[kind])
