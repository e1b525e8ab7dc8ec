"""Abstract base for record readers.

A record reader answers one question: "which rows of kind K were created
at or after instant X?".  Readers are read-only and every query is
independent and idempotent.

Architectural rules:
    1. fetch_since() returns raw row dicts; validation happens downstream.
    2. Row order is not guaranteed and must not be relied upon.
    3. A failing query raises RecordQueryError; a reader that cannot
       reach its backend at all raises StoreUnavailableError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from wildlife_insight.domain.enums import RecordKind


class StoreUnavailableError(Exception):
    """Raised when no connection to the record store can be made."""


class RecordQueryError(Exception):
    """Raised when a single query against the record store fails."""

    def __init__(self, kind: RecordKind, reason: str) -> None:
        self.kind = kind
        self.reason = reason
        super().__init__(f"Query on '{kind.value}' failed: {reason}")


class RecordReader(ABC):
    """Read-only access to the dashboard's record collections."""

    @abstractmethod
    async def fetch_since(self, kind: RecordKind, since: datetime) -> list[dict[str, Any]]:
        """Return every row of *kind* whose ``created_at`` is ≥ *since*.

        Raises:
            RecordQueryError: If this particular query fails.
            StoreUnavailableError: If the backend cannot be reached at all.
        """
        ...

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Human-readable name of the backing store."""
        ...
