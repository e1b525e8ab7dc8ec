"""Timezone-aware clock utilities.

All timestamps in wildlife-insight MUST be UTC-aware.  Components that need
"now" take a Clock argument so tests can pin time without patching.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(instant: datetime) -> datetime:
    """Return *instant* as an aware datetime; naive values are taken as UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


def fixed_clock(instant: datetime) -> Clock:
    """Return a clock frozen at *instant* (naive values are taken as UTC)."""
    instant = ensure_utc(instant)
    return lambda: instant
