"""Rolling lookback windows used by the daily analysis.

Each period is "the last N days up to now".  Periods overlap by
construction: a longer window always contains a shorter one.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import BaseModel, Field

# (name, label, span in days) in declaration order.
PERIOD_SPANS: tuple[tuple[str, str, int], ...] = (
    ("last_2_days", "last 2 days", 2),
    ("last_3_days", "last 3 days", 3),
    ("last_7_days", "last 7 days", 7),
    ("last_30_days", "last 30 days", 30),
    ("last_90_days", "last 90 days", 90),
    ("last_180_days", "last 180 days", 180),
    ("last_365_days", "last 365 days", 365),
)

PERIOD_NAMES: tuple[str, ...] = tuple(name for name, _, _ in PERIOD_SPANS)

WEEKLY_PERIOD = "last_7_days"
MONTHLY_PERIOD = "last_30_days"


class Period(BaseModel):
    """A named lookback window.  The end is implicitly "now"."""

    name: str
    label: str
    span_days: int = Field(..., gt=0)
    start: datetime

    model_config = {"frozen": True}


def generate_periods(now: datetime) -> list[Period]:
    """Derive the fixed ordered set of lookback windows ending at *now*."""
    return [
        Period(name=name, label=label, span_days=days, start=now - timedelta(days=days))
        for name, label, days in PERIOD_SPANS
    ]
