"""Record models for rows read from the dashboard's tables.

Only the fields the analytics pipeline consumes are required.  Rows carry
many more columns (coordinates, images, reporter ids); those are ignored.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from wildlife_insight.domain.enums import Severity


class Sighting(BaseModel):
    """A logged wildlife observation."""

    id: str | None = None
    species: str = Field(..., min_length=1)
    severity: Severity
    created_at: datetime
    count: int | None = Field(None, ge=0)
    location: str | None = None
    status: str | None = None
    notes: str | None = None

    model_config = {"extra": "ignore", "frozen": True}


class HazardReport(BaseModel):
    """A logged safety concern.  Counted, never reduced further."""

    id: str | None = None
    created_at: datetime
    type: str | None = None
    severity: Severity | None = None
    status: str | None = None
    location: str | None = None

    model_config = {"extra": "ignore", "frozen": True}


class Task(BaseModel):
    """A wildlife-control task.  Counted, never reduced further."""

    id: str | None = None
    created_at: datetime
    title: str | None = None
    status: str | None = None
    priority: str | None = None

    model_config = {"extra": "ignore", "frozen": True}
