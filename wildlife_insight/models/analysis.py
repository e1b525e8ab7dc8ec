"""Pydantic model for the daily analysis returned to callers."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class DailyAnalysisResult(BaseModel):
    """Narrative plus provenance for one daily analysis run."""

    analysis: str = Field(..., description="AI-generated or deterministic narrative")
    generated_at: datetime
    periods: list[str] = Field(..., description="Period tags in declaration order")
    ai_generated: bool = Field(..., description="False when the deterministic fallback was used")
    model: str | None = Field(None, description="Completion model that produced the narrative")
    incomplete_periods: list[str] = Field(
        default_factory=list,
        description="Periods where at least one record fetch failed",
    )
