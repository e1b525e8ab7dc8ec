"""Pydantic models for wildlife risk prediction."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from wildlife_insight.domain.enums import RiskLevel, TimeFrame


class PredictionRequest(BaseModel):
    location: str = Field(..., min_length=1, description="Area of the airfield")
    species: str | None = None
    coordinates: str | None = None
    additional_info: str | None = None


class RiskPrediction(BaseModel):
    risk_level: RiskLevel
    confidence: float = Field(..., ge=0.0, le=1.0)
    reasoning: str = Field(..., min_length=1)
    recommendations: list[str] = Field(default_factory=list)
    time_frame: TimeFrame = TimeFrame.SHORT_TERM

    @field_validator("risk_level", "time_frame", mode="before")
    @classmethod
    def _normalise_label(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower().replace("-", "_").replace(" ", "_")
        return value


class PredictionResponse(BaseModel):
    prediction: RiskPrediction
    fallback: bool = False
    model: str | None = None
    timestamp: datetime
