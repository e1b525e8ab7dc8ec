"""Controlled enumerations for the wildlife-insight domain.

Every categorical field in the domain MUST reference an enum defined here.
"""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Risk level assigned to a sighting when it is logged."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RecordKind(str, Enum):
    """Record collections read by the analytics pipeline.

    The value is the backing table name.
    """

    SIGHTINGS = "wildlife_sightings"
    HAZARDS = "hazard_reports"
    TASKS = "tasks"


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    def escalate(self) -> RiskLevel:
        """Return the next level up; CRITICAL stays CRITICAL."""
        order = list(RiskLevel)
        return order[min(order.index(self) + 1, len(order) - 1)]


class TimeFrame(str, Enum):
    SHORT_TERM = "short_term"
    MEDIUM_TERM = "medium_term"
    LONG_TERM = "long_term"
