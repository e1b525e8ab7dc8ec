"""Deterministic summarizer used when no AI narrative is available.

Pure and total: it only reads already-fetched aggregates and a month
number, so it cannot fail.
"""

from __future__ import annotations

from wildlife_insight.domain.aggregate import PeriodAggregate
from wildlife_insight.domain.enums import Season

DEFAULT_TREND_THRESHOLD = 20

RECOMMENDED_ACTIONS = (
    "Raise patrol frequency during the morning hours",
    "Check the condition of the repellent systems",
    "Analyse occurrence patterns by location",
)


def season_for_month(month: int) -> Season:
    """Map a calendar month (1-12) to its season."""
    if 3 <= month <= 5:
        return Season.SPRING
    if 6 <= month <= 8:
        return Season.SUMMER
    if 9 <= month <= 11:
        return Season.AUTUMN
    return Season.WINTER


def is_activity_increased(monthly: PeriodAggregate, threshold: int = DEFAULT_TREND_THRESHOLD) -> bool:
    return len(monthly.sightings) > threshold


def build_fallback_report(
    weekly: PeriodAggregate,
    monthly: PeriodAggregate,
    month: int,
    *,
    threshold: int = DEFAULT_TREND_THRESHOLD,
    airport: str = "Tivat Airport",
) -> str:
    """Render the fixed-template report from the 7-day and 30-day aggregates."""
    increased = is_activity_increased(monthly, threshold)
    trend = "increased" if increased else "stable"
    outlook = "continued increased" if increased else "stable"
    season = season_for_month(month)

    lines = [
        f"**DAILY ANALYTICAL REPORT - {airport.upper()}**",
        "",
        "**ACTIVITY OVERVIEW (last 7 days)**",
        f"- Wildlife sightings: {len(weekly.sightings)}",
        f"- Hazard reports: {len(weekly.hazards)}",
        f"- Active tasks: {len(weekly.tasks)}",
        "",
        "**OCCURRENCE TRENDS**",
        f"{len(monthly.sightings)} sightings were recorded in the last 30 days.",
        f"The analysis shows {trend} wildlife activity.",
        "",
        "**RISK REDUCTION RECOMMENDATIONS**",
    ]
    lines.extend(f"{i}. {action}" for i, action in enumerate(RECOMMENDED_ACTIONS, start=1))
    lines.extend([
        "",
        "**OUTLOOK FOR THE COMING PERIOD**",
        f"Expect {outlook} activity.",
        f"Pay particular attention to {season.value} seasonal migrations.",
    ])
    return "\n".join(lines)
