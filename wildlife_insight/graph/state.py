"""AnalysisState: the sole state object that the analysis graph nodes read and write.

Every node receives the full state and returns a partial update.  Nodes
reach the outside world only through the collaborators injected when the
graph is built (record reader, completion client).
"""

from __future__ import annotations

from datetime import datetime
from typing import TypedDict

from wildlife_insight.domain.aggregate import PeriodAggregate
from wildlife_insight.domain.period import Period


class AnalysisState(TypedDict, total=False):
    """LangGraph state for the daily analysis pipeline.

    Fields:
        now: Reference instant every period is measured back from.
        airport: Airport name used in the prompt and fallback report.
        trend_threshold: 30-day sighting count above which activity is "increased".
        periods: The generated lookback windows, in declaration order.
        aggregates: One PeriodAggregate per period, same order as periods.
        prompt: Assembled user prompt for the completion service.
        narrative: Final report text (AI or deterministic).
        ai_generated: True only when the completion service produced the narrative.
        model: Completion model identifier, when ai_generated.
        failure_reason: Why the completion step fell back, if it did.
    """

    now: datetime
    airport: str
    trend_threshold: int
    periods: list[Period]
    aggregates: list[PeriodAggregate]
    prompt: str
    narrative: str
    ai_generated: bool
    model: str | None
    failure_reason: str | None
