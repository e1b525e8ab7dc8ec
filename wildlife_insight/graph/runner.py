"""Graph runner: clean interface for invoking the daily analysis graph.

Usage:
    from wildlife_insight.graph.runner import run_daily_analysis

    result = await run_daily_analysis(reader, completion)

The runner reads "now" from the injected clock, seeds the initial state,
invokes LangGraph, and returns a DailyAnalysisResult.  Nothing is written
anywhere.
"""

from __future__ import annotations

import logging

from wildlife_insight.config import settings
from wildlife_insight.domain.period import PERIOD_NAMES
from wildlife_insight.foundation.clock import Clock, ensure_utc, utc_now
from wildlife_insight.graph.builder import build_analysis_graph
from wildlife_insight.graph.state import AnalysisState
from wildlife_insight.llm.completion import CompletionClient
from wildlife_insight.models.analysis import DailyAnalysisResult
from wildlife_insight.store.base import RecordReader

logger = logging.getLogger(__name__)


async def run_daily_analysis(
    reader: RecordReader,
    completion: CompletionClient,
    *,
    clock: Clock = utc_now,
    airport: str | None = None,
    trend_threshold: int | None = None,
    max_tokens: int | None = None,
    temperature: float | None = None,
) -> DailyAnalysisResult:
    """Run the full pipeline and return the caller-facing result.

    Args:
        reader: Record store to read sightings, hazards and tasks from.
        completion: Chat-completions client for the AI narrative.
        clock: Source of "now".
        airport: Override the airport name.
        trend_threshold: Override the fallback trend threshold.
        max_tokens: Override the completion output budget.
        temperature: Override the completion sampling temperature.

    Raises:
        StoreUnavailableError: If the record store cannot be reached at all.
    """
    now = ensure_utc(clock())
    initial_state: AnalysisState = {
        "now": now,
        "airport": airport or settings.airport_name,
        "trend_threshold": (
            settings.fallback_trend_threshold if trend_threshold is None else trend_threshold
        ),
        "periods": [],
        "aggregates": [],
        "ai_generated": False,
    }

    compiled_graph = build_analysis_graph(
        reader,
        completion,
        max_tokens=max_tokens or settings.analysis_max_tokens,
        temperature=settings.analysis_temperature if temperature is None else temperature,
    )
    logger.info("Running daily analysis at %s (store=%s)", now.isoformat(), reader.backend_name)

    final_state = await compiled_graph.ainvoke(initial_state)

    incomplete = [a.period_name for a in final_state["aggregates"] if not a.is_complete]
    logger.info(
        "Daily analysis complete: ai_generated=%s narrative=%d chars incomplete=%d fallback_reason=%s",
        final_state.get("ai_generated", False),
        len(final_state.get("narrative", "")),
        len(incomplete),
        final_state.get("failure_reason") or "-",
    )

    return DailyAnalysisResult(
        analysis=final_state["narrative"],
        generated_at=now,
        periods=list(PERIOD_NAMES),
        ai_generated=final_state.get("ai_generated", False),
        model=final_state.get("model"),
        incomplete_periods=incomplete,
    )
