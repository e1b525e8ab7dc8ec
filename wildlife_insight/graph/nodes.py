"""LangGraph nodes for the daily analysis pipeline.

Each node:
    - Receives the full AnalysisState
    - Returns a partial dict update
    - Touches the outside world only through an injected collaborator

The one conditional edge is route_narrative: if the completion service
did not produce usable text, control passes to deterministic_summary.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from wildlife_insight.analysis.collector import collect_all
from wildlife_insight.analysis.fallback import build_fallback_report
from wildlife_insight.analysis.prompt import build_analysis_prompt, system_instruction
from wildlife_insight.domain.aggregate import PeriodAggregate
from wildlife_insight.domain.period import MONTHLY_PERIOD, WEEKLY_PERIOD, generate_periods
from wildlife_insight.graph.state import AnalysisState
from wildlife_insight.llm.completion import CompletionClient, CompletionError
from wildlife_insight.store.base import RecordReader

logger = logging.getLogger(__name__)

AsyncNode = Callable[[AnalysisState], Awaitable[dict]]


# ── 1. generate_periods ─────────────────────────────────────────────────────

def build_periods(state: AnalysisState) -> dict:
    return {"periods": generate_periods(state["now"])}


# ── 2. collect_records ──────────────────────────────────────────────────────

def make_collect_records(reader: RecordReader) -> AsyncNode:
    """Create the collect_records node bound to a record reader."""

    async def collect_records(state: AnalysisState) -> dict:
        aggregates = await collect_all(reader, state["periods"])
        incomplete = [a.period_name for a in aggregates if not a.is_complete]
        if incomplete:
            logger.warning("Partial data for period(s): %s", ", ".join(incomplete))
        return {"aggregates": aggregates}

    return collect_records


# ── 3. assemble_prompt ──────────────────────────────────────────────────────

def assemble_prompt(state: AnalysisState) -> dict:
    return {"prompt": build_analysis_prompt(state["aggregates"], state["airport"])}


# ── 4. request_narrative ────────────────────────────────────────────────────

def make_request_narrative(
    completion: CompletionClient,
    *,
    max_tokens: int,
    temperature: float,
) -> AsyncNode:
    """Create the request_narrative node bound to a completion client."""

    async def request_narrative(state: AnalysisState) -> dict:
        messages = [
            {"role": "system", "content": system_instruction(state["airport"])},
            {"role": "user", "content": state["prompt"]},
        ]
        try:
            result = await completion.complete(
                messages,
                max_tokens=max_tokens,
                temperature=temperature,
                title="Airport Wildlife Management - Daily Analysis",
            )
        except CompletionError as exc:
            logger.warning("Daily analysis completion failed: %s — using deterministic report", exc)
            return {"ai_generated": False, "model": None, "failure_reason": str(exc)}

        return {
            "narrative": result.content,
            "ai_generated": True,
            "model": result.model,
            "failure_reason": None,
        }

    return request_narrative


def route_narrative(state: AnalysisState) -> str:
    """Conditional edge: "end" if the AI narrative exists, else "fallback"."""
    return "end" if state.get("ai_generated") else "fallback"


# ── 5. deterministic_summary ────────────────────────────────────────────────

def _aggregate_named(aggregates: list[PeriodAggregate], name: str) -> PeriodAggregate:
    for aggregate in aggregates:
        if aggregate.period_name == name:
            return aggregate
    raise KeyError(f"no aggregate for period {name!r}")


def deterministic_summary(state: AnalysisState) -> dict:
    aggregates = state["aggregates"]
    narrative = build_fallback_report(
        _aggregate_named(aggregates, WEEKLY_PERIOD),
        _aggregate_named(aggregates, MONTHLY_PERIOD),
        state["now"].month,
        threshold=state["trend_threshold"],
        airport=state["airport"],
    )
    return {"narrative": narrative, "ai_generated": False}
