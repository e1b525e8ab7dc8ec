"""Tests for the daily analysis graph and runner.

The record store is in-memory and the completion service is an
httpx.MockTransport, so the full LangGraph pipeline runs deterministically.
"""

from __future__ import annotations

import json
from datetime import timedelta

import httpx
import pytest

from tests.test_records import _NOW, _row, _sighting_row
from tests.test_collector import _FailingReader, _UnavailableReader
from wildlife_insight.analysis.collector import collect_all
from wildlife_insight.analysis.fallback import build_fallback_report
from wildlife_insight.domain.enums import RecordKind
from wildlife_insight.domain.period import PERIOD_NAMES, generate_periods
from wildlife_insight.foundation.clock import fixed_clock
from wildlife_insight.graph.nodes import route_narrative
from wildlife_insight.graph.runner import run_daily_analysis
from wildlife_insight.llm.completion import CompletionClient
from wildlife_insight.store.base import StoreUnavailableError
from wildlife_insight.store.memory import InMemoryRecordStore

_URL = "https://llm.test/v1/chat/completions"


def _completion(handler, api_key: str = "secret") -> CompletionClient:
    return CompletionClient(_URL, api_key, "test-model", transport=httpx.MockTransport(handler))


def _ok(content: str):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"model": "test-model", "choices": [{"message": {"content": content}}]})
    return handler


def _status(code: int):
    return lambda request: httpx.Response(code, json={"error": {"message": "upstream"}})


async def _store(monthly_sightings: int = 25) -> InMemoryRecordStore:
    store = InMemoryRecordStore()
    for i in range(monthly_sightings):
        species = "galeb" if i % 2 == 0 else "lastavica"
        await store.insert(RecordKind.SIGHTINGS, _sighting_row(species=species, age=timedelta(days=1 + i)))
    await store.insert(RecordKind.HAZARDS, _row(age=timedelta(days=3)))
    await store.insert(RecordKind.TASKS, _row(age=timedelta(days=6)))
    return store


class TestRouteNarrative:
    def test_routes(self) -> None:
        assert route_narrative({"ai_generated": True}) == "end"
        assert route_narrative({"ai_generated": False}) == "fallback"
        assert route_narrative({}) == "fallback"


class TestRunDailyAnalysis:
    @pytest.mark.asyncio
    async def test_ai_narrative_returned(self) -> None:
        store = await _store()
        result = await run_daily_analysis(
            store, _completion(_ok("Gull activity is rising.")), clock=fixed_clock(_NOW),
        )
        assert result.analysis == "Gull activity is rising."
        assert result.ai_generated is True
        assert result.model == "test-model"
        assert result.generated_at == _NOW
        assert result.periods == list(PERIOD_NAMES)
        assert result.incomplete_periods == []

    @pytest.mark.asyncio
    async def test_prompt_sent_to_completion_service(self) -> None:
        captured: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured.update(json.loads(request.content))
            return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

        store = await _store()
        await run_daily_analysis(
            store, _completion(handler), clock=fixed_clock(_NOW),
            airport="Tivat Airport", max_tokens=3000, temperature=0.7,
        )
        system, user = captured["messages"]
        assert system["role"] == "system"
        assert "Tivat Airport" in system["content"]
        assert "=== PERIOD: LAST 365 DAYS ===" in user["content"]
        assert captured["max_tokens"] == 3000
        assert captured["temperature"] == 0.7

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 429, 500, 502])
    async def test_non_2xx_yields_exact_fallback(self, status: int) -> None:
        store = await _store(monthly_sightings=25)
        result = await run_daily_analysis(
            store, _completion(_status(status)), clock=fixed_clock(_NOW),
            airport="Tivat Airport", trend_threshold=20,
        )
        aggregates = {a.period_name: a for a in await collect_all(store, generate_periods(_NOW))}
        expected = build_fallback_report(
            aggregates["last_7_days"], aggregates["last_30_days"], _NOW.month,
            threshold=20, airport="Tivat Airport",
        )
        assert result.analysis == expected
        assert result.ai_generated is False
        assert result.model is None
        assert "increased" in result.analysis
        assert "summer" in result.analysis

    @pytest.mark.asyncio
    async def test_empty_completion_falls_back(self) -> None:
        store = await _store(monthly_sightings=10)
        result = await run_daily_analysis(store, _completion(_ok("  ")), clock=fixed_clock(_NOW))
        assert result.ai_generated is False
        assert "stable" in result.analysis

    @pytest.mark.asyncio
    async def test_unconfigured_completion_falls_back(self) -> None:
        store = await _store()
        result = await run_daily_analysis(
            store, _completion(_ok("never sent"), api_key=""), clock=fixed_clock(_NOW),
        )
        assert result.ai_generated is False
        assert result.analysis.startswith("**DAILY ANALYTICAL REPORT")

    @pytest.mark.asyncio
    async def test_partial_store_failure_is_tolerated(self) -> None:
        store = await _store()
        reader = _FailingReader(store, {RecordKind.TASKS})
        result = await run_daily_analysis(reader, _completion(_status(500)), clock=fixed_clock(_NOW))
        assert result.incomplete_periods == list(PERIOD_NAMES)
        assert "- Active tasks: 0" in result.analysis

    @pytest.mark.asyncio
    async def test_unavailable_store_propagates(self) -> None:
        with pytest.raises(StoreUnavailableError):
            await run_daily_analysis(
                _UnavailableReader(), _completion(_ok("x")), clock=fixed_clock(_NOW),
            )

    @pytest.mark.asyncio
    async def test_non_string_model_still_returns_ai_narrative(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"model": 7, "choices": [{"message": {"content": "AI text"}}]})

        store = await _store()
        result = await run_daily_analysis(store, _completion(handler), clock=fixed_clock(_NOW))
        assert result.analysis == "AI text"
        assert result.ai_generated is True
        assert result.model == "test-model"

    @pytest.mark.asyncio
    async def test_naive_clock_is_treated_as_utc(self) -> None:
        store = await _store(monthly_sightings=3)
        naive_now = _NOW.replace(tzinfo=None)
        result = await run_daily_analysis(
            store, _completion(_status(500)), clock=lambda: naive_now,
        )
        assert result.generated_at == _NOW
        assert result.incomplete_periods == []
        assert "- Wildlife sightings: 3" in result.analysis
