"""REST endpoint for the daily multi-period analysis.

Path: GET /api/ai/daily-analysis

The narrative step never fails the request; a completion failure yields
the deterministic report with ``ai_generated`` set to false.  Only a
failure to run the pipeline at all (e.g. no store connection) becomes a
500 with a generic body.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from wildlife_insight.foundation.clock import Clock, utc_now
from wildlife_insight.graph.runner import run_daily_analysis
from wildlife_insight.llm.completion import CompletionClient
from wildlife_insight.models.analysis import DailyAnalysisResult
from wildlife_insight.store.base import RecordReader

logger = logging.getLogger(__name__)


def create_analysis_router(
    reader: RecordReader,
    completion: CompletionClient,
    clock: Clock = utc_now,
) -> APIRouter:
    """Factory that wires the daily analysis endpoint to a store and completion client."""

    router = APIRouter(prefix="/api/ai", tags=["analysis"])

    @router.get("/daily-analysis", response_model=DailyAnalysisResult)
    async def daily_analysis():
        try:
            return await run_daily_analysis(reader, completion, clock=clock)
        except Exception:
            logger.exception("Daily analysis failed")
            return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return router
