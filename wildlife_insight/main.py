"""wildlife-insight: airport wildlife-hazard analytics service.

This is the application entry point.  It wires the record store, the
completion client, the advisory services and the HTTP routes together.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from wildlife_insight.advisory.chat import WildlifeAssistant
from wildlife_insight.advisory.prediction import RiskPredictor
from wildlife_insight.api.advisory import create_advisory_router
from wildlife_insight.api.analysis import create_analysis_router
from wildlife_insight.config import settings
from wildlife_insight.llm.completion import CompletionClient
from wildlife_insight.store.base import RecordReader
from wildlife_insight.store.memory import InMemoryRecordStore
from wildlife_insight.store.supabase_store import SupabaseRecordStore

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

# ── Record store ─────────────────────────────────────────────────────────────

reader: RecordReader
if settings.store_backend == "memory":
    reader = InMemoryRecordStore()
    logger.warning("Using the in-memory record store; analysis will see no persisted data")
else:
    reader = SupabaseRecordStore(settings.supabase_url, settings.supabase_key)

# ── Completion service ───────────────────────────────────────────────────────

completion = CompletionClient(
    settings.completion_url,
    settings.resolved_api_key,
    settings.completion_model,
    timeout=settings.completion_timeout_seconds,
    referer=settings.completion_referer,
)
if not completion.configured:
    logger.warning("No completion API key configured; every narrative will be the fallback")

predictor = RiskPredictor(
    completion,
    airport=settings.airport_name,
    max_tokens=settings.prediction_max_tokens,
    temperature=settings.prediction_temperature,
)
assistant = WildlifeAssistant(
    completion,
    airport=settings.airport_name,
    max_tokens=settings.chat_max_tokens,
    temperature=settings.chat_temperature,
)

# ── App ──────────────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    description="Wildlife hazard analytics, risk prediction and assistant chat",
    version="0.3.0",
)

# ── Routes ───────────────────────────────────────────────────────────────────

app.include_router(create_analysis_router(reader, completion))
app.include_router(create_advisory_router(predictor, assistant))


# ── Health ───────────────────────────────────────────────────────────────────

@app.get("/health")
async def health() -> dict:
    return {
        "status": "ok",
        "airport": settings.airport_name,
        "store_backend": reader.backend_name,
        "completion_configured": completion.configured,
        "completion_model": completion.model,
    }
