"""REST endpoints for risk prediction and the wildlife assistant.

Paths:
    POST /api/ai/wildlife-prediction
    POST /api/ai/wildlife-chat

Both always answer; ``fallback`` tells the caller whether the completion
service or the deterministic rules produced the content.
"""

from __future__ import annotations

from fastapi import APIRouter

from wildlife_insight.advisory.chat import WildlifeAssistant
from wildlife_insight.advisory.prediction import RiskPredictor
from wildlife_insight.foundation.clock import Clock, utc_now
from wildlife_insight.models.chat import ChatRequest, ChatResponse
from wildlife_insight.models.prediction import PredictionRequest, PredictionResponse


def create_advisory_router(
    predictor: RiskPredictor,
    assistant: WildlifeAssistant,
    clock: Clock = utc_now,
) -> APIRouter:
    router = APIRouter(prefix="/api/ai", tags=["advisory"])

    @router.post("/wildlife-prediction", response_model=PredictionResponse)
    async def wildlife_prediction(request: PredictionRequest) -> PredictionResponse:
        prediction, fallback, model = await predictor.predict(request)
        return PredictionResponse(
            prediction=prediction, fallback=fallback, model=model, timestamp=clock(),
        )

    @router.post("/wildlife-chat", response_model=ChatResponse)
    async def wildlife_chat(request: ChatRequest) -> ChatResponse:
        content, fallback, model = await assistant.reply(request.messages)
        return ChatResponse(content=content, fallback=fallback, model=model, timestamp=clock())

    return router
