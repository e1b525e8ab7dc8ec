from wildlife_insight.models.analysis import DailyAnalysisResult
from wildlife_insight.models.chat import ChatMessage, ChatRequest, ChatResponse
from wildlife_insight.models.prediction import PredictionRequest, PredictionResponse, RiskPrediction

__all__ = [
    "DailyAnalysisResult",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "PredictionRequest",
    "PredictionResponse",
    "RiskPrediction",
]
