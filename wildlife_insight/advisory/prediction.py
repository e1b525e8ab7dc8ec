"""Wildlife risk prediction for a location on the airfield.

The completion service is asked for a JSON object matching RiskPrediction.
If it is unavailable, or its answer does not parse and validate, a
keyword-driven deterministic prediction is returned instead.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from wildlife_insight.domain.enums import RiskLevel, TimeFrame
from wildlife_insight.llm.completion import CompletionClient, CompletionError
from wildlife_insight.models.prediction import PredictionRequest, RiskPrediction

logger = logging.getLogger(__name__)

PREDICTION_SYSTEM_PROMPT = """You are an AI model predicting wildlife risk at {airport}. Your task is to
ANALYSE and PREDICT the risk from the following parameters:
- Location on the airfield
- Animal species (if given)
- Historical occurrences
- Seasonal factors
- Weather conditions

RESPOND IN JSON FORMAT:
{{
  "risk_level": "low|medium|high|critical",
  "confidence": 0.0-1.0,
  "reasoning": "Detailed reasoning behind the prediction",
  "recommendations": ["recommendation1", "recommendation2", ...],
  "time_frame": "short_term|medium_term|long_term"
}}

SPECIFIC TO {airport_upper}:
- Location: coastal airport, close to the sea
- Seasonal migrations: spring/autumn
- Local species: gulls, swallows, falcons, hares
- Climate: Mediterranean, wind influence

RISK CRITERIA:
- CRITICAL: large birds of prey, flocks >50, close to the runway
- HIGH: medium birds, flocks 20-50, taxiway areas
- MEDIUM: small birds, single animals, perimeter
- LOW: reptiles, insects, remote zones

BE REALISTIC AND PRECISE IN YOUR ASSESSMENT!"""

_RUNWAY_WORDS = ("runway", "pista")
_TAXI_WORDS = ("taxi", "apron")
_PERIMETER_WORDS = ("perimeter", "perimetar", "fence", "ograda")
_RAPTOR_WORDS = ("falcon", "hawk", "eagle", "soko", "orao", "jastreb")
_GULL_WORDS = ("gull", "galeb")
_SMALL_BIRD_WORDS = ("swallow", "starling", "lastavica", "čvor")
_FLOCK_WORDS = ("flock", "group", "jata", "grupa")
_SEASON_WORDS = ("season", "migration", "sezona", "migracija")


def _mentions(text: str, words: tuple[str, ...]) -> bool:
    return any(word in text for word in words)


def fallback_prediction(
    location: str,
    species: str | None = None,
    additional_info: str | None = None,
) -> RiskPrediction:
    """Deterministic prediction from location, species and free-text keywords."""
    risk = RiskLevel.MEDIUM
    confidence = 0.6
    reasoning = "Baseline risk assessment from the submitted details."
    recommendations = [
        "Standard patrol of the area recommended",
        "Check the repellent systems nearby",
        "Monitor the area for the next 24 hours",
    ]

    loc = location.lower()
    if _mentions(loc, _RUNWAY_WORDS):
        risk, confidence = RiskLevel.HIGH, 0.75
        reasoning = "A location right next to the runway requires heightened attention and more frequent monitoring."
    elif _mentions(loc, _TAXI_WORDS):
        risk, confidence = RiskLevel.MEDIUM, 0.65
        reasoning = "Operational zone with moderate risk. Regular monitoring recommended."
    elif _mentions(loc, _PERIMETER_WORDS):
        risk, confidence = RiskLevel.LOW, 0.5
        reasoning = "Perimeter zone with low risk. Routine monitoring is sufficient."

    if species:
        sp = species.lower()
        if _mentions(sp, _RAPTOR_WORDS):
            risk, confidence = RiskLevel.CRITICAL, 0.85
            reasoning += " Large birds of prey significantly increase the risk to flight operations."
            recommendations.insert(0, "URGENT: activate repellent systems and notify air traffic control")
        elif _mentions(sp, _GULL_WORDS):
            risk, confidence = RiskLevel.HIGH, 0.8
            reasoning += " Gulls are frequent and high-risk, especially in the morning hours."
            recommendations.insert(0, "Increase patrol frequency between 06:00 and 10:00")
        elif _mentions(sp, _SMALL_BIRD_WORDS):
            risk, confidence = RiskLevel.MEDIUM, 0.7
            reasoning += " Small migratory birds. The risk is moderate but requires monitoring."

    if additional_info:
        info = additional_info.lower()
        if _mentions(info, _FLOCK_WORDS):
            risk = risk.escalate()
            confidence = min(round(confidence + 0.1, 2), 0.95)
            reasoning += " The presence of a flock further increases the risk."
        if _mentions(info, _SEASON_WORDS):
            reasoning += " Seasonal factors should be taken into account when planning monitoring."

    return RiskPrediction(
        risk_level=risk,
        confidence=confidence,
        reasoning=reasoning,
        recommendations=recommendations,
        time_frame=TimeFrame.SHORT_TERM,
    )


def _strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        lines = [line for line in text.split("\n") if not line.strip().startswith("```")]
        text = "\n".join(lines).strip()
    return text


def parse_prediction(text: str) -> RiskPrediction:
    """Parse a completion into a RiskPrediction.

    Raises:
        ValueError: If the text is not a JSON object matching the schema.
    """
    try:
        raw = json.loads(_strip_code_fences(text))
    except json.JSONDecodeError as exc:
        raise ValueError(f"prediction is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError("prediction must be a JSON object")
    try:
        return RiskPrediction.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"prediction does not match schema: {exc.error_count()} error(s)") from exc


def _user_prompt(request: PredictionRequest) -> str:
    lines = [
        "DATA FOR ANALYSIS:",
        f"LOCATION: {request.location}",
        f"SPECIES: {request.species}" if request.species else "SPECIES: Not specified",
    ]
    if request.coordinates:
        lines.append(f"COORDINATES: {request.coordinates}")
    if request.additional_info:
        lines.append(f"ADDITIONAL INFORMATION: {request.additional_info}")
    lines.extend(["", "ANALYSE AND PREDICT THE RISK:"])
    return "\n".join(lines)


class RiskPredictor:
    """Always produces a RiskPrediction, from the AI when possible and from rules otherwise."""

    def __init__(
        self,
        completion: CompletionClient,
        *,
        airport: str,
        max_tokens: int = 1500,
        temperature: float = 0.3,
    ) -> None:
        self._completion = completion
        self._airport = airport
        self._max_tokens = max_tokens
        self._temperature = temperature

    def system_prompt(self) -> str:
        return PREDICTION_SYSTEM_PROMPT.format(
            airport=self._airport, airport_upper=self._airport.upper(),
        )

    async def predict(self, request: PredictionRequest) -> tuple[RiskPrediction, bool, str | None]:
        """Return (prediction, used_fallback, model)."""
        messages = [
            {"role": "system", "content": self.system_prompt()},
            {"role": "user", "content": _user_prompt(request)},
        ]
        try:
            result = await self._completion.complete(
                messages,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                title="Airport Wildlife Prediction System",
                json_response=True,
            )
            prediction = parse_prediction(result.content)
        except (CompletionError, ValueError) as exc:
            logger.warning("Risk prediction failed: %s — using rule-based prediction", exc)
            fallback = fallback_prediction(request.location, request.species, request.additional_info)
            return fallback, True, None

        logger.info("Risk prediction for %r: %s (%.2f)",
                    request.location, prediction.risk_level.value, prediction.confidence)
        return prediction, False, result.model
