"""Wildlife assistant chat with canned fallback guidance."""

from __future__ import annotations

import logging

from wildlife_insight.llm.completion import CompletionClient, CompletionError
from wildlife_insight.models.chat import ChatMessage

logger = logging.getLogger(__name__)

ASSISTANT_SYSTEM_PROMPT = """You are an expert AI assistant for wildlife management at {airport}. Your role:

1. HAZARD ANALYSIS: assess the risks posed by different bird and animal species
2. RECOMMENDATIONS: give specific advice to reduce risk
3. PREVENTION: propose preventive measures and control procedures
4. REGULATIONS: advise in line with EASA and ICAO standards
5. SEASONAL GUIDANCE: report seasonal changes in animal behaviour

SPECIFIC TO {airport_upper}:
- Location: coastal area, close to the sea
- Seasonal bird migrations
- Local species: gulls, swallows, falcons, etc.
- Weather: Mediterranean climate

USE:
- Bold text for important information
- Lists for recommendations
- Short, clear answers"""

_GULL_REPLY = """**Risk analysis: gulls**

**Hazard level:** HIGH
**Frequency:** common, especially in the morning hours

**RECOMMENDATIONS:**
1. **Waste control:** keep containers sealed
2. **Habitat modification:** mow the grass regularly
3. **Dispersal:** use audio devices (pyro-acoustics)
4. **Monitoring:** increase patrol frequency between 06:00 and 09:00

**SEASONAL NOTE:** gull activity rises during the summer months (June-August) with the tourist season and more waste."""

_SWALLOW_REPLY = """**Risk analysis: swallows**

**Hazard level:** MEDIUM
**Frequency:** seasonal (April-October)

**RECOMMENDATIONS:**
1. **Scheduling:** adjust the flight schedule around dusk
2. **Monitoring:** increase monitoring in the morning and evening
3. **Habitat:** remove potential nesting sites in hangars
4. **Coordination:** inform air traffic control about activity

**MIGRATION CYCLE:** activity peaks in May and September."""

_FALCON_REPLY = """**Risk analysis: falcons**

**Hazard level:** CRITICAL
**Frequency:** rare, but high risk

**EMERGENCY PROCEDURES:**
1. **Suspend operations** in the affected sector immediately
2. **Activate the repellent systems**
3. **Notify air traffic control**
4. **Dispatch a patrol team**

**FURTHER MEASURES:** consider a controlled falconry programme as a long-term solution."""

_TREND_REPLY = """**Trend analysis**

**SEASONAL TRENDS:**
- **Spring (March-May):** increased activity of migratory birds
- **Summer (June-August):** high gull activity
- **Autumn (September-November):** second migration phase
- **Winter (December-February):** low activity, except on mild days

**RECOMMENDATIONS:**
1. **Seasonal activity planning**
2. **Focus on morning patrols**
3. **Coordinate with the meteorological service**
4. **Review occurrence data regularly**"""

_EMERGENCY_REPLY = """**EMERGENCY PROCEDURES - HIGH RISK**

**ACT NOW:**
1. **Suspend operations** in the affected sector
2. **Raise the alarm**
3. **Notify air traffic control**
4. **Dispatch an emergency patrol team**

**AFTER THE INCIDENT:**
- Record species, location and number of animals
- Analyse the cause
- Adjust preventive measures and update the risk assessment"""

_GENERIC_REPLY = """**Wildlife Management AI Assistant - {airport}**

How can I help today? I can provide:

- **Risk analysis** for specific species
- **Control recommendations** and prevention
- **Interpretation** of data and trends
- **Emergency procedures** for high-risk situations
- **Advice** in line with EASA/ICAO standards

Ask me about a species, a risk assessment, or recommendations for improving airfield safety."""

_KEYWORD_REPLIES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("galeb", "gull"), _GULL_REPLY),
    (("lastavica", "swallow"), _SWALLOW_REPLY),
    (("soko", "falcon"), _FALCON_REPLY),
    (("statistika", "statistic", "trend"), _TREND_REPLY),
    (("hitno", "kritično", "emergency"), _EMERGENCY_REPLY),
)


def fallback_reply(user_message: str, airport: str = "Tivat Airport") -> str:
    """Pick a canned answer by keyword; the first matching topic wins."""
    text = user_message.lower()
    for keywords, reply in _KEYWORD_REPLIES:
        if any(word in text for word in keywords):
            return reply
    return _GENERIC_REPLY.format(airport=airport)


def last_user_message(messages: list[ChatMessage]) -> str:
    for message in reversed(messages):
        if message.role == "user":
            return message.content
    return ""


class WildlifeAssistant:
    """Chat front for the completion service with canned fallback guidance."""

    def __init__(
        self,
        completion: CompletionClient,
        *,
        airport: str,
        max_tokens: int = 2000,
        temperature: float = 0.7,
    ) -> None:
        self._completion = completion
        self._airport = airport
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def reply(self, messages: list[ChatMessage]) -> tuple[str, bool, str | None]:
        """Return (content, used_fallback, model)."""
        conversation = [
            {
                "role": "system",
                "content": ASSISTANT_SYSTEM_PROMPT.format(
                    airport=self._airport, airport_upper=self._airport.upper(),
                ),
            },
            *({"role": m.role, "content": m.content} for m in messages),
        ]
        try:
            result = await self._completion.complete(
                conversation,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                title="Airport Wildlife Management System",
            )
        except CompletionError as exc:
            logger.warning("Assistant completion failed: %s — using canned reply", exc)
            return fallback_reply(last_user_message(messages), self._airport), True, None
        return result.content, False, result.model
