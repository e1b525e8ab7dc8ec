"""Client for an OpenAI-compatible chat-completions endpoint.

Success means: a 2xx response whose JSON body exposes a non-empty
``choices[0].message.content``.  Any other outcome raises CompletionError.
There is no retry; callers decide what to fall back to.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)

Message = dict[str, str]


class CompletionError(Exception):
    """Raised when the completion service does not produce usable text."""

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        self.reason = reason
        self.status_code = status_code
        super().__init__(reason if status_code is None else f"{reason} (status {status_code})")


class CompletionResult(BaseModel):
    content: str
    model: str | None = None

    model_config = {"frozen": True}


def extract_content(payload: Any) -> str:
    """Pull ``choices[0].message.content`` out of a response body.

    Raises:
        CompletionError: If the path is missing or the content is blank.
    """
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise CompletionError(f"malformed completion payload: {exc!r}") from exc
    if not isinstance(content, str) or not content.strip():
        raise CompletionError("empty completion content")
    return content


class CompletionClient:
    """Thin async wrapper over a chat-completions HTTP endpoint.

    Args:
        url: Full chat-completions URL.
        api_key: Bearer token.  An empty key makes every call fail fast.
        model: Model identifier sent with each request.
        timeout: Per-request timeout in seconds.
        referer: Value for the HTTP-Referer header OpenRouter uses for attribution.
        transport: Optional httpx transport override (for testing).
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        model: str,
        *,
        timeout: float = 30.0,
        referer: str = "",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._referer = referer
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    @property
    def model(self) -> str:
        return self._model

    def _headers(self, title: str) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
            "X-Title": title,
        }
        if self._referer:
            headers["HTTP-Referer"] = self._referer
        return headers

    async def complete(
        self,
        messages: list[Message],
        *,
        max_tokens: int,
        temperature: float,
        title: str = "Airport Wildlife Management",
        json_response: bool = False,
    ) -> CompletionResult:
        """Send *messages* and return the first choice's text.

        Raises:
            CompletionError: On any failure to obtain usable content.
        """
        if not self.configured:
            raise CompletionError("completion API key not configured")

        payload: dict[str, Any] = {
            "model": self._model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "stream": False,
        }
        if json_response:
            payload["response_format"] = {"type": "json_object"}

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._url, headers=self._headers(title), json=payload)
        except httpx.HTTPError as exc:
            raise CompletionError(f"transport error: {exc.__class__.__name__}: {exc}") from exc
        except Exception as exc:
            raise CompletionError(f"request failed: {exc.__class__.__name__}: {exc}") from exc

        if not response.is_success:
            logger.error("Completion service error %d: %s", response.status_code, response.text[:500])
            raise CompletionError("completion service returned an error", response.status_code)

        try:
            body = response.json()
        except ValueError as exc:
            raise CompletionError("completion response is not JSON", response.status_code) from exc

        content = extract_content(body)
        model = body.get("model") if isinstance(body, dict) else None
        if not isinstance(model, str) or not model:
            model = None
        logger.info("Completion received: model=%s length=%d chars", model or self._model, len(content))
        return CompletionResult(content=content, model=model or self._model)
