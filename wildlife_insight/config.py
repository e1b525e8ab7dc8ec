"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "wildlife-insight"
    debug: bool = False
    log_level: str = "INFO"
    airport_name: str = "Tivat Airport"

    # Record store: "supabase" or "memory"
    store_backend: str = "supabase"
    supabase_url: str = ""
    supabase_key: str = ""

    # Completion service (OpenAI-compatible chat completions)
    completion_url: str = "https://openrouter.ai/api/v1/chat/completions"
    completion_api_key: str = ""
    completion_model: str = "deepseek/deepseek-chat"
    completion_timeout_seconds: float = 30.0
    completion_referer: str = "https://aerodrom-tivat.com"

    # Daily analysis
    analysis_temperature: float = 0.7
    analysis_max_tokens: int = 3000
    fallback_trend_threshold: int = 20

    # Risk prediction
    prediction_temperature: float = 0.3
    prediction_max_tokens: int = 1500

    # Assistant chat
    chat_temperature: float = 0.7
    chat_max_tokens: int = 2000

    model_config = {"env_prefix": "WILDLIFE_"}

    @property
    def resolved_api_key(self) -> str:
        """Completion API key, falling back to the conventional OpenRouter variable."""
        return self.completion_api_key or os.environ.get("OPENROUTER_API_KEY", "")


settings = Settings()
