"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ANALYSIS_SERVER_URL: str = "http://localhost:8000"

    # Seconds. LLM generation is much slower than the other upstream calls.
    REQUEST_TIMEOUT: float = 30.0
    ANALYSIS_TIMEOUT: float = 300.0

    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    model_config = {"env_prefix": "SHOTREPORT_", "env_file": ".env", "extra": "ignore"}


settings = Settings()
