"""Environment-driven settings."""

from __future__ import annotations

import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    downstream_base_url: str = "http://localhost:8080"
    downstream_timeout: float = Field(default=10.0, gt=0)
    downstream_workers: int = Field(default=4, ge=1)
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:4200", "http://127.0.0.1:4200"]
    )
    chart_currency: str = "CZK"
    log_level: str = "INFO"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, value: str) -> str:
        return value.upper()


_ENV_KEYS = {
    "downstream_base_url": "DOWNSTREAM_BASE_URL",
    "downstream_timeout": "DOWNSTREAM_TIMEOUT",
    "downstream_workers": "DOWNSTREAM_WORKERS",
    "cors_origins": "CORS_ORIGINS",
    "chart_currency": "CHART_CURRENCY",
    "log_level": "LOG_LEVEL",
}


def load_settings() -> Settings:
    """Read settings from the environment (and a local .env file, if present)."""
    load_dotenv()
    values = {field: os.getenv(env) for field, env in _ENV_KEYS.items()}
    return Settings.model_validate({k: v for k, v in values.items() if v is not None})
