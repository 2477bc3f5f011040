"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# Values are resolved from (highest priority first):
#
#   1. Environment variables: e.g. CACHE_MAX_SIZE_MB=128
#   2. .env file            : key=value lines in the working directory
#   3. config/config.yaml   : applied by config.loader.load_settings()
#   4. The defaults below
#
# Field `cache_entry_ttl` maps to env var `CACHE_ENTRY_TTL` (case-insensitive).
#
# Durations accept seconds as a number or compact strings: "500ms", "1s",
# "10m", "1h30m".  They are stored as float seconds.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sentiment_gateway.utils.durations import parse_duration


class Settings(BaseSettings):
    """Sentiment gateway settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Remote provider ===
    # Per-call ceiling on the remote sentiment request.
    request_timeout: float = Field(default=1.0, gt=0)
    # Empty string = "not configured"; the provider reports itself unavailable.
    google_api_key: str = ""
    language_api_base_url: str = "https://language.googleapis.com"

    # === Result cache ===
    cache_enabled: bool = True
    # 0 = no ceiling.
    cache_max_size_mb: int = Field(default=64, ge=0)
    cache_entry_ttl: float = Field(default=600.0, gt=0)

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8080
    app_env: str = "development"
    log_level: str = "INFO"
    # Keep-alive for inbound connections and the overall ceiling on a request.
    http_timeout: float = Field(default=10.0, gt=0)

    @field_validator("request_timeout", "cache_entry_ttl", "http_timeout", mode="before")
    @classmethod
    def _parse_duration(cls, value: object) -> object:
        if isinstance(value, str):
            return parse_duration(value)
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()
