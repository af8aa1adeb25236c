"""Lightweight configuration for the simulation service."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from the environment and ``.env``."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    advisor_base_url: str = Field(
        default="https://api.deepseek.com/v1",
        description="Base URL of the chat-completions service used for strategy hints",
    )
    advisor_model: str = Field(default="deepseek-chat", description="Model requested from the advisor")
    advisor_api_key: SecretStr | None = Field(
        default=None,
        description="Bearer credential for the advisor; hints fall back to a default when unset",
    )
    advisor_timeout_seconds: float = Field(
        default=10.0,
        description="Upper bound on a single strategy request",
        gt=0.0,
    )
    advisor_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    advisor_max_tokens: int = Field(default=150, gt=0)
    ai_thinking_delay_seconds: float = Field(
        default=1.0,
        description="Pause before the AI acts, purely cosmetic",
        ge=0.0,
    )
    ai_action_delay_seconds: float = Field(
        default=0.5,
        description="Pause between consecutive AI actions, purely cosmetic",
        ge=0.0,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )
    event_log_size: int = Field(
        default=1000,
        description="Events kept per game; older ones drop out of the events feed",
        gt=0,
    )
    max_games: int = Field(
        default=100,
        description="Games held in memory; creating one more evicts the oldest",
        gt=0,
    )
    log_level: str = Field(default="INFO", description="Root log level for the entrypoint")

    @property
    def advisor_configured(self) -> bool:
        """True when a non-blank advisor credential is set."""

        key = self.advisor_api_key
        return key is not None and bool(key.get_secret_value().strip())


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
