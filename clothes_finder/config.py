"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SearchApiSettings(BaseModel):
    base_url: AnyHttpUrl = Field(
        default="http://localhost:8018",
        description="Base address of the clothing search service.",
    )
    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Transport-level timeout; None disables it.",
    )

    @field_validator("timeout_seconds", mode="before")
    @classmethod
    def _empty_str_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def endpoint(self, path: str) -> str:
        return f"{str(self.base_url).rstrip('/')}/{path.lstrip('/')}"


class FinderSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FINDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    telegram_token: SecretStr
    telegram_proxy: str | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    max_sessions: int = Field(default=10_000, ge=1)

    search: SearchApiSettings = Field(default_factory=SearchApiSettings)


@lru_cache
def get_settings() -> FinderSettings:
    """Return cached settings instance."""

    return FinderSettings()  # type: ignore[call-arg]


__all__ = ["FinderSettings", "SearchApiSettings", "get_settings"]
