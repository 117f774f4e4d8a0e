from __future__ import annotations

from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    d365_api_baseurl: str | None = None
    d365_scope: str | None = None
    token_provider: str = "managed_identity"
    # Client-ID einer benutzerzugewiesenen Managed Identity (optional).
    azure_client_id: str | None = None
    # Nur für den "static"-Provider bei lokaler Entwicklung.
    d365_access_token: SecretStr | None = None
    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value):
        # "debug" und "DEBUG" sind gleichwertig.
        return value.strip().upper() if isinstance(value, str) else value


settings = Settings()
