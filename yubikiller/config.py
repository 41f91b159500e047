"""
Client configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file). The
verification endpoint defaults to Yubico's public validation server with the
fixed client id 1.
"""

from __future__ import annotations

from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

YUBICO_API_URL = "https://api.yubico.com/wsapi/2.0/verify?id=1"


class ClientSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    yubico_api_url: str = YUBICO_API_URL

    # Deadline for one whole invalidation (request + body read)
    request_timeout_seconds: float = 10.0


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "development"
    log_level: str = "INFO"
    # Unset: "json" in production, "console" otherwise
    log_format: Optional[str] = None


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "development"

    client: Optional[ClientSettings] = None
    logging: Optional[LoggingSettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        if self.client is None:
            self.client = ClientSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.logging.log_format is None:
            self.logging.log_format = "json" if self.is_production else "console"
        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
