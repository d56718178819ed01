"""Process settings for hostbot."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Settings read from ``HOSTBOT_*`` environment variables and ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="HOSTBOT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config: Path | None = Field(default=None, description="Path to the bot TOML config")
    log_level: str = Field(default="INFO", description="Log level")
    log_profile: Literal["default", "console"] = Field(default="default", description="Log output profile")
    telegram_token: str | None = Field(default=None, description="Overrides settings.token of the config")


def load_settings(**overrides: object) -> AppSettings:
    """Load settings, letting explicit non-empty overrides win."""

    updates = {key: value for key, value in overrides.items() if value is not None}
    return AppSettings(**updates)
