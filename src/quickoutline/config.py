"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `QUICKOUTLINE_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """quickoutline settings.

    All fields are environment-configurable. Prefix is `QUICKOUTLINE_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="QUICKOUTLINE_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    log_level: str = Field(default="WARNING")

    # Query
    # The sentinel switches the query field into query mode and prefixes kind filters.
    sentinel: str = Field(default="#", min_length=1, max_length=1)
    default_mode: Literal["symbol", "text"] = Field(default="symbol")

    # Rendering
    indent_width: int = Field(default=4, ge=0, le=16)
    line_number_width: int = Field(default=5, ge=1, le=12)
    result_marker: str = Field(default="*", max_length=1)


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("QUICKOUTLINE_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
