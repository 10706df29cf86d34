"""Runtime settings for chat-echo.

Uses Pydantic Settings for values supplied by the hosting process rather
than by the project config file. Every field can be overridden through an
environment variable with the CHAT_ECHO_ prefix, e.g.
``CHAT_ECHO_STORAGE_DIR=/tmp/echo``.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from chat_echo.config.paths import DEFAULT_STORAGE_DIR
from chat_echo.constants import CLIPBOARD_POLL_INTERVAL_SECONDS, DEFAULT_DIAGNOSTICS_CAPACITY


class RuntimeSettings(BaseSettings):
    """Host-provided runtime settings."""

    model_config = SettingsConfigDict(env_prefix="CHAT_ECHO_")

    storage_dir: Path = Field(
        default=DEFAULT_STORAGE_DIR,
        description="Default log directory when logPath is not configured",
    )
    clipboard_poll_interval_seconds: float = Field(
        default=CLIPBOARD_POLL_INTERVAL_SECONDS,
        gt=0,
        description="Seconds between clipboard polls",
    )
    log_level: str = Field(
        default="INFO",
        description="Level for chat-echo's own diagnostic logging",
    )
    diagnostics_capacity: int = Field(
        default=DEFAULT_DIAGNOSTICS_CAPACITY,
        ge=1,
        description="Number of recent diagnostics kept in memory",
    )


def get_runtime_settings() -> RuntimeSettings:
    """Build settings from the current environment."""
    return RuntimeSettings()
