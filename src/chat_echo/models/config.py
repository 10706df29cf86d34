"""Configuration models for chat-echo."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from chat_echo.constants import (
    BYTES_PER_MB,
    CONFIG_SECTION,
    DEFAULT_ENABLED,
    DEFAULT_LOG_PATH,
    DEFAULT_MAX_LOG_FILE_SIZE_MB,
    DEFAULT_RECORD_AI_CHAT,
    DEFAULT_RECORD_CURSOR_MOVEMENT,
    DEFAULT_RECORD_FILE_OPERATIONS,
)


class EchoConfig(BaseModel):
    """The ``chatEcho`` configuration section.

    Field names are snake_case in Python; the YAML file uses the camelCase
    aliases the editor settings surface exposes (``recordAIChat`` etc.).
    Both spellings are accepted on input.
    """

    model_config = ConfigDict(populate_by_name=True)

    enabled: bool = Field(
        default=DEFAULT_ENABLED,
        description="Start recording and AI tracking on activation",
    )
    record_ai_chat: bool = Field(
        default=DEFAULT_RECORD_AI_CHAT,
        alias="recordAIChat",
        description="Set up clipboard, AI command and terminal tracking",
    )
    record_cursor_movement: bool = Field(
        default=DEFAULT_RECORD_CURSOR_MOVEMENT,
        alias="recordCursorMovement",
        description="Record cursor and selection changes",
    )
    record_file_operations: bool = Field(
        default=DEFAULT_RECORD_FILE_OPERATIONS,
        alias="recordFileOperations",
        description="Record document open/save/close",
    )
    log_path: str = Field(
        default=DEFAULT_LOG_PATH,
        alias="logPath",
        description="Custom log directory (empty uses the storage directory)",
    )
    max_log_file_size: float = Field(
        default=DEFAULT_MAX_LOG_FILE_SIZE_MB,
        alias="maxLogFileSize",
        gt=0,
        description="Rotation threshold in megabytes",
    )

    @property
    def max_log_file_bytes(self) -> int:
        """Rotation threshold in bytes (maxLogFileSize * 1024 * 1024)."""
        return int(self.max_log_file_size * BYTES_PER_MB)

    @classmethod
    def load(cls, config_path: Path) -> "EchoConfig":
        """Load configuration from file.

        Reads the ``chatEcho`` section. A file without that section is read as
        a bare mapping of settings. A missing or empty file yields defaults.
        """
        if not config_path.exists():
            return cls()

        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping in {config_path}")

        section = data.get(CONFIG_SECTION, data)
        if not isinstance(section, dict):
            raise ValueError(f"Expected a mapping under '{CONFIG_SECTION}'")
        return cls(**section)

    def to_yaml_dict(self) -> dict[str, Any]:
        """Dump using the camelCase aliases."""
        return self.model_dump(mode="json", by_alias=True)

    def save(self, config_path: Path) -> None:
        """Save configuration to file under the ``chatEcho`` section."""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                {CONFIG_SECTION: self.to_yaml_dict()},
                f,
                default_flow_style=False,
                sort_keys=False,
            )
