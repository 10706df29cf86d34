"""Configuration service for managing chat-echo configuration.

Handles reading, writing and updating ``.chat-echo/config.yaml``.

Configuration Hierarchy:
    1. Built-in defaults (in constants.py)
    2. Project config (.chat-echo/config.yaml, ``chatEcho`` section)
    3. Command-line arguments (highest priority)

Configuration absence is never an error: a missing, empty, unparsable or
invalid file yields the defaults and a logged warning.

Typical Usage:
    >>> service = ConfigService(project_root=Path.cwd())
    >>> config = service.load_config()
    >>> service.update_config(record_ai_chat=False)
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from chat_echo.config.paths import CONFIG_FILE
from chat_echo.exceptions import ConfigurationError, ValidationError
from chat_echo.models.config import EchoConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for managing configuration."""

    def __init__(self, project_root: Path | None = None):
        """Initialize config service.

        Args:
            project_root: Project root directory (defaults to current directory)
        """
        self.project_root = project_root or Path.cwd()
        self.config_path = self.project_root / CONFIG_FILE

    def load_config(self) -> EchoConfig:
        """Load configuration from file.

        Returns:
            EchoConfig object (defaults if the file is missing or invalid)
        """
        try:
            return EchoConfig.load(self.config_path)
        except (yaml.YAMLError, ValueError, PydanticValidationError) as e:
            logger.warning(f"Invalid config in {self.config_path}, using defaults: {e}")
            return EchoConfig()
        except OSError as e:
            logger.warning(f"Failed to read config from {self.config_path}: {e}")
            return EchoConfig()

    def save_config(self, config: EchoConfig) -> None:
        """Save configuration to file.

        Args:
            config: EchoConfig object to save
        """
        config.save(self.config_path)
        logger.debug(f"Saved config to {self.config_path}")

    def update_config(self, **kwargs: Any) -> EchoConfig:
        """Update configuration with provided values.

        Args:
            **kwargs: Field names or camelCase aliases with new values

        Returns:
            Updated EchoConfig object

        Raises:
            ConfigurationError: If a key is not a known setting
            ValidationError: If a value fails validation
        """
        config = self.load_config()
        data = config.model_dump()

        for key, value in kwargs.items():
            field_name = resolve_config_key(key)
            if field_name is None:
                raise ConfigurationError(
                    f"Unknown configuration key '{key}'",
                    config_file=self.config_path,
                    key=key,
                )
            data[field_name] = value

        try:
            updated = EchoConfig.model_validate(data)
        except PydanticValidationError as e:
            first = e.errors()[0]
            field_name = ".".join(str(part) for part in first["loc"])
            raise ValidationError(
                f"Invalid value for '{field_name}': {first['msg']}",
                field=field_name,
                value=data.get(field_name),
            ) from e

        self.save_config(updated)
        return updated


def resolve_config_key(key: str) -> str | None:
    """Map a field name or camelCase alias to the EchoConfig field name.

    Args:
        key: Key as typed by the user (``recordAIChat`` or ``record_ai_chat``)

    Returns:
        Field name, or None if the key is unknown
    """
    for name, field_info in EchoConfig.model_fields.items():
        if key == name or key == field_info.alias:
            return name
    return None
