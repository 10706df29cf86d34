"""Custom exceptions for chat-echo.

Exception hierarchy:
    ChatEchoError (base)
    ├── ConfigurationError
    │   └── ValidationError
    ├── StorageError
    ├── ClipboardReadError
    └── HostError
"""

from pathlib import Path
from typing import Any


class ChatEchoError(Exception):
    """Base exception; ``details`` are appended to the message by ``__str__``."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({detail_str})"


class ConfigurationError(ChatEchoError):
    """A configuration file or key passed to ``config set`` is invalid."""

    def __init__(self, message: str, config_file: Path | None = None, key: str | None = None):
        details = {}
        if config_file:
            details["config_file"] = str(config_file)
        if key:
            details["key"] = key
        super().__init__(message, details)


class ValidationError(ConfigurationError):
    """A configuration value was rejected by the EchoConfig model."""

    def __init__(self, message: str, field: str, value: Any = None):
        super().__init__(message, key=field)
        if value is not None:
            self.details["value"] = value


class StorageError(ChatEchoError):
    """A log file operation failed.

    LogStore never raises this to callers; it is the error value handed to the
    diagnostic sink.
    """

    def __init__(self, message: str, operation: str, path: Path | None = None):
        details: dict[str, Any] = {"operation": operation}
        if path:
            details["path"] = str(path)
        super().__init__(message, details)


class ClipboardReadError(ChatEchoError):
    """Raised by a clipboard accessor when the clipboard cannot be read."""


class HostError(ChatEchoError):
    """Raised by the host boundary, e.g. on duplicate command registration."""
