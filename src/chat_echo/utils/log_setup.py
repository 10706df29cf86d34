"""Logging configuration for chat-echo.

chat-echo's own diagnostics (failed appends, clipboard errors, lifecycle
transitions) go through the standard library ``logging`` package under the
``chat_echo`` logger. They never go to the telemetry log file itself.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from chat_echo.constants import BYTES_PER_MB

PACKAGE_LOGGER = "chat_echo"


def configure_logging(
    log_level: str = "INFO",
    log_file: Path | None = None,
    max_bytes: int = BYTES_PER_MB,
    backup_count: int = 3,
) -> logging.Logger:
    """Configure the package logger.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional diagnostics file; rotated like the daemon log.
        max_bytes: Rotation threshold for the diagnostics file.
        backup_count: Number of rotated diagnostics files to keep.

    Returns:
        The configured ``chat_echo`` logger.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    echo_logger = logging.getLogger(PACKAGE_LOGGER)
    echo_logger.setLevel(level)
    echo_logger.propagate = False

    # Reconfiguring must not stack handlers
    echo_logger.handlers.clear()

    if level == logging.DEBUG:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s",
            datefmt="%H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%H:%M:%S",
        )

    handler: logging.Handler
    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                log_file,
                mode="a",
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        except OSError as e:
            handler = logging.StreamHandler()
            handler.setFormatter(formatter)
            echo_logger.addHandler(handler)
            echo_logger.warning(f"Could not set up file logging to {log_file}: {e}")
            return echo_logger
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)
    echo_logger.addHandler(handler)
    return echo_logger
