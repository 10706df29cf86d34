"""Diagnostic sink for best-effort pipeline failures.

The capture pipeline must never crash the host or block later events, so
transient failures (file I/O, clipboard reads, listener disposal) are caught
where they happen. Instead of being silently dropped they are handed to one
DiagnosticSink, which logs them and keeps a bounded history that the CLI and
tests can inspect.
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any

from chat_echo.constants import DEFAULT_DIAGNOSTICS_CAPACITY
from chat_echo.models.entry import utc_timestamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """A recorded pipeline failure.

    Attributes:
        operation: What was being attempted (e.g. ``append``, ``clipboard_read``).
        message: Error description.
        error_type: Exception class name.
        timestamp: When the failure was reported.
        details: Extra context such as the file path.
    """

    operation: str
    message: str
    error_type: str
    timestamp: str
    details: dict[str, Any] = field(default_factory=dict)


class DiagnosticSink:
    """Collects failures from every pipeline component."""

    def __init__(
        self,
        capacity: int = DEFAULT_DIAGNOSTICS_CAPACITY,
        sink_logger: logging.Logger | None = None,
    ):
        """Initialize the sink.

        Args:
            capacity: Maximum number of diagnostics retained.
            sink_logger: Logger to report through (defaults to this module's).
        """
        self._logger = sink_logger or logger
        self._entries: deque[Diagnostic] = deque(maxlen=capacity)
        self._lock = threading.Lock()
        self._total = 0

    def report(
        self,
        operation: str,
        error: BaseException,
        level: int = logging.WARNING,
        **details: Any,
    ) -> Diagnostic:
        """Record a failure.

        Args:
            operation: Name of the failed operation.
            error: The exception that was caught.
            level: Logging level used for the report.
            **details: Additional context.

        Returns:
            The recorded Diagnostic.
        """
        diagnostic = Diagnostic(
            operation=operation,
            message=str(error),
            error_type=type(error).__name__,
            timestamp=utc_timestamp(),
            details=details,
        )
        with self._lock:
            self._entries.append(diagnostic)
            self._total += 1
        self._logger.log(level, f"{operation} failed: {diagnostic.error_type}: {error}")
        return diagnostic

    @property
    def recent(self) -> list[Diagnostic]:
        """Retained diagnostics, oldest first."""
        with self._lock:
            return list(self._entries)

    @property
    def total(self) -> int:
        """Number of diagnostics reported since creation (including evicted)."""
        return self._total

    def for_operation(self, operation: str) -> list[Diagnostic]:
        """Retained diagnostics for one operation."""
        return [d for d in self.recent if d.operation == operation]

    def clear(self) -> None:
        """Drop retained diagnostics."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
