"""Append-only JSON Lines log with size-triggered rotation.

The store owns two files: the primary log and a single ``.old`` backup.
Before each append the primary's size is checked; once it exceeds the
configured threshold the backup is discarded, the primary becomes the new
backup, and the entry starts a fresh primary.

Every public operation is best-effort. I/O failures are reported to the
DiagnosticSink and turned into a ``False``/empty return value, never raised
to the caller, so a full disk cannot break event capture.

The rotation threshold and directory are read once at construction. A
configuration change that moves the log requires building a new store.
"""

import logging
import threading
from collections import deque
from pathlib import Path
from typing import Any

from chat_echo.config.paths import BACKUP_SUFFIX, LOG_FILENAME
from chat_echo.constants import DEFAULT_RECENT_LINES
from chat_echo.exceptions import StorageError
from chat_echo.models.config import EchoConfig
from chat_echo.models.entry import LogEntry
from chat_echo.telemetry.diagnostics import DiagnosticSink

logger = logging.getLogger(__name__)


def resolve_log_path(log_path: str, storage_dir: Path) -> Path:
    """Resolve the primary log file path.

    Args:
        log_path: Configured custom directory (empty for the default).
        storage_dir: Host-provided default storage directory.

    Returns:
        Absolute path of the primary log file.
    """
    if log_path and log_path.strip():
        return Path(log_path.strip()).expanduser().resolve() / LOG_FILENAME
    return Path(storage_dir).expanduser() / LOG_FILENAME


class LogStore:
    """Owns the on-disk telemetry log."""

    def __init__(
        self,
        config: EchoConfig,
        storage_dir: Path,
        diagnostics: DiagnosticSink | None = None,
    ):
        """Initialize the store.

        Args:
            config: Configuration providing ``log_path`` and ``max_log_file_size``.
            storage_dir: Default directory used when ``log_path`` is empty.
            diagnostics: Sink for I/O failures (a private one if omitted).
        """
        self._log_file_path = resolve_log_path(config.log_path, storage_dir)
        self._backup_path = self._log_file_path.with_name(self._log_file_path.name + BACKUP_SUFFIX)
        self._max_file_size = config.max_log_file_bytes
        self._diagnostics = diagnostics or DiagnosticSink()
        # Serializes rotate+append so concurrent appends never split a line
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        """Resolved primary log file path."""
        return self._log_file_path

    @property
    def backup_path(self) -> Path:
        """Path of the rotated backup file."""
        return self._backup_path

    @property
    def max_file_size(self) -> int:
        """Rotation threshold in bytes."""
        return self._max_file_size

    @property
    def diagnostics(self) -> DiagnosticSink:
        """Sink receiving this store's failures."""
        return self._diagnostics

    def size(self) -> int:
        """Current size of the primary file in bytes (0 if absent)."""
        try:
            return self._log_file_path.stat().st_size
        except OSError:
            return 0

    def append(self, entry: LogEntry) -> bool:
        """Append one entry, rotating first if the primary is over the threshold.

        Args:
            entry: Entry to persist.

        Returns:
            True if the line was written.
        """
        line = entry.to_json_line()
        with self._lock:
            if self._needs_rotation():
                try:
                    self._rotate_locked()
                except OSError as e:
                    # Keep writing to the oversized primary rather than losing the entry
                    self._report("rotate", e)
            try:
                self._log_file_path.parent.mkdir(parents=True, exist_ok=True)
                with open(self._log_file_path, "a", encoding="utf-8") as f:
                    f.write(line)
            except OSError as e:
                self._report("append", e)
                return False
        return True

    def log_operation(self, entry_type: str, data: dict[str, Any] | None = None) -> bool:
        """Create an entry stamped now and append it.

        Args:
            entry_type: Event type tag.
            data: Event payload.

        Returns:
            True if the line was written.
        """
        return self.append(LogEntry.create(entry_type, data))

    def rotate(self) -> bool:
        """Move the primary file to the backup slot.

        Returns:
            True if a rotation happened, False if there was nothing to rotate
            or the rotation failed.
        """
        with self._lock:
            try:
                return self._rotate_locked()
            except OSError as e:
                self._report("rotate", e)
                return False

    def read_recent(self, max_lines: int = DEFAULT_RECENT_LINES) -> str:
        """Return the last non-blank lines of the primary file.

        Args:
            max_lines: Maximum number of lines to return.

        Returns:
            Newline-joined lines in original order, or "" if the file is
            absent, empty or unreadable.
        """
        if max_lines <= 0:
            return ""
        try:
            with open(self._log_file_path, encoding="utf-8", errors="replace") as f:
                recent: deque[str] = deque(
                    (line.rstrip("\r\n") for line in f if line.strip()),
                    maxlen=max_lines,
                )
        except FileNotFoundError:
            return ""
        except OSError as e:
            self._report("read", e)
            return ""
        return "\n".join(recent)

    def read_entries(self, max_lines: int = DEFAULT_RECENT_LINES) -> list[LogEntry]:
        """Parse the recent lines into entries, skipping malformed ones."""
        entries = []
        for line in self.read_recent(max_lines).splitlines():
            try:
                entries.append(LogEntry.from_json_line(line))
            except ValueError:
                logger.debug(f"Skipping malformed log line: {line[:80]}")
        return entries

    def clear(self) -> bool:
        """Delete the primary and backup files.

        Returns:
            True if both files are gone afterwards.
        """
        with self._lock:
            try:
                self._log_file_path.unlink(missing_ok=True)
                self._backup_path.unlink(missing_ok=True)
            except OSError as e:
                self._report("clear", e)
                return False
        logger.info(f"Cleared telemetry log at {self._log_file_path}")
        return True

    def _needs_rotation(self) -> bool:
        try:
            return self._log_file_path.stat().st_size > self._max_file_size
        except OSError:
            return False

    def _rotate_locked(self) -> bool:
        """Rotate while holding the lock. Raises OSError on failure."""
        if not self._log_file_path.exists():
            return False
        self._backup_path.unlink(missing_ok=True)
        self._log_file_path.replace(self._backup_path)
        logger.info(f"Rotated telemetry log to {self._backup_path}")
        return True

    def _report(self, operation: str, error: OSError) -> None:
        storage_error = StorageError(
            f"Log {operation} failed: {error}",
            operation=operation,
            path=self._log_file_path,
        )
        self._diagnostics.report(operation, storage_error, path=str(self._log_file_path))
