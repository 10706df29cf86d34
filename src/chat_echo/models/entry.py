"""Log entry and classification result models.

A LogEntry is the unit of persistence: one entry is serialized as exactly one
line of JSON in the log file and is never mutated after it is written.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def utc_timestamp(now: datetime | None = None) -> str:
    """Return an ISO-8601 UTC timestamp with millisecond precision.

    Args:
        now: Moment to format (defaults to the current time).

    Returns:
        Timestamp such as ``2025-01-15T12:00:00.000Z``.
    """
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class LogEntry:
    """One captured event.

    Attributes:
        timestamp: ISO-8601 capture time.
        type: Uppercase snake-case tag naming the event kind.
        data: Event-specific, JSON-serializable fields.
    """

    timestamp: str
    type: str
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        entry_type: str,
        data: dict[str, Any] | None = None,
        now: datetime | None = None,
    ) -> "LogEntry":
        """Create an entry stamped with the capture time."""
        return cls(timestamp=utc_timestamp(now), type=entry_type, data=dict(data or {}))

    def to_dict(self) -> dict[str, Any]:
        """Convert to the on-disk schema."""
        return {"timestamp": self.timestamp, "type": self.type, "data": self.data}

    def to_json_line(self) -> str:
        """Serialize as a single newline-terminated JSON line.

        Values json cannot encode natively are stringified so that an odd
        payload never prevents the entry from being written.
        """
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str) + "\n"

    @classmethod
    def from_json_line(cls, line: str) -> "LogEntry":
        """Parse one log line.

        Raises:
            ValueError: If the line is not a JSON object with the entry schema.
        """
        payload = json.loads(line)
        if not isinstance(payload, dict):
            raise ValueError("Log line is not a JSON object")
        try:
            timestamp = payload["timestamp"]
            entry_type = payload["type"]
        except KeyError as e:
            raise ValueError(f"Log line is missing field {e}") from e
        data = payload.get("data")
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("Log line data is not an object")
        return cls(timestamp=str(timestamp), type=str(entry_type), data=data)


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of classifying a piece of text.

    Attributes:
        is_likely: Whether the text looks like AI assistant output.
        reasons: Human-readable explanations, empty when is_likely is False.
    """

    is_likely: bool
    reasons: list[str] = field(default_factory=list)
