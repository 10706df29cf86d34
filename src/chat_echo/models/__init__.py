"""Data models for chat-echo"""

from .config import EchoConfig
from .entry import ClassificationResult, LogEntry, utc_timestamp

__all__ = [
    "ClassificationResult",
    "EchoConfig",
    "LogEntry",
    "utc_timestamp",
]
