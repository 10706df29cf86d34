"""Telemetry pipeline: capture, classify and persist editor activity."""

from chat_echo.telemetry.capture import (
    AIConversationCapture,
    EventCapture,
    OperationCapture,
    PeriodicTask,
)
from chat_echo.telemetry.classifier import (
    ContentClassifier,
    classify_content,
    get_content_classifier,
)
from chat_echo.telemetry.diagnostics import Diagnostic, DiagnosticSink
from chat_echo.telemetry.host import HostEvent, HostEventBus
from chat_echo.telemetry.log_store import LogStore
from chat_echo.telemetry.runtime import EchoRuntime
from chat_echo.telemetry.session import SessionController
from chat_echo.telemetry.state import SessionState, TrackingConcern

__all__ = [
    "AIConversationCapture",
    "ContentClassifier",
    "Diagnostic",
    "DiagnosticSink",
    "EchoRuntime",
    "EventCapture",
    "HostEvent",
    "HostEventBus",
    "LogStore",
    "OperationCapture",
    "PeriodicTask",
    "SessionController",
    "SessionState",
    "TrackingConcern",
    "classify_content",
    "get_content_classifier",
]
