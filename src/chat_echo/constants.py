"""Constants for chat-echo.

This module centralizes the magic strings and numbers used by the telemetry
pipeline: event type tags, classifier reason labels, host command identifiers
and configuration defaults.
"""

from typing import Final

from chat_echo import __version__

VERSION: Final[str] = __version__

# =============================================================================
# Configuration Defaults
# =============================================================================

CONFIG_SECTION: Final[str] = "chatEcho"
DEFAULT_ENABLED: Final[bool] = True
DEFAULT_RECORD_AI_CHAT: Final[bool] = True
DEFAULT_RECORD_CURSOR_MOVEMENT: Final[bool] = True
DEFAULT_RECORD_FILE_OPERATIONS: Final[bool] = True
DEFAULT_LOG_PATH: Final[str] = ""
DEFAULT_MAX_LOG_FILE_SIZE_MB: Final[float] = 10
BYTES_PER_MB: Final[int] = 1024 * 1024

# =============================================================================
# Log Store
# =============================================================================

DEFAULT_RECENT_LINES: Final[int] = 1000
DEFAULT_DIAGNOSTICS_CAPACITY: Final[int] = 100

# =============================================================================
# Capture
# =============================================================================

CLIPBOARD_POLL_INTERVAL_SECONDS: Final[float] = 2.0
CLIPBOARD_READ_TIMEOUT_SECONDS: Final[float] = 3.0
PERIODIC_TASK_JOIN_TIMEOUT_SECONDS: Final[float] = 5.0
CONVERSATION_ID_PREFIX: Final[str] = "conv"

# =============================================================================
# Event Types (LogEntry.type)
# =============================================================================

EVENT_RECORDING_STARTED: Final[str] = "RECORDING_STARTED"
EVENT_RECORDING_STOPPED: Final[str] = "RECORDING_STOPPED"
EVENT_AI_TRACKING_STARTED: Final[str] = "AI_TRACKING_STARTED"
EVENT_AI_TRACKING_STOPPED: Final[str] = "AI_TRACKING_STOPPED"

EVENT_CURSOR_MOVEMENT: Final[str] = "CURSOR_MOVEMENT"
EVENT_EDITOR_FOCUS: Final[str] = "EDITOR_FOCUS"
EVENT_EDITOR_BLUR: Final[str] = "EDITOR_BLUR"
EVENT_FILE_OPEN: Final[str] = "FILE_OPEN"
EVENT_FILE_SAVE: Final[str] = "FILE_SAVE"
EVENT_FILE_CLOSE: Final[str] = "FILE_CLOSE"
EVENT_TEXT_CHANGE: Final[str] = "TEXT_CHANGE"
EVENT_COMMAND_EXECUTION: Final[str] = "COMMAND_EXECUTION"

EVENT_AI_CLIPBOARD_CONTENT: Final[str] = "AI_CLIPBOARD_CONTENT"
EVENT_AI_COMMAND_EXECUTED: Final[str] = "AI_COMMAND_EXECUTED"
EVENT_AI_CONVERSATION: Final[str] = "AI_CONVERSATION"
EVENT_TERMINAL_OPENED: Final[str] = "TERMINAL_OPENED"
EVENT_TERMINAL_CLOSED: Final[str] = "TERMINAL_CLOSED"

LIFECYCLE_EVENTS: Final[tuple[str, ...]] = (
    EVENT_RECORDING_STARTED,
    EVENT_RECORDING_STOPPED,
    EVENT_AI_TRACKING_STARTED,
    EVENT_AI_TRACKING_STOPPED,
)

# =============================================================================
# Lifecycle Marker Messages
# =============================================================================

MESSAGE_RECORDING_STARTED: Final[str] = "Started recording user operations"
MESSAGE_RECORDING_STOPPED: Final[str] = "Stopped recording user operations"
MESSAGE_AI_TRACKING_STARTED: Final[str] = "Started tracking AI conversation content"
MESSAGE_AI_TRACKING_STOPPED: Final[str] = "Stopped tracking AI conversation content"
MESSAGE_EDITOR_BLUR: Final[str] = "Editor lost focus"

# =============================================================================
# Classifier Reason Labels
# =============================================================================

REASON_ASSISTANT_REPLY: Final[str] = "assistant reply pattern"
REASON_CODE_BLOCK: Final[str] = "contains code block"
REASON_MARKDOWN: Final[str] = "markdown formatting"
REASON_LONG_CONTENT: Final[str] = "long content"
REASON_MULTI_LINE: Final[str] = "multi-line structure"
REASON_GENERIC: Final[str] = "generic AI content signature"

STRUCTURE_MIN_LENGTH: Final[int] = 100
LONG_CONTENT_MIN_LENGTH: Final[int] = 200

# =============================================================================
# Host Commands
# =============================================================================

COMMAND_START_RECORDING: Final[str] = "chatEcho.startRecording"
COMMAND_STOP_RECORDING: Final[str] = "chatEcho.stopRecording"
COMMAND_VIEW_LOGS: Final[str] = "chatEcho.viewLogs"
COMMAND_CLEAR_LOGS: Final[str] = "chatEcho.clearLogs"
COMMAND_RECORD_COMMAND: Final[str] = "chatEcho.recordCommand"
AI_COMMAND_TRACK_PREFIX: Final[str] = "chatEcho.track."

AI_RELATED_COMMANDS: Final[tuple[str, ...]] = (
    "workbench.action.chat.open",
    "workbench.action.chat.openInSidebar",
    "github.copilot.generate",
    "github.copilot.toggleInlineSuggestion",
    "cursor.composer.open",
    "cursor.chat.open",
)
