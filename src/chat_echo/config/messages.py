"""UI messages and strings for chat-echo.

User-facing text for the CLI, grouped by command.
"""

# =============================================================================
# Project Metadata
# =============================================================================

PROJECT_NAME = "chat-echo"
PROJECT_TAGLINE = "Activity telemetry for editor sessions and AI conversations"

HELP_TEXT = f"""
[bold cyan]chat-echo[/bold cyan] - {PROJECT_TAGLINE}

[bold]Commands:[/bold]
  [cyan]watch[/cyan]      Record editor activity and AI content in the foreground
  [cyan]logs[/cyan]       Show recent log entries
  [cyan]clear[/cyan]      Delete the log and its backup
  [cyan]record[/cyan]     Log a conversation manually
  [cyan]classify[/cyan]   Check whether text looks like AI assistant output
  [cyan]path[/cyan]       Show where the log is written
  [cyan]config[/cyan]     Show or change settings
  [cyan]version[/cyan]    Show version information

[bold]Examples:[/bold]
  [dim]$ chat-echo watch[/dim]
  [dim]$ chat-echo logs -n 50[/dim]
  [dim]$ chat-echo config set recordCursorMovement false[/dim]
"""

# =============================================================================
# Watch
# =============================================================================

WATCH_STARTED = "Watching activity, logging to {path}"
WATCH_DISABLED = "chat-echo is disabled in config; tracking was not started"
WATCH_STOP_HINT = "Press Ctrl+C to stop"
WATCH_STDIN_HINT = "Reading JSON events from stdin until EOF"
WATCH_STOPPED = "Stopped watching"
WATCH_BAD_EVENT = "Skipping event line {line_number}: {error}"

# =============================================================================
# Logs
# =============================================================================

LOGS_EMPTY = "No log entries yet"
LOGS_HTML_WRITTEN = "Wrote log viewer to {path}"
LOGS_HTML_FAILED = "Could not write {path}: {error}"
CLEAR_CONFIRM = "Delete {path} and its backup?"
CLEAR_CANCELLED = "Clear cancelled"
CLEAR_SUCCESS = "Logs cleared"
CLEAR_FAILED = "Failed to clear logs; see diagnostics output"

# =============================================================================
# Record / Classify
# =============================================================================

RECORD_SUCCESS = "Recorded conversation {conversation_id}"
RECORD_BAD_CONTEXT = "--context must be valid JSON: {error}"
RECORD_FAILED = "Could not start AI tracking; conversation not recorded"
CLASSIFY_NO_TEXT = "No text to classify. Pass TEXT or pipe it on stdin."
CLASSIFY_LIKELY = "Likely AI assistant content"
CLASSIFY_NOT_LIKELY = "Not likely AI assistant content"

# =============================================================================
# Config
# =============================================================================

CONFIG_UPDATED = "Set {key} = {value}"
CONFIG_FILE_LABEL = "Config file: {path}"
