"""Path constants for chat-echo.

Defines where chat-echo keeps its project configuration and which file
names the log store manages.
"""

from pathlib import Path

# =============================================================================
# Project Configuration
# =============================================================================

CONFIG_DIR = ".chat-echo"
CONFIG_FILE = ".chat-echo/config.yaml"

# =============================================================================
# Log Files
# =============================================================================

LOG_FILENAME = "chat-echo.log"
BACKUP_SUFFIX = ".old"

# Host default storage directory when CHAT_ECHO_STORAGE_DIR is not set
DEFAULT_STORAGE_DIR = Path.home() / ".chat-echo"
