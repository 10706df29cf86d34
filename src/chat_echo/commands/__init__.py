"""CLI commands for chat-echo."""

from chat_echo.commands.config_cmd import config_app
from chat_echo.commands.logs_cmd import clear_command, logs_command, path_command
from chat_echo.commands.record_cmd import classify_command, record_command
from chat_echo.commands.watch_cmd import watch_command

__all__ = [
    "classify_command",
    "clear_command",
    "config_app",
    "logs_command",
    "path_command",
    "record_command",
    "watch_command",
]
