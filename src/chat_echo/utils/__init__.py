"""Utility helpers for chat-echo."""

from chat_echo.utils.console import (
    console,
    print_error,
    print_info,
    print_panel,
    print_success,
    print_warning,
)
from chat_echo.utils.log_setup import configure_logging

__all__ = [
    "configure_logging",
    "console",
    "print_error",
    "print_info",
    "print_panel",
    "print_success",
    "print_warning",
]
