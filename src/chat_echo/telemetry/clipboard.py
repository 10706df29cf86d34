"""System clipboard access for standalone use.

Editors provide their own clipboard accessor; when chat-echo runs from the
command line it reads the OS clipboard through the platform's command-line
tools instead.
"""

import platform
import subprocess

from chat_echo.constants import CLIPBOARD_READ_TIMEOUT_SECONDS
from chat_echo.exceptions import ClipboardReadError

LINUX_CLIPBOARD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("xclip", "-selection", "clipboard", "-o"),
    ("xsel", "--clipboard", "--output"),
    ("wl-paste", "--no-newline"),
)
MACOS_CLIPBOARD_COMMAND: tuple[str, ...] = ("pbpaste",)
WINDOWS_CLIPBOARD_COMMAND: tuple[str, ...] = ("powershell", "-command", "Get-Clipboard")


def clipboard_commands(system: str | None = None) -> tuple[tuple[str, ...], ...]:
    """Candidate read commands for a platform, in preference order."""
    system = system or platform.system()
    if system == "Darwin":
        return (MACOS_CLIPBOARD_COMMAND,)
    if system == "Windows":
        return (WINDOWS_CLIPBOARD_COMMAND,)
    return LINUX_CLIPBOARD_COMMANDS


class SystemClipboard:
    """ClipboardAccessor backed by pbpaste / xclip / xsel / wl-paste / PowerShell."""

    def __init__(
        self,
        system: str | None = None,
        timeout_seconds: float = CLIPBOARD_READ_TIMEOUT_SECONDS,
    ):
        self._commands = clipboard_commands(system)
        self._timeout = timeout_seconds

    def read_text(self) -> str:
        """Return the clipboard text.

        Raises:
            ClipboardReadError: If no clipboard tool is available or every
                available tool failed.
        """
        errors: list[str] = []
        for cmd in self._commands:
            try:
                result = subprocess.run(
                    list(cmd),
                    capture_output=True,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                    timeout=self._timeout,
                )
            except FileNotFoundError:
                errors.append(f"{cmd[0]}: not installed")
                continue
            except (subprocess.TimeoutExpired, OSError) as e:
                errors.append(f"{cmd[0]}: {e}")
                continue

            if result.returncode == 0:
                return result.stdout
            errors.append(f"{cmd[0]}: exit code {result.returncode}")

        raise ClipboardReadError(
            "Could not read the clipboard",
            details={"attempts": "; ".join(errors)},
        )
