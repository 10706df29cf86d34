"""Tests for SystemClipboard command selection and error handling."""

import subprocess
from unittest.mock import patch

import pytest

from chat_echo.exceptions import ClipboardReadError
from chat_echo.telemetry.clipboard import (
    LINUX_CLIPBOARD_COMMANDS,
    MACOS_CLIPBOARD_COMMAND,
    WINDOWS_CLIPBOARD_COMMAND,
    SystemClipboard,
    clipboard_commands,
)

RUN = "chat_echo.telemetry.clipboard.subprocess.run"


def _completed(stdout: str = "", returncode: int = 0) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr="")


class TestClipboardCommands:
    def test_platforms(self):
        assert clipboard_commands("Darwin") == (MACOS_CLIPBOARD_COMMAND,)
        assert clipboard_commands("Windows") == (WINDOWS_CLIPBOARD_COMMAND,)
        assert clipboard_commands("Linux") == LINUX_CLIPBOARD_COMMANDS


class TestReadText:
    def test_returns_stdout(self):
        with patch(RUN, return_value=_completed("copied")) as run:
            assert SystemClipboard(system="Darwin").read_text() == "copied"

        assert run.call_args.args[0] == ["pbpaste"]

    def test_falls_back_to_next_tool(self):
        with patch(RUN, side_effect=[FileNotFoundError(), _completed("from xsel")]):
            assert SystemClipboard(system="Linux").read_text() == "from xsel"

    def test_all_tools_fail(self):
        failures = [
            FileNotFoundError(),
            subprocess.TimeoutExpired(cmd="xsel", timeout=3),
            _completed(returncode=1),
        ]
        with patch(RUN, side_effect=failures):
            with pytest.raises(ClipboardReadError) as exc_info:
                SystemClipboard(system="Linux").read_text()

        assert "xclip: not installed" in str(exc_info.value)
        assert "wl-paste: exit code 1" in str(exc_info.value)
