"""Pytest configuration and fixtures for chat-echo tests."""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from chat_echo.models.config import EchoConfig
from chat_echo.telemetry.diagnostics import DiagnosticSink
from chat_echo.telemetry.host import HostEventBus
from chat_echo.telemetry.log_store import LogStore
from chat_echo.utils.log_setup import PACKAGE_LOGGER


class FakeClipboard:
    """ClipboardAccessor returning scripted text; raises when given an exception."""

    def __init__(self, text: str = ""):
        self.text = text
        self.error: Exception | None = None
        self.reads = 0

    def read_text(self) -> str:
        self.reads += 1
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo configure_logging() calls made by CLI tests."""
    yield
    echo_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in echo_logger.handlers:
        handler.close()
    echo_logger.handlers.clear()
    echo_logger.propagate = True
    echo_logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Temporary project directory set as cwd, with storage redirected into it.

    Yields:
        Path to the project directory
    """
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.setenv("CHAT_ECHO_STORAGE_DIR", str(tmp_path / "storage"))
    original_cwd = Path.cwd()
    os.chdir(project)
    try:
        yield project
    finally:
        os.chdir(original_cwd)


@pytest.fixture
def storage_dir(tmp_path: Path) -> Path:
    """Default storage directory for log stores."""
    return tmp_path / "storage"


@pytest.fixture
def diagnostics() -> DiagnosticSink:
    return DiagnosticSink()


@pytest.fixture
def config() -> EchoConfig:
    return EchoConfig()


@pytest.fixture
def store(config: EchoConfig, storage_dir: Path, diagnostics: DiagnosticSink) -> LogStore:
    """LogStore writing into the temporary storage directory."""
    return LogStore(config, storage_dir, diagnostics)


@pytest.fixture
def bus() -> HostEventBus:
    return HostEventBus()


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard()
