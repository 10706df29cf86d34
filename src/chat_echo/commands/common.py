"""Shared helpers for CLI commands."""

from pathlib import Path

from chat_echo.config.settings import get_runtime_settings
from chat_echo.services.config_service import ConfigService
from chat_echo.telemetry.host import ClipboardAccessor, HostEventBus
from chat_echo.telemetry.log_store import LogStore
from chat_echo.telemetry.runtime import EchoRuntime


def build_log_store(project_root: Path | None = None) -> LogStore:
    """LogStore for the project config and the environment's storage dir."""
    config = ConfigService(project_root or Path.cwd()).load_config()
    return LogStore(config, get_runtime_settings().storage_dir)


def build_runtime(
    bus: HostEventBus,
    clipboard: ClipboardAccessor | None = None,
    project_root: Path | None = None,
) -> EchoRuntime:
    """EchoRuntime wired to an in-process event bus."""
    return EchoRuntime(
        host=bus,
        clipboard=clipboard,
        config_service=ConfigService(project_root or Path.cwd()),
        settings=get_runtime_settings(),
    )
