"""Runtime wiring: activation and deactivation inside a host.

EchoRuntime builds the full pipeline (store, classifier, state, captures,
controller) from configuration and connects it to a HostEventSource:

- activate(): register host commands, start tracking when enabled, follow
  configuration changes
- deactivate(): stop tracking and release every host registration
"""

import logging
from pathlib import Path

from chat_echo.constants import (
    COMMAND_CLEAR_LOGS,
    COMMAND_START_RECORDING,
    COMMAND_STOP_RECORDING,
    COMMAND_VIEW_LOGS,
    CONFIG_SECTION,
    DEFAULT_RECENT_LINES,
)
from chat_echo.config.settings import RuntimeSettings, get_runtime_settings
from chat_echo.models.config import EchoConfig
from chat_echo.services.config_service import ConfigService
from chat_echo.telemetry.capture import AIConversationCapture, OperationCapture
from chat_echo.telemetry.classifier import get_content_classifier
from chat_echo.telemetry.diagnostics import DiagnosticSink
from chat_echo.telemetry.host import (
    ClipboardAccessor,
    ConfigurationChange,
    Disposable,
    HostEvent,
    HostEventSource,
)
from chat_echo.telemetry.log_store import LogStore
from chat_echo.telemetry.session import SessionController
from chat_echo.telemetry.state import SessionState
from chat_echo.telemetry.viewer import render_html

logger = logging.getLogger(__name__)


class EchoRuntime:
    """One chat-echo instance attached to a host."""

    def __init__(
        self,
        host: HostEventSource,
        clipboard: ClipboardAccessor | None = None,
        config_service: ConfigService | None = None,
        settings: RuntimeSettings | None = None,
        diagnostics: DiagnosticSink | None = None,
    ):
        self._host = host
        self._config_service = config_service or ConfigService()
        self._settings = settings or get_runtime_settings()
        self._diagnostics = diagnostics or DiagnosticSink(capacity=self._settings.diagnostics_capacity)
        self._config = self._config_service.load_config()

        self.store = LogStore(self._config, Path(self._settings.storage_dir), self._diagnostics)
        self.state = SessionState()
        self.recorder = OperationCapture(
            self.store, host, self.state, lambda: self._config, self._diagnostics
        )
        self.ai_capture = AIConversationCapture(
            self.store,
            host,
            self.state,
            lambda: self._config,
            clipboard=clipboard,
            classifier=get_content_classifier(),
            poll_interval=self._settings.clipboard_poll_interval_seconds,
            diagnostics=self._diagnostics,
        )
        self.controller = SessionController(self.store, self.recorder, self.ai_capture, self.state)
        self._registrations: list[Disposable] = []
        self._active = False

    @property
    def config(self) -> EchoConfig:
        """Configuration currently in effect."""
        return self._config

    @property
    def diagnostics(self) -> DiagnosticSink:
        return self._diagnostics

    @property
    def is_active(self) -> bool:
        return self._active

    def activate(self) -> None:
        """Attach to the host. Calling twice is a no-op."""
        if self._active:
            return
        self._registrations = [
            self._host.register_command(COMMAND_START_RECORDING, self.controller.start_recording),
            self._host.register_command(COMMAND_STOP_RECORDING, self.controller.stop_recording),
            self._host.register_command(COMMAND_VIEW_LOGS, self.view_logs_html),
            self._host.register_command(COMMAND_CLEAR_LOGS, self.clear_logs),
            self._host.subscribe(HostEvent.CONFIGURATION_CHANGED, self.on_configuration_changed),
        ]
        self._active = True

        if self._config.enabled:
            self.controller.start_all()
        logger.info(f"chat-echo activated, logging to {self.store.path}")

    def deactivate(self) -> None:
        """Stop tracking and release host registrations."""
        if not self._active:
            return
        self.controller.stop_all()
        registrations, self._registrations = self._registrations, []
        for dispose in registrations:
            try:
                dispose()
            except Exception as e:
                self._diagnostics.report("dispose", e, component="runtime")
        self._active = False
        logger.info("chat-echo deactivated")

    def on_configuration_changed(self, change: ConfigurationChange | None = None) -> None:
        """Reload configuration and start or stop tracking accordingly."""
        if change is not None and not change.affects_configuration(CONFIG_SECTION):
            return
        self._config = self._config_service.load_config()
        logger.debug(f"Configuration reloaded (enabled={self._config.enabled})")
        self.controller.apply_config(self._config)

    def view_logs(self, max_lines: int = DEFAULT_RECENT_LINES) -> str:
        """Recent raw log content."""
        return self.store.read_recent(max_lines)

    def view_logs_html(self, max_lines: int = DEFAULT_RECENT_LINES) -> str:
        """Recent log content rendered as an HTML page."""
        return render_html(self.view_logs(max_lines))

    def clear_logs(self) -> bool:
        """Delete the log and its backup."""
        return self.store.clear()
