"""Tests for EchoRuntime activation, host commands and configuration changes."""

from pathlib import Path

import pytest

from chat_echo.config.settings import RuntimeSettings
from chat_echo.constants import (
    COMMAND_CLEAR_LOGS,
    COMMAND_RECORD_COMMAND,
    COMMAND_START_RECORDING,
    COMMAND_STOP_RECORDING,
    COMMAND_VIEW_LOGS,
)
from chat_echo.models.config import EchoConfig
from chat_echo.services.config_service import ConfigService
from chat_echo.telemetry.host import ConfigurationChange, Document, HostEvent
from chat_echo.telemetry.runtime import EchoRuntime


@pytest.fixture
def config_service(tmp_path: Path) -> ConfigService:
    return ConfigService(project_root=tmp_path / "project")


@pytest.fixture
def runtime(bus, config_service, storage_dir) -> EchoRuntime:
    settings = RuntimeSettings(storage_dir=storage_dir, clipboard_poll_interval_seconds=3600)
    echo = EchoRuntime(bus, clipboard=None, config_service=config_service, settings=settings)
    yield echo
    echo.deactivate()


def _types(runtime: EchoRuntime) -> list[str]:
    return [entry.type for entry in runtime.store.read_entries()]


class TestActivation:
    def test_activate_registers_commands(self, runtime, bus):
        runtime.activate()

        for command_id in (
            COMMAND_START_RECORDING,
            COMMAND_STOP_RECORDING,
            COMMAND_VIEW_LOGS,
            COMMAND_CLEAR_LOGS,
            COMMAND_RECORD_COMMAND,
        ):
            assert bus.has_command(command_id)

    def test_activate_starts_tracking_when_enabled(self, runtime):
        runtime.activate()

        assert runtime.controller.is_recording
        assert runtime.controller.is_ai_tracking
        assert _types(runtime) == ["RECORDING_STARTED", "AI_TRACKING_STARTED"]

    def test_activate_disabled_does_not_start(self, bus, config_service, storage_dir):
        config_service.save_config(EchoConfig(enabled=False))
        runtime = EchoRuntime(
            bus, config_service=config_service, settings=RuntimeSettings(storage_dir=storage_dir)
        )

        runtime.activate()

        assert not runtime.controller.is_recording
        assert bus.has_command(COMMAND_START_RECORDING)
        runtime.deactivate()

    def test_activate_twice_is_noop(self, runtime):
        runtime.activate()
        runtime.activate()

        assert _types(runtime) == ["RECORDING_STARTED", "AI_TRACKING_STARTED"]

    def test_deactivate_releases_host(self, runtime, bus):
        runtime.activate()

        runtime.deactivate()

        assert bus.commands == []
        assert bus.listener_count() == 0
        assert not runtime.is_active
        assert _types(runtime)[-2:] == ["RECORDING_STOPPED", "AI_TRACKING_STOPPED"]


class TestHostCommands:
    def test_stop_and_start_commands(self, runtime, bus):
        runtime.activate()

        bus.execute_command(COMMAND_STOP_RECORDING)
        assert not runtime.controller.is_recording

        bus.execute_command(COMMAND_START_RECORDING)
        assert runtime.controller.is_recording

    def test_recording_commands_leave_ai_tracking_alone(self, runtime, bus):
        """Start/stop recording only drive the recording concern."""
        runtime.activate()

        bus.execute_command(COMMAND_STOP_RECORDING)

        assert not runtime.controller.is_recording
        assert runtime.controller.is_ai_tracking

        runtime.controller.stop_ai_tracking()
        bus.execute_command(COMMAND_START_RECORDING)

        assert runtime.controller.is_recording
        assert not runtime.controller.is_ai_tracking
        assert _types(runtime)[2:] == [
            "RECORDING_STOPPED",
            "AI_TRACKING_STOPPED",
            "RECORDING_STARTED",
        ]

    def test_view_logs_command_returns_html(self, runtime, bus):
        runtime.activate()

        html = bus.execute_command(COMMAND_VIEW_LOGS)

        assert "RECORDING_STARTED" in html

    def test_clear_logs_command(self, runtime, bus):
        runtime.activate()

        assert bus.execute_command(COMMAND_CLEAR_LOGS) is True
        assert runtime.view_logs() == ""

    def test_events_flow_to_log(self, runtime, bus):
        runtime.activate()

        bus.emit(HostEvent.DOCUMENT_SAVED, Document(path="/a.py", file_name="a.py"))

        assert _types(runtime)[-1] == "FILE_SAVE"


class TestConfigurationChanges:
    def test_disable_stops_tracking(self, runtime, bus, config_service):
        runtime.activate()
        config_service.save_config(EchoConfig(enabled=False))

        bus.emit(HostEvent.CONFIGURATION_CHANGED, ConfigurationChange())

        assert not runtime.controller.is_recording
        assert not runtime.config.enabled

    def test_unrelated_section_is_ignored(self, runtime, bus, config_service):
        runtime.activate()
        config_service.save_config(EchoConfig(enabled=False))

        bus.emit(HostEvent.CONFIGURATION_CHANGED, ConfigurationChange(sections=("editor",)))

        assert runtime.controller.is_recording

    def test_toggle_setting_takes_effect(self, runtime, bus, config_service):
        runtime.activate()
        config_service.save_config(EchoConfig(record_file_operations=False))
        bus.emit(HostEvent.CONFIGURATION_CHANGED, ConfigurationChange())

        bus.emit(HostEvent.DOCUMENT_SAVED, Document(path="/a.py"))

        assert "FILE_SAVE" not in _types(runtime)
