"""Tests for EchoConfig, ConfigService and RuntimeSettings."""

from pathlib import Path

import pytest
import yaml

from chat_echo.config.settings import RuntimeSettings
from chat_echo.exceptions import ConfigurationError, ValidationError
from chat_echo.models.config import EchoConfig
from chat_echo.services.config_service import ConfigService, resolve_config_key


@pytest.fixture
def service(tmp_path: Path) -> ConfigService:
    return ConfigService(project_root=tmp_path)


class TestEchoConfig:
    def test_defaults(self):
        config = EchoConfig()

        assert config.enabled is True
        assert config.record_ai_chat is True
        assert config.record_cursor_movement is True
        assert config.record_file_operations is True
        assert config.log_path == ""
        assert config.max_log_file_size == 10
        assert config.max_log_file_bytes == 10_485_760

    def test_accepts_aliases(self):
        config = EchoConfig(recordAIChat=False, maxLogFileSize=0.5)

        assert config.record_ai_chat is False
        assert config.max_log_file_bytes == 524_288

    def test_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            EchoConfig(max_log_file_size=0)

    def test_yaml_dict_uses_aliases(self):
        assert list(EchoConfig().to_yaml_dict()) == [
            "enabled",
            "recordAIChat",
            "recordCursorMovement",
            "recordFileOperations",
            "logPath",
            "maxLogFileSize",
        ]

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "config.yaml"
        EchoConfig(record_cursor_movement=False, log_path="/logs").save(path)

        data = yaml.safe_load(path.read_text())
        assert data["chatEcho"]["recordCursorMovement"] is False

        loaded = EchoConfig.load(path)
        assert loaded.record_cursor_movement is False
        assert loaded.log_path == "/logs"

    def test_load_bare_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("recordFileOperations: false\n")

        assert EchoConfig.load(path).record_file_operations is False

    def test_load_missing_file(self, tmp_path):
        assert EchoConfig.load(tmp_path / "missing.yaml") == EchoConfig()


class TestConfigService:
    def test_missing_file_gives_defaults(self, service):
        assert service.load_config() == EchoConfig()

    def test_invalid_yaml_gives_defaults(self, service):
        service.config_path.parent.mkdir(parents=True)
        service.config_path.write_text("chatEcho: [unclosed\n")

        assert service.load_config() == EchoConfig()

    def test_invalid_value_gives_defaults(self, service):
        service.config_path.parent.mkdir(parents=True)
        service.config_path.write_text("chatEcho:\n  maxLogFileSize: -1\n")

        assert service.load_config() == EchoConfig()

    def test_update_config_by_alias(self, service):
        updated = service.update_config(recordAIChat=False)

        assert updated.record_ai_chat is False
        assert service.load_config().record_ai_chat is False

    def test_update_config_by_field_name(self, service):
        service.update_config(max_log_file_size=2)

        assert service.load_config().max_log_file_size == 2

    def test_update_unknown_key(self, service):
        with pytest.raises(ConfigurationError, match="Unknown configuration key"):
            service.update_config(colour="blue")

    def test_update_invalid_value(self, service):
        with pytest.raises(ValidationError):
            service.update_config(maxLogFileSize=0)

        assert not service.config_path.exists()

    def test_resolve_config_key(self):
        assert resolve_config_key("logPath") == "log_path"
        assert resolve_config_key("log_path") == "log_path"
        assert resolve_config_key("nope") is None


class TestRuntimeSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CHAT_ECHO_STORAGE_DIR", raising=False)
        monkeypatch.delenv("CHAT_ECHO_CLIPBOARD_POLL_INTERVAL_SECONDS", raising=False)

        settings = RuntimeSettings()

        assert settings.storage_dir == Path.home() / ".chat-echo"
        assert settings.clipboard_poll_interval_seconds == 2.0

    def test_environment_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CHAT_ECHO_STORAGE_DIR", str(tmp_path))
        monkeypatch.setenv("CHAT_ECHO_CLIPBOARD_POLL_INTERVAL_SECONDS", "0.5")

        settings = RuntimeSettings()

        assert settings.storage_dir == tmp_path
        assert settings.clipboard_poll_interval_seconds == 0.5
