"""Tests for configuration and logging setup."""

import json
import logging

import pytest

from sonifier.config import SonifierConfig
from sonifier.logging_config import QUIET_LOGGERS, JSONFormatter, setup_logging

ENV_VARS = [
    "API_HOST",
    "API_PORT",
    "LOG_LEVEL",
    "LOG_FILE",
    "BROADCAST_SEND_TIMEOUT",
    "CORS_ORIGINS",
    "SONIFIER_WS_URL",
    "PLAYBACK_BASE_DELAY_MS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSonifierConfig:
    """Tests for SonifierConfig.from_env()."""

    def test_defaults(self):
        config = SonifierConfig.from_env()

        assert config.host == "localhost"
        assert config.port == 44444
        assert config.send_timeout == 5.0
        assert config.cors_origins == ["*"]
        assert config.playback_base_delay_ms == 20.0
        assert config.api_url == "http://localhost:44444"
        assert config.stream_url == "ws://localhost:44444/ws"

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("API_HOST", "0.0.0.0")
        monkeypatch.setenv("API_PORT", "8080")
        monkeypatch.setenv("BROADCAST_SEND_TIMEOUT", "0.5")
        monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
        monkeypatch.setenv("SONIFIER_WS_URL", "ws://remote:9000/ws")

        config = SonifierConfig.from_env()

        assert config.port == 8080
        assert config.send_timeout == 0.5
        assert config.cors_origins == ["http://a.test", "http://b.test"]
        assert config.stream_url == "ws://remote:9000/ws"

    @pytest.mark.parametrize(
        "name, value",
        [
            ("API_PORT", "eighty"),
            ("BROADCAST_SEND_TIMEOUT", "soon"),
            ("BROADCAST_SEND_TIMEOUT", "0"),
            ("PLAYBACK_BASE_DELAY_MS", "fast"),
        ],
    )
    def test_invalid_values_raise(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValueError):
            SonifierConfig.from_env()


class TestJSONFormatter:
    """Tests for structured log output."""

    def test_includes_context(self):
        record = logging.LogRecord(
            "sonifier.test", logging.INFO, __file__, 1, "hello %s", ("world",), None
        )
        record.context = {"subscribers": 2}

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["message"] == "hello world"
        assert data["context"] == {"subscribers": 2}


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_uses_config_level_and_file(self, tmp_path, restore_root_logger):
        log_file = tmp_path / "logs" / "sonifier.log"
        config = SonifierConfig(log_level="debug", log_file=str(log_file))

        applied = setup_logging(config)

        assert logging.getLogger().level == logging.DEBUG
        assert applied["handlers"]["file"]["filename"] == str(log_file)
        assert log_file.parent.is_dir()

    def test_client_libraries_stay_at_warning(self, tmp_path, restore_root_logger):
        """Test that per-request client logging is quieted."""
        config = SonifierConfig(log_level="DEBUG", log_file=str(tmp_path / "app.log"))

        setup_logging(config)

        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_quiet_loggers_follow_stricter_level(self, tmp_path, restore_root_logger):
        config = SonifierConfig(log_level="ERROR", log_file=str(tmp_path / "app.log"))

        applied = setup_logging(config)

        assert applied["loggers"]["httpx"]["level"] == logging.ERROR
