"""
Tests for settings and logging setup.
"""

import io
import json

import pytest
import structlog

from merkle_commit.core.config import Settings, get_settings
from merkle_commit.core.logging import setup_logging


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self) -> None:
        config = Settings(_env_file=None)

        assert config.ENV == "development"
        assert config.LOG_LEVEL == "INFO"
        assert config.DEFAULT_HASH_ALGORITHM == "sha3_256"
        assert config.METRICS_ENABLED is False

    def test_environment_override(self, monkeypatch) -> None:
        monkeypatch.setenv("MERKLE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("MERKLE_METRICS_ENABLED", "true")
        monkeypatch.setenv("MERKLE_DEFAULT_HASH_ALGORITHM", "sha256")

        config = Settings(_env_file=None)

        assert config.LOG_LEVEL == "DEBUG"
        assert config.METRICS_ENABLED is True
        assert config.DEFAULT_HASH_ALGORITHM == "sha256"

    def test_get_settings_cached(self) -> None:
        assert get_settings() is get_settings()


class TestLogging:
    """Tests for structlog configuration."""

    def teardown_method(self) -> None:
        structlog.reset_defaults()

    def test_development_uses_console_renderer(self) -> None:
        setup_logging(Settings(_env_file=None, ENV="development"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_production_uses_json_renderer(self) -> None:
        setup_logging(Settings(_env_file=None, ENV="production"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_level_filters_events(self) -> None:
        stream = io.StringIO()
        setup_logging(Settings(_env_file=None, ENV="production", LOG_LEVEL="WARNING"), stream)
        log = structlog.get_logger("merkle_commit.test")

        log.info("hidden event")
        log.warning("shown event", leaf_count=4)

        lines = stream.getvalue().splitlines()
        assert len(lines) == 1
        record = json.loads(lines[0])
        assert record["event"] == "shown event"
        assert record["level"] == "warning"
        assert record["leaf_count"] == 4

    def test_console_output_uncoloured_off_terminal(self) -> None:
        stream = io.StringIO()
        setup_logging(Settings(_env_file=None, LOG_LEVEL="DEBUG"), stream)

        structlog.get_logger("merkle_commit.test").debug("Built Merkle tree", leaf_count=4)

        output = stream.getvalue()
        assert "Built Merkle tree" in output
        assert "leaf_count=4" in output
        assert "\x1b[" not in output

    def test_unknown_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown log level"):
            setup_logging(Settings(_env_file=None, LOG_LEVEL="LOUD"))
