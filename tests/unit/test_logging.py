"""Unit tests for structured logging."""

import json
import logging
from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest
import structlog

from routerisk.config.settings import Settings
from routerisk.core.logging import (
    LogContext,
    add_environment_info,
    bind_contextvars,
    clear_contextvars,
    get_logger,
    log_exception,
    setup_logging,
)


@pytest.fixture
def restore_root_logger() -> Generator[None, None, None]:
    """Restore root logger handlers and level after setup_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def production_settings() -> Generator[Settings, None, None]:
    """Patch logging to see production settings."""
    settings = Settings(ENVIRONMENT="production", log_level="INFO")
    with patch("routerisk.core.logging.get_settings", return_value=settings):
        yield settings


class TestAddEnvironmentInfo:
    """Tests for add_environment_info processor."""

    def test_adds_environment(self):
        """Test environment is added to event dict."""
        mock_settings = MagicMock()
        mock_settings.ENVIRONMENT = "staging"

        with patch("routerisk.core.logging.get_settings", return_value=mock_settings):
            result = add_environment_info(None, "info", {})

        assert result["environment"] == "staging"


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_custom_level(self, production_settings, restore_root_logger):
        """Test an explicit level overrides settings."""
        setup_logging(log_level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_json_output(self, production_settings, restore_root_logger, capsys):
        """Test production logging renders JSON lines with bound context."""
        setup_logging()
        logger = get_logger("routerisk.test.json")

        with LogContext(route_id="R-1001"):
            logger.info("Route risk assessment completed", grade="C")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        data = json.loads(line)

        assert data["event"] == "Route risk assessment completed"
        assert data["route_id"] == "R-1001"
        assert data["grade"] == "C"
        assert data["environment"] == "production"
        assert data["level"] == "info"

    def test_level_filtering(self, production_settings, restore_root_logger, capsys):
        """Test messages below the configured level are dropped."""
        setup_logging(log_level="WARNING")
        logger = get_logger("routerisk.test.filter")

        logger.info("dropped")
        logger.warning("kept")

        output = capsys.readouterr().out
        assert "dropped" not in output
        assert "kept" in output


class TestLogContext:
    """Tests for LogContext."""

    def test_binds_and_unbinds(self):
        """Test values are bound only inside the block."""
        clear_contextvars()

        with LogContext(route_id="R-7"):
            assert structlog.contextvars.get_contextvars()["route_id"] == "R-7"

        assert "route_id" not in structlog.contextvars.get_contextvars()

    def test_keeps_other_context(self):
        """Test unrelated context survives the block."""
        clear_contextvars()
        bind_contextvars(batch="b-1")

        with LogContext(route_id="R-7"):
            pass

        assert structlog.contextvars.get_contextvars() == {"batch": "b-1"}
        clear_contextvars()


class TestLogException:
    """Tests for log_exception."""

    def test_logs_error_details(self):
        """Test exception type and message are logged."""
        logger = MagicMock()

        log_exception(logger, ValueError("bad value"), route_id="R-1")

        logger.exception.assert_called_once_with(
            "exception_occurred",
            error_type="ValueError",
            error_message="bad value",
            route_id="R-1",
        )
