"""Tests for logging_utils processors and configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from typing import Any
from unittest.mock import Mock, patch

import pytest
import structlog

from flowcatalyst_sdk.config import OutboxSettings
from flowcatalyst_sdk.logging_utils import (
    add_service_context,
    add_trace_context,
    configure_sdk_logging,
    configure_sdk_logging_from_settings,
    create_sdk_logger,
)


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Undo global logging configuration made by a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level

    yield

    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestAddServiceContext:
    """Tests for the add_service_context processor."""

    def test_adds_service_fields_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """service.name and deployment.environment come from the environment."""
        # Arrange
        monkeypatch.setenv("SERVICE_NAME", "order-service")
        monkeypatch.setenv("ENVIRONMENT", "staging")
        event_dict: dict[str, Any] = {"event": "test message", "correlation_id": "abc-123"}

        # Act
        result = add_service_context(None, "info", event_dict)

        # Assert
        assert result["service.name"] == "order-service"
        assert result["deployment.environment"] == "staging"
        assert result["correlation_id"] == "abc-123"

    def test_defaults_when_env_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Missing variables fall back to 'unknown' and 'development'."""
        monkeypatch.setenv("SERVICE_NAME", "x")
        monkeypatch.setenv("ENVIRONMENT", "x")
        monkeypatch.delenv("SERVICE_NAME")
        monkeypatch.delenv("ENVIRONMENT")

        result = add_service_context(None, "info", {})

        assert result["service.name"] == "unknown"
        assert result["deployment.environment"] == "development"


class TestAddTraceContext:
    """Tests for the add_trace_context processor."""

    def test_adds_ids_for_valid_span(self) -> None:
        """Trace and span ids are formatted as fixed-width hex."""
        # Arrange
        span_context = Mock()
        span_context.is_valid = True
        span_context.trace_id = 1
        span_context.span_id = 1
        span = Mock()
        span.get_span_context.return_value = span_context

        # Act
        with patch("flowcatalyst_sdk.logging_utils.get_current_span", return_value=span):
            result = add_trace_context(None, "", {"event": "test"})

        # Assert
        assert result["trace_id"] == "00000000000000000000000000000001"
        assert result["span_id"] == "0000000000000001"

    def test_no_fields_without_active_span(self) -> None:
        """The default invalid span context adds nothing."""
        result = add_trace_context(None, "", {"event": "test"})

        assert "trace_id" not in result
        assert "span_id" not in result
        assert result["event"] == "test"


class TestConfigureSdkLogging:
    """Tests for configure_sdk_logging."""

    @pytest.mark.usefixtures("restore_logging")
    def test_json_output(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """LOG_FORMAT=json renders one JSON document per log line."""
        monkeypatch.setenv("LOG_FORMAT", "json")
        monkeypatch.setenv("SERVICE_NAME", "order-service")
        monkeypatch.setenv("ENVIRONMENT", "testing")

        configure_sdk_logging("order-service", log_level="INFO")
        structlog.get_logger("flowcatalyst_sdk.tests").info("outbox ready", message_count=3)

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "outbox ready"
        assert record["message_count"] == 3
        assert record["level"] == "info"
        assert record["service.name"] == "order-service"
        assert record["deployment.environment"] == "testing"
        assert "timestamp" in record

    @pytest.mark.usefixtures("restore_logging")
    def test_log_level_filters_debug(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Records below the configured level are dropped."""
        monkeypatch.setenv("LOG_FORMAT", "json")
        monkeypatch.setenv("SERVICE_NAME", "order-service")
        monkeypatch.setenv("ENVIRONMENT", "testing")

        configure_sdk_logging("order-service", log_level="WARNING")
        structlog.get_logger("flowcatalyst_sdk.tests").info("hidden")

        assert "hidden" not in capsys.readouterr().out


class TestCreateSdkLogger:
    """Tests for create_sdk_logger."""

    def test_binds_logger_name(self) -> None:
        """The name is bound into the logger context."""
        logger = create_sdk_logger("outbox.manager")
        assert structlog.get_context(logger)["logger_name"] == "outbox.manager"


class TestConfigureSdkLoggingFromSettings:
    """Tests for configure_sdk_logging_from_settings."""

    def test_passes_settings_through(self) -> None:
        """SERVICE_NAME, ENVIRONMENT and LOG_LEVEL drive the logging setup."""
        settings = OutboxSettings(
            SERVICE_NAME="order-service", ENVIRONMENT="staging", LOG_LEVEL="DEBUG"
        )

        with patch("flowcatalyst_sdk.logging_utils.configure_sdk_logging") as configure:
            configure_sdk_logging_from_settings(settings)

        configure.assert_called_once_with(
            service_name="order-service", environment="staging", log_level="DEBUG"
        )

    def test_reads_environment_when_settings_omitted(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without explicit settings the FLOWCATALYST_* variables are used."""
        monkeypatch.setenv("FLOWCATALYST_SERVICE_NAME", "billing-service")
        monkeypatch.setenv("FLOWCATALYST_ENVIRONMENT", "production")
        monkeypatch.setenv("FLOWCATALYST_LOG_LEVEL", "WARNING")

        with patch("flowcatalyst_sdk.logging_utils.configure_sdk_logging") as configure:
            configure_sdk_logging_from_settings()

        configure.assert_called_once_with(
            service_name="billing-service", environment="production", log_level="WARNING"
        )

    @pytest.mark.usefixtures("restore_logging")
    def test_log_level_from_settings_is_applied(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A WARNING level from settings drops info records."""
        monkeypatch.setenv("LOG_FORMAT", "json")
        monkeypatch.setenv("SERVICE_NAME", "order-service")
        monkeypatch.setenv("ENVIRONMENT", "testing")

        configure_sdk_logging_from_settings(
            OutboxSettings(
                SERVICE_NAME="order-service", ENVIRONMENT="testing", LOG_LEVEL="WARNING"
            )
        )
        logger = structlog.get_logger("flowcatalyst_sdk.tests")
        logger.info("hidden")
        logger.warning("shown")

        output = capsys.readouterr().out
        assert "hidden" not in output
        assert "shown" in output
