"""
Unit tests for FlowCatalystError and ErrorDetail context capture.

OpenTelemetry spans are replaced with mocks so span recording can be asserted
without an SDK tracer provider.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch
from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from flowcatalyst_sdk.error_enums import ErrorCode
from flowcatalyst_sdk.error_handling import FlowCatalystError, create_error_detail_with_context
from flowcatalyst_sdk.models.error_models import ErrorDetail

SPAN_PATCH_TARGET = "flowcatalyst_sdk.error_handling.flowcatalyst_error.trace.get_current_span"


def _recording_span(trace_id: int = 0x1234, span_id: int = 0xABCD) -> MagicMock:
    span = MagicMock()
    span.is_recording.return_value = True
    span_context = MagicMock()
    span_context.is_valid = True
    span_context.trace_id = trace_id
    span_context.span_id = span_id
    span.get_span_context.return_value = span_context
    return span


def _detail(**overrides: object) -> ErrorDetail:
    values: dict[str, object] = {
        "error_code": ErrorCode.CONFIGURATION_ERROR,
        "message": "client id missing",
        "service": "flowcatalyst_sdk",
        "operation": "create_event",
        "correlation_id": UUID("11111111-2222-3333-4444-555555555555"),
        "details": {"config_key": "client_id"},
        "capture_stack": False,
    }
    values.update(overrides)
    return create_error_detail_with_context(**values)  # type: ignore[arg-type]


class TestCreateErrorDetailWithContext:
    """Test ErrorDetail creation."""

    def test_basic_fields(self) -> None:
        """Arguments are carried over verbatim."""
        detail = _detail()

        assert detail.error_code == ErrorCode.CONFIGURATION_ERROR
        assert detail.message == "client id missing"
        assert detail.service == "flowcatalyst_sdk"
        assert detail.operation == "create_event"
        assert detail.details == {"config_key": "client_id"}
        assert detail.timestamp.tzinfo is not None
        assert detail.stack_trace is None

    def test_correlation_id_is_generated_when_omitted(self) -> None:
        """A fresh UUID is used when no correlation id is given."""
        detail = _detail(correlation_id=None)
        assert isinstance(detail.correlation_id, UUID)
        assert detail.correlation_id != _detail(correlation_id=None).correlation_id

    def test_stack_trace_inside_except_block(self) -> None:
        """The active exception's traceback is captured."""
        try:
            raise ValueError("boom")
        except ValueError:
            detail = _detail(capture_stack=True)

        assert detail.stack_trace is not None
        assert "ValueError: boom" in detail.stack_trace

    def test_stack_trace_outside_except_block(self) -> None:
        """The caller's stack is captured when no exception is active."""
        detail = _detail(capture_stack=True)

        assert detail.stack_trace is not None
        assert "_detail" in detail.stack_trace

    def test_trace_context_from_recording_span(self) -> None:
        """Trace and span ids are rendered as fixed-width hex."""
        with patch(
            "flowcatalyst_sdk.error_handling.error_detail_factory.trace.get_current_span",
            return_value=_recording_span(),
        ):
            detail = _detail()

        assert detail.trace_id == format(0x1234, "032x")
        assert detail.span_id == format(0xABCD, "016x")

    def test_no_trace_context_without_span(self) -> None:
        """The default non-recording span leaves trace fields empty."""
        detail = _detail()
        assert detail.trace_id is None
        assert detail.span_id is None

    def test_error_detail_is_frozen(self) -> None:
        """ErrorDetail cannot be modified after creation."""
        detail = _detail()
        with pytest.raises(ValidationError):
            detail.message = "changed"  # type: ignore[misc]


class TestFlowCatalystError:
    """Test the exception wrapper."""

    def test_properties(self) -> None:
        """Convenience properties mirror the detail."""
        error = FlowCatalystError(_detail())

        assert error.error_code == "CONFIGURATION_ERROR"
        assert error.correlation_id == "11111111-2222-3333-4444-555555555555"
        assert error.service == "flowcatalyst_sdk"
        assert error.operation == "create_event"

    def test_str_and_repr(self) -> None:
        """String forms include the code and message."""
        error = FlowCatalystError(_detail())

        assert str(error) == "[CONFIGURATION_ERROR] client id missing"
        assert repr(error).startswith("FlowCatalystError(code=CONFIGURATION_ERROR, ")
        assert "operation=create_event" in repr(error)

    def test_to_dict_is_json_ready(self) -> None:
        """to_dict renders UUIDs and timestamps as strings."""
        payload = FlowCatalystError(_detail()).to_dict()

        assert payload["error"] == "[CONFIGURATION_ERROR] client id missing"
        detail = payload["error_detail"]
        assert detail["error_code"] == "CONFIGURATION_ERROR"
        assert detail["correlation_id"] == "11111111-2222-3333-4444-555555555555"
        assert isinstance(detail["timestamp"], str)
        assert detail["details"] == {"config_key": "client_id"}

    def test_add_detail_returns_new_error(self) -> None:
        """The original error's details are untouched."""
        error = FlowCatalystError(_detail())

        extended = error.add_detail("attempt", 2)

        assert extended is not error
        assert extended.error_detail.details == {"config_key": "client_id", "attempt": 2}
        assert error.error_detail.details == {"config_key": "client_id"}

    def test_records_on_recording_span(self) -> None:
        """The error is recorded on the active span with its attributes."""
        span = _recording_span()
        correlation_id = uuid4()

        with patch(SPAN_PATCH_TARGET, return_value=span):
            error = FlowCatalystError(
                _detail(
                    correlation_id=correlation_id,
                    details={"config_key": "client_id", "limits": [1, 2]},
                )
            )

        span.record_exception.assert_called_once_with(error)
        span.set_status.assert_called_once()
        span.set_attribute.assert_any_call("error", True)
        span.set_attribute.assert_any_call("error.code", "CONFIGURATION_ERROR")
        span.set_attribute.assert_any_call("error.operation", "create_event")
        span.set_attribute.assert_any_call("correlation_id", str(correlation_id))
        span.set_attribute.assert_any_call("error.details.config_key", "client_id")
        span.set_attribute.assert_any_call("error.details.limits", "[1, 2]")

    def test_skips_non_recording_span(self) -> None:
        """Nothing is recorded when the span is not recording."""
        span = MagicMock()
        span.is_recording.return_value = False

        with patch(SPAN_PATCH_TARGET, return_value=span):
            FlowCatalystError(_detail())

        span.record_exception.assert_not_called()
        span.set_attribute.assert_not_called()

    def test_is_an_exception(self) -> None:
        """The error can be raised and caught as Exception."""
        with pytest.raises(Exception) as exc_info:
            raise FlowCatalystError(_detail())
        assert isinstance(exc_info.value, FlowCatalystError)
