"""
FlowCatalystError: the single exception type raised by the SDK itself.

Wraps a frozen ErrorDetail and records itself on the active OpenTelemetry span.
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from flowcatalyst_sdk.models.error_models import ErrorDetail

_PRIMITIVE_ATTRIBUTE_TYPES = (str, bool, int, float)


class FlowCatalystError(Exception):
    """Exception carrying a structured ErrorDetail."""

    def __init__(self, error_detail: ErrorDetail) -> None:
        super().__init__(error_detail.message)
        self.error_detail = error_detail
        self._record_to_span()

    def _record_to_span(self) -> None:
        span = trace.get_current_span()
        if not span or not span.is_recording():
            return

        detail = self.error_detail
        span.record_exception(self)
        span.set_status(Status(StatusCode.ERROR, detail.message))
        span.set_attribute("error", True)
        span.set_attribute("error.code", detail.error_code.value)
        span.set_attribute("error.message", detail.message)
        span.set_attribute("error.service", detail.service)
        span.set_attribute("error.operation", detail.operation)
        span.set_attribute("correlation_id", str(detail.correlation_id))

        for key, value in detail.details.items():
            if not isinstance(value, _PRIMITIVE_ATTRIBUTE_TYPES):
                value = str(value)
            span.set_attribute(f"error.details.{key}", value)

    @property
    def correlation_id(self) -> str:
        return str(self.error_detail.correlation_id)

    @property
    def error_code(self) -> str:
        return self.error_detail.error_code.value

    @property
    def service(self) -> str:
        return self.error_detail.service

    @property
    def operation(self) -> str:
        return self.error_detail.operation

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for logging or API responses."""
        return {
            "error": str(self),
            "error_detail": self.error_detail.model_dump(mode="json"),
        }

    def add_detail(self, key: str, value: Any) -> FlowCatalystError:
        """Return a new error with an extra detail entry; this error is unchanged."""
        new_detail = self.error_detail.model_copy(
            update={"details": {**self.error_detail.details, key: value}}
        )
        return FlowCatalystError(new_detail)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.error_detail.message}"

    def __repr__(self) -> str:
        return (
            f"FlowCatalystError(code={self.error_code}, "
            f"message={self.error_detail.message!r}, "
            f"service={self.service}, operation={self.operation}, "
            f"correlation_id={self.correlation_id})"
        )
