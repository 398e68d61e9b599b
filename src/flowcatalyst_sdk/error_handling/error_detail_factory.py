"""
ErrorDetail factory with automatic context capture.

Captures timestamp, stack trace and the active OpenTelemetry trace/span IDs so
that every SDK error carries the same observability context.
"""

from __future__ import annotations

import traceback
import uuid
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from opentelemetry import trace

from flowcatalyst_sdk.error_enums import ErrorCode
from flowcatalyst_sdk.models.error_models import ErrorDetail

_NO_EXCEPTION_MARKER = "NoneType: None\n"

# Used when an error has no request or message to correlate with
NIL_CORRELATION_ID = UUID("00000000-0000-0000-0000-000000000000")


def create_error_detail_with_context(
    error_code: ErrorCode,
    message: str,
    service: str,
    operation: str,
    correlation_id: UUID | None = None,
    details: dict[str, Any] | None = None,
    capture_stack: bool = True,
) -> ErrorDetail:
    """
    Create an ErrorDetail enriched with runtime context.

    Args:
        error_code: Error code from ErrorCode
        message: Human-readable error message
        service: Name of the component raising the error
        operation: Operation that failed
        correlation_id: Correlation ID, generated when omitted
        details: Additional structured context
        capture_stack: Capture the current exception or call stack

    Returns:
        Frozen ErrorDetail instance
    """
    stack_trace: str | None = None
    if capture_stack:
        stack_trace = traceback.format_exc()
        if stack_trace == _NO_EXCEPTION_MARKER:
            # Not inside an except block; use the caller's stack instead
            stack_trace = "".join(traceback.format_stack()[:-1])

    trace_id: str | None = None
    span_id: str | None = None
    span = trace.get_current_span()
    if span and span.is_recording():
        span_context = span.get_span_context()
        if span_context.is_valid:
            trace_id = format(span_context.trace_id, "032x")
            span_id = format(span_context.span_id, "016x")

    return ErrorDetail(
        error_code=error_code,
        message=message,
        correlation_id=correlation_id or uuid.uuid4(),
        timestamp=datetime.now(timezone.utc),
        service=service,
        operation=operation,
        details=details or {},
        stack_trace=stack_trace,
        trace_id=trace_id,
        span_id=span_id,
    )
