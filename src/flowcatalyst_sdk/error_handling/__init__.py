"""Structured error handling for the FlowCatalyst SDK."""

from .error_detail_factory import NIL_CORRELATION_ID, create_error_detail_with_context
from .factories import (
    raise_configuration_error,
    raise_outbox_storage_error,
)
from .flowcatalyst_error import FlowCatalystError

__all__ = [
    "NIL_CORRELATION_ID",
    "FlowCatalystError",
    "create_error_detail_with_context",
    "raise_configuration_error",
    "raise_outbox_storage_error",
]
