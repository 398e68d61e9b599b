"""
Error factory functions.

Each factory builds an ErrorDetail with context and raises FlowCatalystError.
Keyword arguments beyond the named ones are stored in ``details``.
"""

from __future__ import annotations

from typing import Any, NoReturn
from uuid import UUID

from flowcatalyst_sdk.error_enums import ErrorCode

from .error_detail_factory import create_error_detail_with_context
from .flowcatalyst_error import FlowCatalystError


def raise_configuration_error(
    service: str,
    operation: str,
    config_key: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise for missing or invalid SDK configuration (e.g. an empty client id)."""
    error_detail = create_error_detail_with_context(
        error_code=ErrorCode.CONFIGURATION_ERROR,
        message=message,
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details={"config_key": config_key, **additional_context},
    )
    raise FlowCatalystError(error_detail)


def raise_outbox_storage_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise when a bundled driver fails to persist outbox messages."""
    error_detail = create_error_detail_with_context(
        error_code=ErrorCode.OUTBOX_STORAGE_ERROR,
        message=message,
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details=additional_context,
    )
    raise FlowCatalystError(error_detail)
