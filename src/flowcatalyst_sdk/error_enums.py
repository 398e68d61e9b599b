"""
flowcatalyst_sdk.error_enums - Centralized error code definitions.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"  # Missing client id and similar setup faults
    OUTBOX_STORAGE_ERROR = "OUTBOX_STORAGE_ERROR"  # Raised by bundled drivers only
