"""Shared plumbing for the immutable outbox DTO builders."""

from __future__ import annotations

import json
import math
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any, Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict

# Surrogate code points can only reach the output from string content
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def to_iso8601(value: datetime) -> str:
    """Render as UTC with millisecond precision and a ``Z`` suffix. Naive values are UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return to_iso8601(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _null_non_finite(value: Any) -> Any:
    """Replace NaN and infinities with None; JSON has no literal for them."""
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, Mapping):
        return {key: _null_non_finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_null_non_finite(item) for item in value]
    return value


def _escape_surrogate(match: re.Match[str]) -> str:
    return f"\\u{ord(match.group()):04x}"


def to_json(value: Any) -> str:
    """
    Compact JSON as stored in outbox payloads.

    Non-ASCII text is kept verbatim. Non-finite floats become ``null`` and
    surrogate code points are written as ``\\uXXXX`` escapes, so the result is
    always valid JSON and always encodable as UTF-8.
    """
    text = json.dumps(
        _null_non_finite(value),
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        default=_json_default,
    )
    return _LONE_SURROGATE.sub(_escape_surrogate, text)


def drop_empty(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Strip None values so absent optional fields never reach the wire as null."""
    return {key: value for key, value in fields.items() if value is not None}


class OutboxDto(BaseModel, ABC):
    """
    Base for DTO builders.

    Instances are frozen; ``_derive`` validates and returns a modified copy so a
    partially built DTO can be shared between code paths without leaking changes.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    def _derive(self, **changes: Any) -> Self:
        current = {name: getattr(self, name) for name in type(self).model_fields}
        return type(self).model_validate({**current, **changes})

    @abstractmethod
    def to_payload(self) -> dict[str, Any]:
        """Build the wire payload stored, JSON-encoded, in the outbox row."""
