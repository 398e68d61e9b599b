"""
DTO for creating an event in the outbox.

Immutable builder: every ``with_*`` method returns a new instance.

Example:
    event = (
        CreateEventDto.create("user.registered", {"userId": "123", "email": "a@b.com"})
        .with_source("user-service")
        .with_correlation_id("corr-456")
    )
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from flowcatalyst_sdk.outbox.dto_base import OutboxDto, drop_empty, to_json

SPEC_VERSION = "1.0"


class ContextData(BaseModel):
    """Searchable key/value pair attached to an event."""

    key: str
    value: str

    model_config = ConfigDict(frozen=True)


class CreateEventDto(OutboxDto):
    type: str
    data: dict[str, Any]
    source: Optional[str] = None
    subject: Optional[str] = None
    correlation_id: Optional[str] = None
    causation_id: Optional[str] = None
    deduplication_id: Optional[str] = None
    message_group: Optional[str] = None
    context_data: tuple[ContextData, ...] = ()
    headers: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def create(cls, type: str, data: Mapping[str, Any]) -> CreateEventDto:
        return cls(type=type, data=dict(data))

    def with_source(self, source: str) -> CreateEventDto:
        return self._derive(source=source)

    def with_subject(self, subject: str) -> CreateEventDto:
        return self._derive(subject=subject)

    def with_correlation_id(self, correlation_id: str) -> CreateEventDto:
        return self._derive(correlation_id=correlation_id)

    def with_causation_id(self, causation_id: str) -> CreateEventDto:
        return self._derive(causation_id=causation_id)

    def with_deduplication_id(self, deduplication_id: str) -> CreateEventDto:
        return self._derive(deduplication_id=deduplication_id)

    def with_message_group(self, message_group: str) -> CreateEventDto:
        return self._derive(message_group=message_group)

    def with_headers(self, headers: Mapping[str, str]) -> CreateEventDto:
        """Merge ``headers`` over the headers already set."""
        return self._derive(headers={**self.headers, **headers})

    def with_context_data(
        self, context_data: Iterable[ContextData | Mapping[str, str]]
    ) -> CreateEventDto:
        """Append entries to the context data already set."""
        return self._derive(context_data=(*self.context_data, *context_data))

    def to_payload(self) -> dict[str, Any]:
        """Build the event payload for the outbox, without unset fields."""
        return drop_empty(
            {
                "specVersion": SPEC_VERSION,
                "type": self.type,
                "source": self.source,
                "subject": self.subject,
                "data": to_json(self.data),
                "correlationId": self.correlation_id,
                "causationId": self.causation_id,
                "deduplicationId": self.deduplication_id,
                "messageGroup": self.message_group,
                "contextData": [entry.model_dump() for entry in self.context_data]
                if self.context_data
                else None,
            }
        )
