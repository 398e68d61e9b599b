"""
DTO for creating a dispatch job in the outbox.

Immutable builder: every ``with_*`` method returns a new instance.

Example:
    job = (
        CreateDispatchJobDto.create(
            "order-service",
            "order.process",
            "https://api.example.com/webhook",
            {"orderId": "123"},
            "pool-1",
        )
        .with_correlation_id("corr-789")
        .with_timeout_seconds(60)
    )
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from flowcatalyst_sdk.outbox.dto_base import OutboxDto, drop_empty, to_iso8601, to_json

DEFAULT_PAYLOAD_CONTENT_TYPE = "application/json"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_MAX_RETRIES = 5


class CreateDispatchJobDto(OutboxDto):
    source: str
    code: str
    target_url: str
    payload: str
    dispatch_pool_id: str
    subject: Optional[str] = None
    correlation_id: Optional[str] = None
    event_id: Optional[str] = None
    metadata: dict[str, str] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)
    payload_content_type: str = DEFAULT_PAYLOAD_CONTENT_TYPE
    data_only: bool = True
    message_group: Optional[str] = None
    sequence: Optional[int] = None
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_strategy: Optional[str] = None
    scheduled_for: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    idempotency_key: Optional[str] = None
    external_id: Optional[str] = None

    @classmethod
    def create(
        cls,
        source: str,
        code: str,
        target_url: str,
        payload: str | Mapping[str, Any],
        dispatch_pool_id: str,
    ) -> CreateDispatchJobDto:
        """
        Create a new dispatch job DTO.

        Args:
            payload: Body delivered to ``target_url``; a mapping is JSON-encoded
        """
        return cls(
            source=source,
            code=code,
            target_url=target_url,
            payload=payload if isinstance(payload, str) else to_json(dict(payload)),
            dispatch_pool_id=dispatch_pool_id,
        )

    def with_subject(self, subject: str) -> CreateDispatchJobDto:
        return self._derive(subject=subject)

    def with_correlation_id(self, correlation_id: str) -> CreateDispatchJobDto:
        return self._derive(correlation_id=correlation_id)

    def with_event_id(self, event_id: str) -> CreateDispatchJobDto:
        return self._derive(event_id=event_id)

    def with_metadata(self, metadata: Mapping[str, str]) -> CreateDispatchJobDto:
        """Merge ``metadata`` over the metadata already set."""
        return self._derive(metadata={**self.metadata, **metadata})

    def with_headers(self, headers: Mapping[str, str]) -> CreateDispatchJobDto:
        """Merge ``headers`` over the headers already set."""
        return self._derive(headers={**self.headers, **headers})

    def with_payload_content_type(self, payload_content_type: str) -> CreateDispatchJobDto:
        return self._derive(payload_content_type=payload_content_type)

    def with_data_only(self, data_only: bool) -> CreateDispatchJobDto:
        return self._derive(data_only=data_only)

    def with_message_group(self, message_group: str) -> CreateDispatchJobDto:
        return self._derive(message_group=message_group)

    def with_sequence(self, sequence: int) -> CreateDispatchJobDto:
        return self._derive(sequence=sequence)

    def with_timeout_seconds(self, timeout_seconds: int) -> CreateDispatchJobDto:
        return self._derive(timeout_seconds=timeout_seconds)

    def with_max_retries(self, max_retries: int) -> CreateDispatchJobDto:
        return self._derive(max_retries=max_retries)

    def with_retry_strategy(self, retry_strategy: str) -> CreateDispatchJobDto:
        return self._derive(retry_strategy=retry_strategy)

    def with_scheduled_for(self, scheduled_for: datetime) -> CreateDispatchJobDto:
        return self._derive(scheduled_for=scheduled_for)

    def with_expires_at(self, expires_at: datetime) -> CreateDispatchJobDto:
        return self._derive(expires_at=expires_at)

    def with_idempotency_key(self, idempotency_key: str) -> CreateDispatchJobDto:
        return self._derive(idempotency_key=idempotency_key)

    def with_external_id(self, external_id: str) -> CreateDispatchJobDto:
        return self._derive(external_id=external_id)

    def to_payload(self) -> dict[str, Any]:
        """Build the dispatch job payload for the outbox, without unset fields."""
        return drop_empty(
            {
                "source": self.source,
                "code": self.code,
                "targetUrl": self.target_url,
                "payload": self.payload,
                "payloadContentType": self.payload_content_type,
                "dispatchPoolId": self.dispatch_pool_id,
                "subject": self.subject,
                "correlationId": self.correlation_id,
                "eventId": self.event_id,
                "metadata": dict(self.metadata) if self.metadata else None,
                "headers": dict(self.headers) if self.headers else None,
                "dataOnly": self.data_only,
                "messageGroup": self.message_group,
                "sequence": self.sequence,
                "timeoutSeconds": self.timeout_seconds,
                "maxRetries": self.max_retries,
                "retryStrategy": self.retry_strategy,
                "scheduledFor": to_iso8601(self.scheduled_for) if self.scheduled_for else None,
                "expiresAt": to_iso8601(self.expires_at) if self.expires_at else None,
                "idempotencyKey": self.idempotency_key,
                "externalId": self.external_id,
            }
        )
