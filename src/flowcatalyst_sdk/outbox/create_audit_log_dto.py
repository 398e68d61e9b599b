"""
DTO for creating an audit log entry in the outbox.

Immutable builder: every ``with_*`` method returns a new instance.

Example:
    audit_log = (
        CreateAuditLogDto.create("User", "0HZXEQ5Y8JY5Z", "CREATE")
        .with_operation_data({"email": "user@example.com", "name": "John"})
        .with_principal_id("0HZXEQ5Y8JY5A")
        .with_source("user-service")
    )
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import Field

from flowcatalyst_sdk.outbox.dto_base import OutboxDto, drop_empty, to_iso8601, to_json


class CreateAuditLogDto(OutboxDto):
    entity_type: str
    entity_id: str
    operation: str
    operation_data: Optional[dict[str, Any]] = None
    principal_id: Optional[str] = None
    performed_at: Optional[datetime] = None
    source: Optional[str] = None
    correlation_id: Optional[str] = None
    metadata: dict[str, str] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def create(cls, entity_type: str, entity_id: str, operation: str) -> CreateAuditLogDto:
        return cls(entity_type=entity_type, entity_id=entity_id, operation=operation)

    def with_operation_data(self, operation_data: Mapping[str, Any]) -> CreateAuditLogDto:
        return self._derive(operation_data=dict(operation_data))

    def with_principal_id(self, principal_id: str) -> CreateAuditLogDto:
        return self._derive(principal_id=principal_id)

    def with_performed_at(self, performed_at: datetime) -> CreateAuditLogDto:
        return self._derive(performed_at=performed_at)

    def with_source(self, source: str) -> CreateAuditLogDto:
        return self._derive(source=source)

    def with_correlation_id(self, correlation_id: str) -> CreateAuditLogDto:
        return self._derive(correlation_id=correlation_id)

    def with_metadata(self, metadata: Mapping[str, str]) -> CreateAuditLogDto:
        """Merge ``metadata`` over the metadata already set."""
        return self._derive(metadata={**self.metadata, **metadata})

    def with_headers(self, headers: Mapping[str, str]) -> CreateAuditLogDto:
        """Merge ``headers`` over the headers already set."""
        return self._derive(headers={**self.headers, **headers})

    def to_payload(self) -> dict[str, Any]:
        """
        Build the audit log payload for the outbox, without unset fields.

        ``performedAt`` falls back to the time of this call, not the time the
        DTO was created.
        """
        performed_at = self.performed_at or datetime.now(timezone.utc)
        return drop_empty(
            {
                "entityType": self.entity_type,
                "entityId": self.entity_id,
                "operation": self.operation,
                "operationData": to_json(self.operation_data)
                if self.operation_data is not None
                else None,
                "principalId": self.principal_id,
                "performedAt": to_iso8601(performed_at),
                "source": self.source,
                "correlationId": self.correlation_id,
                "metadata": dict(self.metadata) if self.metadata else None,
            }
        )
