"""Outbox message record handed to storage drivers."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from flowcatalyst_sdk.outbox.status_enums import MessageType, OutboxStatus


class OutboxMessage(BaseModel):
    """
    One row of the ``outbox_messages`` table as written by the SDK.

    Built only by OutboxManager with status PENDING. ``retry_count`` and
    ``error_message`` are relay-owned columns and are left to their database
    defaults.
    """

    id: str = Field(min_length=13, max_length=13)
    type: MessageType
    message_group: Optional[str] = None
    payload: str
    status: OutboxStatus = OutboxStatus.PENDING
    created_at: datetime
    updated_at: datetime
    client_id: str = Field(min_length=1)
    payload_size: int = Field(ge=0)
    headers: Optional[dict[str, str]] = None

    model_config = ConfigDict(frozen=True)

    def to_row(self) -> dict[str, Any]:
        """Return the column mapping a driver inserts."""
        return {
            "id": self.id,
            "type": self.type.value,
            "message_group": self.message_group,
            "payload": self.payload,
            "status": int(self.status),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "client_id": self.client_id,
            "payload_size": self.payload_size,
            "headers": dict(self.headers) if self.headers is not None else None,
        }
