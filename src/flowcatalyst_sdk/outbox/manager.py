"""Outbox manager.

Turns DTOs into PENDING outbox messages and hands them to the application's
storage driver, following the transactional outbox pattern: the driver writes
inside the caller's transaction and an external relay delivers the rows later.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from flowcatalyst_sdk.error_handling import NIL_CORRELATION_ID, raise_configuration_error
from flowcatalyst_sdk.logging_utils import create_sdk_logger
from flowcatalyst_sdk.outbox.create_audit_log_dto import CreateAuditLogDto
from flowcatalyst_sdk.outbox.create_dispatch_job_dto import CreateDispatchJobDto
from flowcatalyst_sdk.outbox.create_event_dto import CreateEventDto
from flowcatalyst_sdk.outbox.dto_base import to_json
from flowcatalyst_sdk.outbox.models import OutboxMessage
from flowcatalyst_sdk.outbox.protocols import OutboxDriver
from flowcatalyst_sdk.outbox.status_enums import MessageType, OutboxStatus
from flowcatalyst_sdk.outbox.tsid import TsidGenerator

if TYPE_CHECKING:
    from flowcatalyst_sdk.config import OutboxSettings

logger = create_sdk_logger("outbox.manager")

SERVICE_NAME = "flowcatalyst_sdk"

OutboxDtoType = CreateEventDto | CreateDispatchJobDto | CreateAuditLogDto


class OutboxManager:
    """
    Creates outbox messages for events, dispatch jobs and audit logs.

    The manager opens no transaction of its own. Atomicity with business data,
    and all-or-nothing behaviour of batches, come from the driver running
    inside the caller's transaction. Driver errors propagate unchanged; the
    only error raised here is the configuration error for a missing client id.

    Example:
        outbox = OutboxManager(driver, "client-tsid-123")
        event_id = await outbox.create_event(
            CreateEventDto.create("user.registered", {"userId": "123"})
        )
        job_ids = await outbox.create_dispatch_jobs([job1, job2, job3])
    """

    def __init__(
        self,
        driver: OutboxDriver,
        client_id: str,
        id_generator: Optional[TsidGenerator] = None,
    ) -> None:
        self._driver = driver
        self._client_id = client_id
        self._id_generator = id_generator or TsidGenerator()

    @classmethod
    def from_settings(cls, driver: OutboxDriver, settings: OutboxSettings) -> OutboxManager:
        """Build a manager using FLOWCATALYST_CLIENT_ID from settings."""
        return cls(driver, settings.CLIENT_ID)

    @property
    def driver(self) -> OutboxDriver:
        return self._driver

    @property
    def client_id(self) -> str:
        return self._client_id

    async def create_event(self, event: CreateEventDto) -> str:
        """Store a single event. Returns the generated TSID."""
        self._ensure_client_id("create_event")
        return await self._store_one(MessageType.EVENT, event)

    async def create_events(self, events: Sequence[CreateEventDto]) -> list[str]:
        """Store events with one batch insert. Returns TSIDs in input order."""
        self._ensure_client_id("create_events")
        return await self._store_batch(MessageType.EVENT, events)

    async def create_dispatch_job(self, job: CreateDispatchJobDto) -> str:
        """Store a single dispatch job. Returns the generated TSID."""
        self._ensure_client_id("create_dispatch_job")
        return await self._store_one(MessageType.DISPATCH_JOB, job)

    async def create_dispatch_jobs(self, jobs: Sequence[CreateDispatchJobDto]) -> list[str]:
        """Store dispatch jobs with one batch insert. Returns TSIDs in input order."""
        self._ensure_client_id("create_dispatch_jobs")
        return await self._store_batch(MessageType.DISPATCH_JOB, jobs)

    async def create_audit_log(self, audit_log: CreateAuditLogDto) -> str:
        """Store a single audit log. Returns the generated TSID."""
        self._ensure_client_id("create_audit_log")
        return await self._store_one(MessageType.AUDIT_LOG, audit_log)

    async def create_audit_logs(self, audit_logs: Sequence[CreateAuditLogDto]) -> list[str]:
        """Store audit logs with one batch insert. Returns TSIDs in input order."""
        self._ensure_client_id("create_audit_logs")
        return await self._store_batch(MessageType.AUDIT_LOG, audit_logs)

    async def _store_one(self, message_type: MessageType, dto: OutboxDtoType) -> str:
        message = self._build_message(message_type, dto)
        await self._driver.insert(message)

        logger.debug(
            "Outbox message stored",
            extra={
                "message_id": message.id,
                "message_type": message_type.value,
                "client_id": self._client_id,
                "payload_size": message.payload_size,
            },
        )
        return message.id

    async def _store_batch(
        self, message_type: MessageType, dtos: Sequence[OutboxDtoType]
    ) -> list[str]:
        if not dtos:
            return []

        messages = [self._build_message(message_type, dto) for dto in dtos]
        await self._driver.insert_batch(messages)

        ids = [message.id for message in messages]
        logger.debug(
            "Outbox message batch stored",
            extra={
                "message_type": message_type.value,
                "client_id": self._client_id,
                "message_count": len(ids),
                "first_message_id": ids[0],
            },
        )
        return ids

    def _build_message(self, message_type: MessageType, dto: OutboxDtoType) -> OutboxMessage:
        payload = to_json(dto.to_payload())
        now = datetime.now(timezone.utc)
        # Audit logs carry no message group
        message_group = getattr(dto, "message_group", None)

        return OutboxMessage(
            id=self._id_generator.generate(),
            type=message_type,
            message_group=message_group,
            payload=payload,
            status=OutboxStatus.PENDING,
            created_at=now,
            updated_at=now,
            client_id=self._client_id,
            payload_size=len(payload.encode("utf-8")),
            headers=dict(dto.headers) if dto.headers else None,
        )

    def _ensure_client_id(self, operation: str) -> None:
        if not self._client_id:
            raise_configuration_error(
                service=SERVICE_NAME,
                operation=operation,
                config_key="client_id",
                message=(
                    "OutboxManager requires a client id. Provide a valid client ID "
                    "when constructing the OutboxManager."
                ),
                correlation_id=NIL_CORRELATION_ID,
            )
