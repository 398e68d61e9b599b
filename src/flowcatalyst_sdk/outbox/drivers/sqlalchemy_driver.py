"""
SQLAlchemy implementation of OutboxDriver.

Writes through the caller's AsyncSession and never commits, so outbox rows
share the transaction of the business data written on the same session.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from flowcatalyst_sdk.error_handling import NIL_CORRELATION_ID, raise_outbox_storage_error
from flowcatalyst_sdk.logging_utils import create_sdk_logger
from flowcatalyst_sdk.outbox.models import OutboxMessage
from flowcatalyst_sdk.outbox.models_db import OutboxMessageRecord

logger = create_sdk_logger("outbox.sqlalchemy_driver")

SERVICE_NAME = "flowcatalyst_sdk"


class SQLAlchemyOutboxDriver:
    """
    Outbox driver bound to one AsyncSession (one unit of work).

    Create a driver per session; commit or roll back the session yourself.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(self, message: OutboxMessage) -> None:
        """Insert one outbox row in the session's transaction."""
        try:
            await self._session.execute(insert(OutboxMessageRecord).values(**message.to_row()))
        except SQLAlchemyError as e:
            logger.error(
                "Failed to insert outbox message",
                extra={"message_id": message.id, "error_type": e.__class__.__name__},
            )
            raise_outbox_storage_error(
                service=SERVICE_NAME,
                operation="insert",
                message=f"Failed to insert outbox message: {e.__class__.__name__}",
                correlation_id=NIL_CORRELATION_ID,
                message_id=message.id,
                error_type=e.__class__.__name__,
                error_details=str(e),
            )

    async def insert_batch(self, messages: Sequence[OutboxMessage]) -> None:
        """
        Insert outbox rows in the session's transaction with a single statement.

        If any row fails, the statement raises and the caller's rollback
        discards the whole batch together with its business writes.
        """
        if not messages:
            return

        try:
            await self._session.execute(
                insert(OutboxMessageRecord), [message.to_row() for message in messages]
            )
        except SQLAlchemyError as e:
            logger.error(
                "Failed to insert outbox message batch",
                extra={"message_count": len(messages), "error_type": e.__class__.__name__},
            )
            raise_outbox_storage_error(
                service=SERVICE_NAME,
                operation="insert_batch",
                message=f"Failed to insert outbox message batch: {e.__class__.__name__}",
                correlation_id=NIL_CORRELATION_ID,
                message_count=len(messages),
                error_type=e.__class__.__name__,
                error_details=str(e),
            )
