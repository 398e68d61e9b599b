"""SQLAlchemy model for the ``outbox_messages`` table.

The column set and the two partial indexes on ``status`` are what the external
outbox relay polls; ``client_id``, ``payload_size`` and ``headers`` are SDK
columns the relay ignores.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, DateTime, Index, Integer, SmallInteger, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func

OUTBOX_TABLE_NAME = "outbox_messages"


class Base(AsyncAttrs, DeclarativeBase):
    """Base class for SDK SQLAlchemy models."""


class OutboxMessageRecord(Base):
    """Persisted outbox message.

    Written once by the SDK with status 0; every later change (status,
    retry_count, error_message, updated_at) belongs to the relay.
    """

    __tablename__ = OUTBOX_TABLE_NAME

    id: Mapped[str] = mapped_column(String(13), primary_key=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    message_group: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False)

    # Relay-owned state
    status: Mapped[int] = mapped_column(
        SmallInteger, nullable=False, default=0, server_default="0"
    )
    retry_count: Mapped[int] = mapped_column(
        SmallInteger, nullable=False, default=0, server_default="0"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.current_timestamp()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.current_timestamp()
    )
    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # SDK-specific columns
    client_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    payload_size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    headers: Mapped[Optional[dict[str, str]]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=True
    )

    __table_args__ = (
        Index(
            "idx_outbox_messages_pending",
            "status",
            "message_group",
            "created_at",
            postgresql_where=text("status = 0"),
            sqlite_where=text("status = 0"),
        ),
        Index(
            "idx_outbox_messages_stuck",
            "status",
            "created_at",
            postgresql_where=text("status = 9"),
            sqlite_where=text("status = 9"),
        ),
        Index("idx_outbox_client_pending", "client_id", "status", "created_at"),
    )
