"""Alembic helpers that create and drop the ``outbox_messages`` table.

Call them from a revision in the application's own migration history:

    from alembic import op
    from flowcatalyst_sdk.outbox.migrations import (
        create_outbox_messages_table,
        drop_outbox_messages_table,
    )

    def upgrade() -> None:
        create_outbox_messages_table(op)

    def downgrade() -> None:
        drop_outbox_messages_table(op)
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations
from sqlalchemy.dialects import postgresql

from flowcatalyst_sdk.outbox.models_db import OUTBOX_TABLE_NAME


def create_outbox_messages_table(op: Operations) -> None:
    """Create the outbox_messages table and the relay polling indexes."""
    op.create_table(
        OUTBOX_TABLE_NAME,
        sa.Column("id", sa.String(13), nullable=False, comment="TSID of the message"),
        sa.Column(
            "type",
            sa.String(20),
            nullable=False,
            comment="EVENT, DISPATCH_JOB or AUDIT_LOG",
        ),
        sa.Column(
            "message_group",
            sa.String(255),
            nullable=True,
            comment="Ordering group used by the relay",
        ),
        sa.Column("payload", sa.Text(), nullable=False, comment="JSON-encoded message payload"),
        sa.Column(
            "status",
            sa.SmallInteger(),
            server_default=sa.text("0"),
            nullable=False,
            comment="0 pending, 9 in progress, 1-6 delivery outcome",
        ),
        sa.Column(
            "retry_count",
            sa.SmallInteger(),
            server_default=sa.text("0"),
            nullable=False,
            comment="Delivery attempts made by the relay",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.current_timestamp(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.current_timestamp(),
            nullable=False,
        ),
        sa.Column(
            "error_message",
            sa.Text(),
            nullable=True,
            comment="Last delivery error written by the relay",
        ),
        sa.Column("client_id", sa.String(255), nullable=True, comment="Producing client"),
        sa.Column("payload_size", sa.Integer(), nullable=True, comment="Payload size in bytes"),
        sa.Column(
            "headers",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id"),
        comment="Transactional outbox drained by the FlowCatalyst relay",
    )

    # Pending work, polled by the relay (partial index)
    op.create_index(
        "idx_outbox_messages_pending",
        OUTBOX_TABLE_NAME,
        ["status", "message_group", "created_at"],
        unique=False,
        postgresql_where=sa.text("status = 0"),
        sqlite_where=sa.text("status = 0"),
    )

    # Crash recovery sweep over rows stuck in progress (partial index)
    op.create_index(
        "idx_outbox_messages_stuck",
        OUTBOX_TABLE_NAME,
        ["status", "created_at"],
        unique=False,
        postgresql_where=sa.text("status = 9"),
        sqlite_where=sa.text("status = 9"),
    )

    op.create_index(
        "idx_outbox_client_pending",
        OUTBOX_TABLE_NAME,
        ["client_id", "status", "created_at"],
        unique=False,
    )


def drop_outbox_messages_table(op: Operations) -> None:
    """Drop the outbox_messages table and its indexes."""
    op.drop_index("idx_outbox_client_pending", table_name=OUTBOX_TABLE_NAME)
    op.drop_index("idx_outbox_messages_stuck", table_name=OUTBOX_TABLE_NAME)
    op.drop_index("idx_outbox_messages_pending", table_name=OUTBOX_TABLE_NAME)
    op.drop_table(OUTBOX_TABLE_NAME)
