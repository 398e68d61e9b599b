"""Outbox message type and status-code enums.

Both are a storage contract shared with the external outbox relay: the values
are persisted as-is and must never be renumbered or renamed.

OutboxStatus: SMALLINT codes. The SDK only ever writes PENDING; the relay moves
a message PENDING -> IN_PROGRESS -> one of the outcome codes.
MessageType: discriminator stored in the ``type`` column.
"""

from __future__ import annotations

from enum import Enum, IntEnum


class MessageType(str, Enum):
    """Kinds of messages the outbox carries."""

    EVENT = "EVENT"
    DISPATCH_JOB = "DISPATCH_JOB"
    AUDIT_LOG = "AUDIT_LOG"


class OutboxStatus(IntEnum):
    """Delivery status codes of an outbox row.

    retryable() are outcomes the relay will attempt again.
    permanent_failure() are outcomes the relay gives up on.
    terminal() are states after which the relay never touches the row again.
    """

    # Waiting for the relay (the only status the SDK writes)
    PENDING = 0
    # Delivered to the platform
    SUCCESS = 1
    # Platform returned 400
    BAD_REQUEST = 2
    # Platform returned 500
    INTERNAL_ERROR = 3
    # Platform returned 401
    UNAUTHORIZED = 4
    # Platform returned 403
    FORBIDDEN = 5
    # Platform returned 502/503/504
    GATEWAY_ERROR = 6
    # Claimed by the relay; a row stuck here means the relay crashed mid-delivery
    IN_PROGRESS = 9

    @classmethod
    def retryable(cls) -> set[OutboxStatus]:
        """Return failure codes the relay retries."""
        return {cls.INTERNAL_ERROR, cls.UNAUTHORIZED, cls.GATEWAY_ERROR}

    @classmethod
    def permanent_failure(cls) -> set[OutboxStatus]:
        """Return failure codes the relay does not retry."""
        return {cls.BAD_REQUEST, cls.FORBIDDEN}

    @classmethod
    def terminal(cls) -> set[OutboxStatus]:
        """Return final states."""
        return {cls.SUCCESS} | cls.permanent_failure()
