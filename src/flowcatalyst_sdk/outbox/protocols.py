"""
Storage driver contract for the transactional outbox.

The embedding application implements OutboxDriver on top of its own database
client so that outbox rows are written inside the same transaction as its
business data.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from flowcatalyst_sdk.outbox.models import OutboxMessage


class OutboxDriver(Protocol):
    """Persistence capability supplied by the application."""

    async def insert(self, message: OutboxMessage) -> None:
        """
        Insert a single message within the caller's open transaction.

        Args:
            message: Fully built PENDING message

        Raises:
            Any persistence error; it reaches the OutboxManager caller unchanged.
        """
        ...

    async def insert_batch(self, messages: Sequence[OutboxMessage]) -> None:
        """
        Insert several messages within the caller's open transaction.

        Must be all-or-nothing: after commit either every message is visible or
        none is.

        Args:
            messages: Fully built PENDING messages, in the order ids were assigned
        """
        ...
