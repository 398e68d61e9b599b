"""
FlowCatalyst SDK.

Producer-side library for the FlowCatalyst event-dispatch platform. The
transactional outbox lives in ``flowcatalyst_sdk.outbox``; the SQLAlchemy
driver and table model are imported from their own modules so that plain
users do not pay for them.
"""

from .error_handling import FlowCatalystError
from .outbox import (
    ContextData,
    CreateAuditLogDto,
    CreateDispatchJobDto,
    CreateEventDto,
    MessageType,
    OutboxDriver,
    OutboxManager,
    OutboxMessage,
    OutboxStatus,
    generate_tsid,
    is_valid_tsid,
)

__all__ = [
    "FlowCatalystError",
    "OutboxManager",
    "OutboxDriver",
    "OutboxMessage",
    "OutboxStatus",
    "MessageType",
    "CreateEventDto",
    "ContextData",
    "CreateDispatchJobDto",
    "CreateAuditLogDto",
    "generate_tsid",
    "is_valid_tsid",
]
