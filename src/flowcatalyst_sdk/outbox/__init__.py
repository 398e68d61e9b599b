"""
Transactional outbox for the FlowCatalyst platform.

Usage:
    from flowcatalyst_sdk.outbox import CreateEventDto, OutboxManager
    from flowcatalyst_sdk.outbox.drivers import SQLAlchemyOutboxDriver

    async with session.begin():
        session.add(order)
        outbox = OutboxManager(SQLAlchemyOutboxDriver(session), client_id)
        # Committed atomically with the order
        await outbox.create_event(
            CreateEventDto.create("order.created", {"orderId": order.id})
        )
"""

from .create_audit_log_dto import CreateAuditLogDto
from .create_dispatch_job_dto import CreateDispatchJobDto
from .create_event_dto import ContextData, CreateEventDto
from .manager import OutboxManager
from .models import OutboxMessage
from .protocols import OutboxDriver
from .status_enums import MessageType, OutboxStatus
from .tsid import TsidGenerator
from .tsid import generate as generate_tsid
from .tsid import is_valid as is_valid_tsid

__all__ = [
    "OutboxManager",
    "OutboxDriver",
    "OutboxMessage",
    "OutboxStatus",
    "MessageType",
    "CreateEventDto",
    "ContextData",
    "CreateDispatchJobDto",
    "CreateAuditLogDto",
    "TsidGenerator",
    "generate_tsid",
    "is_valid_tsid",
]
