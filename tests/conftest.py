"""Shared fixtures for FlowCatalyst SDK tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from flowcatalyst_sdk.outbox.create_audit_log_dto import CreateAuditLogDto
from flowcatalyst_sdk.outbox.create_dispatch_job_dto import CreateDispatchJobDto
from flowcatalyst_sdk.outbox.create_event_dto import CreateEventDto
from flowcatalyst_sdk.outbox.manager import OutboxManager
from flowcatalyst_sdk.outbox.protocols import OutboxDriver


@pytest.fixture
def client_id() -> str:
    """Provide a consistent tenant identifier."""
    return "0HZXEQ5Y8JY00"


@pytest.fixture
def mock_driver() -> AsyncMock:
    """Mock storage driver following the OutboxDriver protocol."""
    mock = AsyncMock(spec=OutboxDriver)
    mock.insert = AsyncMock(return_value=None)
    mock.insert_batch = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def outbox_manager(mock_driver: AsyncMock, client_id: str) -> OutboxManager:
    """OutboxManager wired to the mock driver."""
    return OutboxManager(mock_driver, client_id)


@pytest.fixture
def sample_event() -> CreateEventDto:
    """Event DTO with only the required fields."""
    return CreateEventDto.create("user.registered", {"userId": "123"})


@pytest.fixture
def sample_dispatch_job() -> CreateDispatchJobDto:
    """Dispatch job DTO with only the required fields."""
    return CreateDispatchJobDto.create(
        "order-service",
        "order.process",
        "https://api.example.com/webhook",
        '{"orderId":"123"}',
        "pool-1",
    )


@pytest.fixture
def sample_audit_log() -> CreateAuditLogDto:
    """Audit log DTO with only the required fields."""
    return CreateAuditLogDto.create("User", "0HZXEQ5Y8JY5Z", "CREATE")


@pytest.fixture
def swedish_text() -> str:
    """Non-ASCII text to check UTF-8 handling (åäöÅÄÖ)."""
    return "Åsa Öberg är här"
