"""Bundled OutboxDriver implementations."""

from .sqlalchemy_driver import SQLAlchemyOutboxDriver

__all__ = ["SQLAlchemyOutboxDriver"]
