"""Pure data models shared across the SDK."""

from .error_models import ErrorDetail

__all__ = ["ErrorDetail"]
