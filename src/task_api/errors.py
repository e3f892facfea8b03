from __future__ import annotations

from typing import Any, Dict, Optional


# PUBLIC_INTERFACE
class AppError(Exception):
    """
    Base class for failures that the API knows how to render.

    Each instance carries the HTTP status code it maps to and optional
    structured details that are included in the JSON error body.
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details


# 4xx - client errors

class MissingFieldError(AppError):
    """A required field is absent or empty."""

    status_code = 400

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} is required")
        self.field = field


class InvalidFieldError(AppError):
    """A field is present but fails a shape, length, enum or date rule."""

    status_code = 400

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"Invalid value for {field}: {reason}")
        self.field = field
        self.reason = reason


class UniqueConstraintError(AppError):
    status_code = 409

    def __init__(self, message: str, constraint: Optional[str] = None) -> None:
        super().__init__(message, details={"constraint": constraint})
        self.constraint = constraint


# 5xx - server errors

class DatabaseConnectionError(AppError):
    status_code = 500

    def __init__(self) -> None:
        super().__init__("Database connection failed")


class StorageError(AppError):
    """
    Any other data-store failure.

    The raw store message is kept for logging only; clients get a generic message.
    """

    status_code = 500

    def __init__(self, raw_message: str) -> None:
        super().__init__("Database error occurred")
        self.raw_message = raw_message
