from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_serializer

from .models import TaskStatus
from .validation import to_iso_instant


# PUBLIC_INTERFACE
class TaskOut(BaseModel):
    """
    Schema returned by the API for a stored task.
    """

    id: int = Field(..., description="Unique identifier of the task")
    title: str = Field(..., description="Task title")
    description: str = Field(..., description="Task description")
    status: TaskStatus = Field(..., description="Task status")
    due_datetime: datetime = Field(..., description="Due instant, rendered as UTC ISO8601")

    @field_serializer("due_datetime")
    def serialize_due_datetime(self, value: datetime) -> str:
        return to_iso_instant(value)


class TaskEnvelope(BaseModel):
    task: TaskOut


class ErrorBody(BaseModel):
    """JSON body of every failure response."""

    error: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Structured details, when available")
