from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TypedDict, Union


# PUBLIC_INTERFACE
class TaskStatus(str, Enum):
    """Allowed values of the `status` column (the `task_status` enum type)."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


TASK_STATUSES = tuple(s.value for s in TaskStatus)


# PUBLIC_INTERFACE
class NewTask(TypedDict):
    """
    A validated task creation request, ready to be inserted.

    Fields:
    - title: 1..100 characters
    - description: at least 5 characters
    - status: one of TASK_STATUSES
    - due_datetime: normalized UTC instant, e.g. '2024-12-31T10:00:00.000Z'
    """

    title: str
    description: str
    status: str
    due_datetime: str


# PUBLIC_INTERFACE
class TaskEntity(TypedDict):
    """
    A row of the `tasks` relation as returned by the insert.

    due_datetime is a timezone-aware datetime when it comes from the driver.
    """

    id: int
    title: str
    description: str
    status: str
    due_datetime: Union[datetime, str]
