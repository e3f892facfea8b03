from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from .errors import InvalidFieldError, MissingFieldError
from .models import TASK_STATUSES, NewTask

MAX_TITLE_LENGTH = 100
MIN_DESCRIPTION_LENGTH = 5

REQUIRED_FIELDS = ("title", "description", "status", "due_datetime")


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


# PUBLIC_INTERFACE
def to_iso_instant(value: datetime) -> str:
    """
    Render a datetime as a UTC instant with millisecond precision and a 'Z'
    suffix, e.g. '2024-12-31T10:00:00.000Z'. Naive values are taken as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# PUBLIC_INTERFACE
def parse_due_datetime(value: str) -> str:
    """
    Parse an ISO8601 date or datetime string and return its normalized UTC instant.

    Raises:
        InvalidFieldError if the value is not a valid calendar date/time.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
        return to_iso_instant(parsed)
    except (ValueError, OverflowError) as e:
        raise InvalidFieldError("due_datetime", "invalid date format") from e


# PUBLIC_INTERFACE
def validate_task_create(payload: Optional[Mapping[str, Any]]) -> NewTask:
    """
    Validate an incoming task creation body and return the normalized task.

    Checks run in a fixed order and the first failure wins:
    1. presence of title, description, status, due_datetime
    2. every field is a string
    3. title length, then description length
    4. status enum membership (case-sensitive)
    5. due_datetime parseability

    Raises:
        MissingFieldError / InvalidFieldError
    """
    data = payload or {}

    for field in REQUIRED_FIELDS:
        if _is_missing(data.get(field)):
            raise MissingFieldError(field)

    for field in REQUIRED_FIELDS:
        if not isinstance(data[field], str):
            raise InvalidFieldError(field, "must be a string")

    title: str = data["title"]
    description: str = data["description"]
    status: str = data["status"]

    if len(title) > MAX_TITLE_LENGTH:
        raise InvalidFieldError("title", "too long")

    if len(description) < MIN_DESCRIPTION_LENGTH:
        raise InvalidFieldError("description", "too short")

    if status not in TASK_STATUSES:
        raise InvalidFieldError("status", "invalid value")

    return {
        "title": title,
        "description": description,
        "status": status,
        "due_datetime": parse_due_datetime(data["due_datetime"]),
    }
