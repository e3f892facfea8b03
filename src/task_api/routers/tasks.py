from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status

from ..repositories import TaskRepository, get_task_repository
from ..schemas import ErrorBody, TaskEnvelope, TaskOut
from ..validation import validate_task_create

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TaskEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Validate and store a new task, returning the stored row.",
    responses={
        201: {"description": "Task created successfully"},
        400: {"model": ErrorBody, "description": "Missing or invalid field"},
        409: {"model": ErrorBody, "description": "A task with this title already exists"},
        500: {"model": ErrorBody, "description": "Database or internal failure"},
    },
)
def create_task(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    repo: TaskRepository = Depends(get_task_repository),
) -> TaskEnvelope:
    """
    Create a new Task.

    Failures are not caught here; the registered error handlers render them.
    """
    new_task = validate_task_create(payload)
    created = repo.insert(new_task)
    return TaskEnvelope(task=TaskOut(**created))  # type: ignore[arg-type]
