from __future__ import annotations

import logging

from fastapi import Depends, Request

from .db import Database, StoreError
from .errors import AppError, DatabaseConnectionError, StorageError, UniqueConstraintError
from .models import NewTask, TaskEntity

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
TITLE_UNIQUE_CONSTRAINT = "tasks_title_key"

INSERT_TASK_SQL = """
    INSERT INTO tasks (title, description, status, due_datetime)
    VALUES (:title, :description, CAST(:status AS task_status), CAST(:due_datetime AS TIMESTAMPTZ))
    RETURNING id, title, description, status, due_datetime
"""


# PUBLIC_INTERFACE
def classify_store_error(err: StoreError) -> AppError:
    """
    Map a data-store failure onto the API error taxonomy.

    - SQLSTATE class 08 (connection exception) -> DatabaseConnectionError
    - unique violation on the title constraint -> UniqueConstraintError
    - anything else, including other constraints -> StorageError
    """
    if err.code and err.code.startswith("08"):
        return DatabaseConnectionError()

    if err.code == UNIQUE_VIOLATION and err.constraint == TITLE_UNIQUE_CONSTRAINT:
        return UniqueConstraintError("A task with this title already exists", err.constraint)

    return StorageError(err.message)


# PUBLIC_INTERFACE
class TaskRepository:
    """Storage gateway for the `tasks` relation."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def insert(self, task: NewTask) -> TaskEntity:
        """
        Insert a validated task and return the stored row, including its generated id.

        Raises:
            UniqueConstraintError if the title already exists.
            DatabaseConnectionError if the store is unreachable.
            StorageError for any other store failure.
        """
        try:
            rows = self._db.execute(INSERT_TASK_SQL, task)
        except StoreError as err:
            mapped = classify_store_error(err)
            if isinstance(mapped, UniqueConstraintError):
                logger.warning("Duplicate task title rejected (constraint %s)", err.constraint)
            else:
                logger.error("Task insert failed [%s]: %s", err.code, err.message)
            raise mapped from err

        if not rows:
            raise StorageError("INSERT ... RETURNING produced no row")
        created: TaskEntity = rows[0]  # type: ignore[assignment]
        logger.debug("Created task id=%s", created["id"])
        return created


def get_database(request: Request) -> Database:
    """Return the pool opened at start-up."""
    return request.app.state.database


# PUBLIC_INTERFACE
def get_task_repository(db: Database = Depends(get_database)) -> TaskRepository:
    """FastAPI dependency returning a gateway bound to the shared pool."""
    return TaskRepository(db)
