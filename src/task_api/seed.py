"""
Schema bootstrap and seeding for the `tasks` relation.

Usage:
    python -m task_api.seed

Drops and recreates the schema, inserts the development data set and
closes the pool. Intended for local development and test databases only.
"""
from __future__ import annotations

import logging
from typing import Iterable, Mapping

from .db import Database
from .logging_setup import setup_logging
from .models import TASK_STATUSES
from .repositories import INSERT_TASK_SQL
from .settings import get_settings

logger = logging.getLogger(__name__)

TASK_STATUS_TYPE_SQL = "CREATE TYPE task_status AS ENUM ({})".format(
    ", ".join(f"'{s}'" for s in TASK_STATUSES)
)

TASKS_TABLE_SQL = """
    CREATE TABLE tasks (
        id SERIAL PRIMARY KEY,
        title VARCHAR(255) NOT NULL UNIQUE CHECK (TRIM(title) <> ''),
        description TEXT,
        status task_status NOT NULL,
        due_datetime TIMESTAMPTZ NOT NULL
    )
"""

DEV_TASKS = [
    {
        "title": "Set up project",
        "description": "Create the repository and CI pipeline",
        "status": "completed",
        "due_datetime": "2025-01-06T09:00:00.000Z",
    },
    {
        "title": "Design database schema",
        "description": "Model tasks with status and due date",
        "status": "in_progress",
        "due_datetime": "2025-01-10T17:00:00.000Z",
    },
    {
        "title": "Write API documentation",
        "description": "Document the POST /tasks contract",
        "status": "pending",
        "due_datetime": "2025-01-20T12:00:00.000Z",
    },
]


# PUBLIC_INTERFACE
def initialise_schema(db: Database) -> None:
    """Drop and recreate the `task_status` type and the `tasks` table."""
    db.execute("DROP TABLE IF EXISTS tasks")
    db.execute("DROP TYPE IF EXISTS task_status")
    db.execute(TASK_STATUS_TYPE_SQL)
    db.execute(TASKS_TABLE_SQL)


# PUBLIC_INTERFACE
def seed(db: Database, tasks: Iterable[Mapping[str, str]]) -> int:
    """Reset the schema and insert `tasks`. Returns the number of rows inserted."""
    initialise_schema(db)
    logger.info("Seeding tasks...")
    count = 0
    for task in tasks:
        db.execute(INSERT_TASK_SQL, task)
        count += 1
    logger.info("Seeding complete (%d tasks)", count)
    return count


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    db = Database.from_settings(settings)
    try:
        seed(db, DEV_TASKS)
    finally:
        db.end()


if __name__ == "__main__":
    main()
