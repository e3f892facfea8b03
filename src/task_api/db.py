from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, OperationalError

from .settings import Settings

logger = logging.getLogger(__name__)

# SQLSTATE sqlclient_unable_to_establish_sqlconnection
CONNECTION_FAILURE_CODE = "08001"


# PUBLIC_INTERFACE
class StoreError(Exception):
    """
    A data-store failure with the driver's structured fields.

    Attributes:
    - message: the raw driver message
    - code: SQLSTATE of the failure, if known
    - constraint: name of the violated constraint, for constraint-class failures
    """

    def __init__(self, message: str, code: Optional[str] = None, constraint: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.constraint = constraint


def to_store_error(exc: DBAPIError) -> StoreError:
    """Extract SQLSTATE and constraint name from a wrapped DBAPI exception."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None)
    diag = getattr(orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None) if diag is not None else None

    # psycopg reports refused/unreachable connections without a SQLSTATE
    if code is None and isinstance(exc, OperationalError):
        code = CONNECTION_FAILURE_CODE

    message = str(orig) if orig is not None else str(exc)
    return StoreError(message.strip(), code=code, constraint=constraint)


# PUBLIC_INTERFACE
class Database:
    """
    Process-wide PostgreSQL connection pool.

    Created once at start-up and passed to the storage gateway. Every
    `execute` call borrows a connection and returns it to the pool on all
    exit paths.
    """

    def __init__(self, url: Optional[str] = None, pool_size: int = 5, engine: Optional[Engine] = None) -> None:
        if engine is None:
            if not url:
                raise RuntimeError("DATABASE_URL or PGDATABASE must be set")
            engine = create_engine(url, pool_size=pool_size, pool_pre_ping=True)
        self._engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url, pool_size=settings.db_pool_size)

    def execute(self, query: str, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Run one parameterized statement in its own transaction and return the
        result rows as dicts (empty for statements that return no rows).

        Raises:
            StoreError for any driver-level failure.
        """
        try:
            with self._engine.begin() as conn:
                result = conn.execute(text(query), dict(params or {}))
                if not result.returns_rows:
                    return []
                return [dict(row) for row in result.mappings()]
        except DBAPIError as exc:
            raise to_store_error(exc) from exc

    def end(self) -> None:
        """Close all pooled connections."""
        logger.info("Closing database pool")
        self._engine.dispose()
