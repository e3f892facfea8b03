import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .db import Database
from .logging_setup import setup_logging
from .middleware import register_error_handlers
from .routers import tasks as tasks_router
from .settings import get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service liveness endpoint."},
    {"name": "tasks", "description": "Creation of Task records."},
]

_settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the shared database pool on start-up and close it on shutdown."""
    setup_logging(_settings.log_level)
    if getattr(app.state, "database", None) is None:
        app.state.database = Database.from_settings(_settings)
    logger.info("Task Manager API started (env=%s)", _settings.app_env)
    try:
        yield
    finally:
        app.state.database.end()


app = FastAPI(
    title="Task Manager API",
    description="Backend API service for creating tasks in PostgreSQL.",
    version="0.1.0",
    openapi_tags=openapi_tags,
    lifespan=lifespan,
)

# Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
allow_all = (_settings.cors_allow_origins == ["*"]) or (len(_settings.cors_allow_origins) == 0)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all else _settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


# PUBLIC_INTERFACE
@app.get("/", summary="Liveness Check", tags=["health"], response_class=PlainTextResponse)
def health_check() -> str:
    """
    Liveness probe.

    Returns:
        A plain-text confirmation string.
    """
    return "Task Manager API LIVE"


app.include_router(tasks_router.router)
