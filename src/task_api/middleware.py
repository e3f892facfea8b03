from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .errors import AppError, InvalidFieldError

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def error_response(exc: Exception) -> JSONResponse:
    """
    Render any failure as a JSON response.

    Response format:
        {"error": "<message>", "details": {...}}   # details only when the error carries them

    Unrecognized exceptions become a 500 with a generic message; their
    content is logged, never returned.
    """
    if isinstance(exc, AppError):
        content: Dict[str, Any] = {"error": exc.message}
        if exc.details:
            content["details"] = exc.details
        return JSONResponse(status_code=exc.status_code, content=content)

    return JSONResponse(status_code=500, content={"error": "Internal server error"})


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """A body FastAPI could not bind (not a JSON object) is an invalid field."""
    logger.debug("Rejected request body: %s", exc.errors())
    return error_response(InvalidFieldError("body", "must be a JSON object"))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(exc)


# PUBLIC_INTERFACE
def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers that turn every failure into an HTTP response."""
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
