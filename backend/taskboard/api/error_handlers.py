"""Error Handlers — global exception handlers for the TaskBoard API.

Invariants:
    - TaskBoardError → structured JSON with error code, message, severity, http_status
    - TaskBoardError logs carry the task_id/user_id/operation its ErrorContext was stamped with
    - RequestValidationError → field-level details; "field" is the camelCase wire name,
      "location" says whether it came from the body, query or path
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (TaskBoardError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py to keep the entry point to wiring only
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from taskboard.core.errors import TaskBoardError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_taskboard_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_taskboard_error_handler(app: FastAPI) -> None:
    """Register the handler for every classified task failure."""

    @app.exception_handler(TaskBoardError)
    async def taskboard_error_handler(request: Request, exc: TaskBoardError):
        """Render the error envelope with the variant's own status."""
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            f"TaskBoardError: {exc.message}",
            extra={
                "error_code": exc.code, "path": request.url.path,
                "task_id": exc.context.task_id, "user_id": exc.context.user_id,
                "operation": exc.context.operation,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "location": e["loc"][0],
                    "field": ".".join(str(part) for part in e["loc"][1:]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
