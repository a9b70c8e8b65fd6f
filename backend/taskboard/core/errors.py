"""Error Hierarchy — the closed set of failures a task operation can surface.

Invariants:
    - Every error has a message (str), code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every failure crossing a service boundary is a TaskBoardError — one type, five variants
    - The message is the client contract; code/category only steer HTTP mapping and logs
    - to_response() produces the REST envelope

Design Decisions:
    - Single hierarchy with TaskBoardError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


DUPLICATE_TASK_MESSAGE = "Task with this name already exists for this user"
UNAUTHORIZED_UPDATE_MESSAGE = "Unauthorized: You can only update your own tasks"


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    task_id: str | None = None
    user_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class TaskBoardError(Exception):
    """Base exception for all TaskBoard errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "task_id": self.context.task_id,
                    "user_id": self.context.user_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class TaskValidationError(TaskBoardError):
    """Input or stored-document validation failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class UnauthorizedTaskAccessError(TaskBoardError):
    """Caller does not own the referenced task."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            UNAUTHORIZED_UPDATE_MESSAGE, "UNAUTHORIZED",
            ErrorCategory.AUTHORIZATION, ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(TaskBoardError):
    """Referenced task or user does not exist."""
    def __init__(self, resource_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type


class DuplicateTaskError(TaskBoardError):
    """(task_name, user_id) already taken — pre-check or storage constraint."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            DUPLICATE_TASK_MESSAGE, "DUPLICATE_TASK", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Unclassified Errors (500) ──────────────────────────────────

class UnknownTaskError(TaskBoardError):
    """Anything the classifier could not place in a known variant."""
    def __init__(
        self,
        message: str,
        raw_description: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, context, 500,
        )
        self.raw_description = raw_description

