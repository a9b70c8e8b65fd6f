"""Failure Classification — maps whatever a task operation raised onto a TaskBoardError.

Invariants:
    - TaskBoardError passes through unchanged (already classified)
    - Both duplicate paths (pre-check and store constraint) yield the identical message
    - Store field-level failures are concatenated into one "Validation Error: ..." message
    - Mutations describe unknown failures; queries always use the fixed "Unknown error"
    - describe_failure(None) == "null"

Design Decisions:
    - Pure functions over try/except chains in every service: one place decides the variant
    - Accepts `object`, not Exception: adapters may hand over non-exception failure values
"""

from collections.abc import Mapping

from taskboard.core.domain_types import TaskListing
from taskboard.core.errors import (
    TaskBoardError, TaskValidationError, DuplicateTaskError, UnknownTaskError,
)
from taskboard.core.repository_protocols import (
    StoreValidationFailed, UniqueConstraintViolation,
)


_LISTING_LABELS: dict[TaskListing, str] = {
    TaskListing.ACTIVE: "active",
    TaskListing.FINISHED: "completed",
}


def describe_failure(failure: object) -> str:
    """Human-readable description of an arbitrary failure value."""
    if failure is None:
        return "null"
    if isinstance(failure, Mapping) and failure.get("message") is not None:
        return str(failure["message"])
    message = getattr(failure, "message", None)
    if message is not None:
        return str(message)
    return str(failure)


def classify_store_failure(failure: object) -> TaskBoardError | None:
    """Shared first pass: known variants and port-level signals."""
    if isinstance(failure, TaskBoardError):
        return failure
    if isinstance(failure, StoreValidationFailed):
        return TaskValidationError(
            f"Validation Error: {', '.join(failure.errors.values())}",
        )
    if isinstance(failure, UniqueConstraintViolation):
        return DuplicateTaskError()
    return None


def classify_mutation_failure(failure: object, action: str) -> TaskBoardError:
    """Classify a create/update failure. `action` is "create" or "update"."""
    known = classify_store_failure(failure)
    if known is not None:
        return known
    raw = describe_failure(failure)
    return UnknownTaskError(f"Failed to {action} task: {raw}", raw_description=raw)


def classify_query_failure(
    failure: object, listing: TaskListing,
) -> TaskBoardError:
    """Classify a listing failure; unknown causes never leak their text."""
    if isinstance(failure, TaskBoardError):
        return failure
    return UnknownTaskError(
        f"Failed to retrieve {_LISTING_LABELS[listing]} tasks: Unknown error",
        raw_description=describe_failure(failure),
    )
