"""Task Validation — pure rule checks run before any store interaction.

Invariants:
    - Every check is PURE: returns an error message or None, never raises, never does IO
    - Rules run in a fixed order and stop at the first failure (no aggregation)
    - Order: required fields (create) | identifiers (update), description length,
      description != effective task name, priority range, tag count
    - The effective task name is the proposed one when present, else the stored one

Design Decisions:
    - validate_* return TaskValidationError | None: the shell decides to raise
    - Field-level rules only fire for fields present in the proposed change,
      so the same rules serve full creates and partial updates
"""

from taskboard.core.domain_types import (
    MIN_DESCRIPTION_LENGTH, MIN_PRIORITY, MAX_PRIORITY, MAX_TAGS,
)
from taskboard.core.errors import TaskValidationError


# ─── Individual rules ────────────────────────────────────────────

def check_required_fields(
    task_name: str | None, description: str | None, user_id: str | None,
) -> str | None:
    if not task_name or not description or not user_id:
        return "taskName, description, and userId are required fields"
    return None


def check_required_identifiers(
    task_id: str | None, user_id: str | None,
) -> str | None:
    if not task_id or not user_id:
        return "taskId and userId are required"
    return None


def check_description_length(description: str) -> str | None:
    if len(description) < MIN_DESCRIPTION_LENGTH:
        return (
            f"Description must be at least {MIN_DESCRIPTION_LENGTH} "
            "characters long"
        )
    return None


def check_description_differs(
    description: str, effective_task_name: str | None,
) -> str | None:
    if description == effective_task_name:
        return "Description cannot be the same as taskName"
    return None


def check_priority_range(priority: int) -> str | None:
    if priority < MIN_PRIORITY or priority > MAX_PRIORITY:
        return f"Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}"
    return None


def check_tags_count(tags: list[str]) -> str | None:
    if len(tags) > MAX_TAGS:
        return f"Tags cannot exceed {MAX_TAGS} items"
    return None


# ─── Composed validators ─────────────────────────────────────────

def _check_field_rules(
    proposed: dict, effective_task_name: str | None,
) -> str | None:
    """Rules 3-6, applied only to the fields present in `proposed`."""
    description = proposed.get("description")
    if description is not None:
        error = check_description_length(description)
        if error:
            return error
        error = check_description_differs(description, effective_task_name)
        if error:
            return error

    priority = proposed.get("priority")
    if priority is not None:
        error = check_priority_range(priority)
        if error:
            return error

    tags = proposed.get("tags")
    if tags is not None:
        error = check_tags_count(tags)
        if error:
            return error

    return None


def validate_new_task(fields: dict) -> TaskValidationError | None:
    """Create mode: required fields first, then the field rules."""
    error = check_required_fields(
        fields.get("task_name"), fields.get("description"), fields.get("user_id"),
    ) or _check_field_rules(fields, fields.get("task_name"))
    return TaskValidationError(error) if error else None


def validate_task_identifiers(
    task_id: str | None, user_id: str | None,
) -> TaskValidationError | None:
    """Update mode, step one: both identifiers must be non-empty."""
    error = check_required_identifiers(task_id, user_id)
    return TaskValidationError(error) if error else None


def validate_task_changes(
    changes: dict, stored_task_name: str,
) -> TaskValidationError | None:
    """Update mode, field rules against the effective task name."""
    effective_task_name = (
        changes["task_name"] if "task_name" in changes else stored_task_name
    )
    error = _check_field_rules(changes, effective_task_name)
    return TaskValidationError(error) if error else None
