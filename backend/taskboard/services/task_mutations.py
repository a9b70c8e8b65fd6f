"""Task Mutations — create and update flows over an injected TaskRepository.

Invariants:
    - Validation runs before any store call; its first failure propagates unchanged
    - Exactly one write (insert / update_by_id) per successful mutation
    - Duplicate (task_name, user_id) is pre-checked for a friendly message, but the
      store's unique constraint is the actual guarantee; both map to DuplicateTaskError
    - Updates only write fields the caller sent, and never id or user_id
    - Every failure leaves as a TaskBoardError (classified in core/classify_errors.py)

Design Decisions:
    - Follows impureim sandwich: read state → pure validate → single write
    - No retries: a failed store call is classified and surfaced immediately
"""

import logging

from taskboard.core.classify_errors import classify_mutation_failure
from taskboard.core.domain_types import TaskId, UserId, UPDATABLE_FIELDS
from taskboard.core.errors import (
    TaskBoardError, DuplicateTaskError, ResourceNotFoundError,
    UnauthorizedTaskAccessError, UnknownTaskError,
)
from taskboard.core.repository_protocols import TaskFilter, TaskRepository
from taskboard.core.validate_task import (
    validate_new_task, validate_task_identifiers, validate_task_changes,
)
from taskboard.schemas.task import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


class TaskMutationService:
    """Create/update handlers — validated, uniqueness-guarded, single-write."""

    def __init__(self, tasks: TaskRepository):
        self.tasks = tasks

    async def create_task(self, task_input: TaskCreate) -> dict:
        """Validate, pre-check the name, insert. Returns the persisted record."""
        fields = task_input.model_dump()
        try:
            return await self._create(fields)
        except TaskBoardError as e:
            _log_rejection("create", e, user_id=fields.get("user_id"))
            raise
        except Exception as e:
            error = classify_mutation_failure(e, "create")
            _log_rejection("create", error, user_id=fields.get("user_id"))
            raise error from e

    async def update_task(self, task_id: TaskId, task_input: TaskUpdate) -> dict:
        """Validate, check ownership and name, apply a partial update."""
        changes = {
            name: value for name, value in task_input.changes().items()
            if name in UPDATABLE_FIELDS
        }
        try:
            return await self._update(task_id, task_input.user_id, changes)
        except TaskBoardError as e:
            _log_rejection(
                "update", e, task_id=task_id, user_id=task_input.user_id,
            )
            raise
        except Exception as e:
            error = classify_mutation_failure(e, "update")
            _log_rejection(
                "update", error, task_id=task_id, user_id=task_input.user_id,
            )
            raise error from e

    async def _create(self, fields: dict) -> dict:
        # ── PURE: validate input ──
        error = validate_new_task(fields)
        if error:
            raise error

        # ── IMPURE: uniqueness pre-check, then one write ──
        existing = await self.tasks.find_one(
            TaskFilter(task_name=fields["task_name"], user_id=fields["user_id"]),
        )
        if existing:
            raise DuplicateTaskError()

        record = await self.tasks.insert({
            "task_name": fields["task_name"],
            "description": fields["description"],
            "priority": fields["priority"],
            "tags": fields.get("tags") or [],
            "user_id": fields["user_id"],
            "is_done": False,
        })
        logger.info(
            "Task created",
            extra={"task_id": record["id"], "user_id": record["user_id"]},
        )
        return record

    async def _update(
        self, task_id: TaskId, user_id: UserId, changes: dict,
    ) -> dict:
        error = validate_task_identifiers(task_id, user_id)
        if error:
            raise error

        existing = await self.tasks.find_by_id(task_id)
        if not existing:
            raise ResourceNotFoundError("Task")
        if existing["user_id"] != user_id:
            raise UnauthorizedTaskAccessError()

        error = validate_task_changes(changes, existing["task_name"])
        if error:
            raise error

        # Unchanged or absent name: the storage constraint still covers races
        new_name = changes.get("task_name")
        if new_name and new_name != existing["task_name"]:
            duplicate = await self.tasks.find_one(
                TaskFilter(task_name=new_name, user_id=user_id, exclude_id=task_id),
            )
            if duplicate:
                raise DuplicateTaskError()

        updated = await self.tasks.update_by_id(task_id, changes)
        if updated is None:
            raise ResourceNotFoundError("Task")
        logger.info(
            "Task updated",
            extra={
                "task_id": task_id, "user_id": user_id,
                "operation": ",".join(sorted(changes)) or "touch",
            },
        )
        return updated


def _log_rejection(
    operation: str, error: TaskBoardError,
    task_id: str | None = None, user_id: str | None = None,
) -> None:
    """Log the failure and stamp the request identifiers onto its ErrorContext."""
    ctx = error.context
    ctx.operation = ctx.operation or f"{operation}_task"
    ctx.task_id = ctx.task_id or task_id
    ctx.user_id = ctx.user_id or user_id
    extra = {
        "operation": ctx.operation, "error_code": error.code,
        "task_id": ctx.task_id, "user_id": ctx.user_id,
    }
    if isinstance(error, UnknownTaskError):
        logger.error(f"Task {operation} failed: {error.message}", extra=extra)
    else:
        logger.warning(f"Task {operation} rejected: {error.message}", extra=extra)
