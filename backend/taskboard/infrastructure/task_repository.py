"""SQL Task Repository — TaskRepository implementation over an AsyncSession.

Invariants:
    - Every insert/update_by_id revalidates the resulting document against the store's
      own field rules and raises StoreValidationFailed listing each failing field
    - A unique-constraint IntegrityError is rolled back and raised as UniqueConstraintViolation;
      any other IntegrityError propagates untouched
    - Malformed task ids match nothing (None), they never reach the driver
    - update_by_id refreshes updated_at even when no column value changed

Design Decisions:
    - validate_document carries the store schema messages, not the core pre-check messages
    - Records returned as plain dicts so core never sees ORM objects
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.domain_types import (
    SortDirection, SortSpec, TASK_FIELDS,
    MIN_DESCRIPTION_LENGTH, MIN_PRIORITY, MAX_PRIORITY, MAX_TAGS,
)
from taskboard.core.repository_protocols import (
    TaskFilter, StoreValidationFailed, UniqueConstraintViolation,
)
from taskboard.models.task import Task as TaskModel, utcnow

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    "task_name": TaskModel.task_name,
    "priority": TaskModel.priority,
    "created_at": TaskModel.created_at,
    "updated_at": TaskModel.updated_at,
}


def validate_document(doc: dict) -> dict[str, str]:
    """Store-level field rules. Returns {wire_field: message} for each failure."""
    errors: dict[str, str] = {}
    task_name = doc.get("task_name")
    description = doc.get("description")
    priority = doc.get("priority")
    tags = doc.get("tags")

    if not task_name:
        errors["taskName"] = "Path `taskName` is required."

    if not description:
        errors["description"] = "Path `description` is required."
    elif len(description) < MIN_DESCRIPTION_LENGTH:
        errors["description"] = (
            f"Path `description` (`{description}`) is shorter than the "
            f"minimum allowed length ({MIN_DESCRIPTION_LENGTH})."
        )
    elif description == task_name:
        errors["description"] = "Description can't be same as taskName"

    if priority is None:
        errors["priority"] = "Path `priority` is required."
    elif priority < MIN_PRIORITY:
        errors["priority"] = (
            f"Path `priority` ({priority}) is less than minimum allowed "
            f"value ({MIN_PRIORITY})."
        )
    elif priority > MAX_PRIORITY:
        errors["priority"] = (
            f"Path `priority` ({priority}) is more than maximum allowed "
            f"value ({MAX_PRIORITY})."
        )

    if tags is not None and len(tags) > MAX_TAGS:
        errors["tags"] = f"Tags cannot exceed {MAX_TAGS} items"

    if not doc.get("user_id"):
        errors["userId"] = "Path `userId` is required."

    return errors


def _parse_task_id(task_id: str | None) -> uuid.UUID | None:
    if not task_id:
        return None
    try:
        return uuid.UUID(str(task_id))
    except ValueError:
        return None


def _to_record(task: TaskModel) -> dict:
    record = {name: getattr(task, name) for name in TASK_FIELDS}
    record["id"] = str(task.id)
    record["tags"] = list(task.tags or [])
    return record


def _is_unique_violation(exc: IntegrityError) -> bool:
    if getattr(exc.orig, "sqlstate", None) == "23505":
        return True
    text = str(exc.orig).lower()
    return "unique" in text or "duplicate key" in text


class SqlTaskRepository:
    """Task persistence over SQLAlchemy async — implements TaskRepository."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_one(self, criteria: TaskFilter) -> dict | None:
        result = await self.db.execute(_build_query(criteria).limit(1))
        task = result.scalars().first()
        return _to_record(task) if task else None

    async def find_many(
        self, criteria: TaskFilter, sort: SortSpec,
    ) -> list[dict]:
        query = _build_query(criteria)
        for field, direction in sort:
            column = _SORT_COLUMNS[field]
            query = query.order_by(
                column.desc() if direction == SortDirection.DESC else column.asc(),
            )
        result = await self.db.execute(query)
        return [_to_record(t) for t in result.scalars().all()]

    async def find_by_id(self, task_id: str) -> dict | None:
        task = await self._get(task_id)
        return _to_record(task) if task else None

    async def insert(self, record: dict) -> dict:
        errors = validate_document(record)
        if errors:
            raise StoreValidationFailed(errors)
        task = TaskModel(**record)
        self.db.add(task)
        await self._commit()
        await self.db.refresh(task)
        return _to_record(task)

    async def update_by_id(self, task_id: str, changes: dict) -> dict | None:
        task = await self._get(task_id)
        if task is None:
            return None
        errors = validate_document({**_to_record(task), **changes})
        if errors:
            raise StoreValidationFailed(errors)
        for name, value in changes.items():
            setattr(task, name, value)
        task.updated_at = utcnow()
        await self._commit()
        await self.db.refresh(task)
        return _to_record(task)

    async def _get(self, task_id: str) -> TaskModel | None:
        parsed = _parse_task_id(task_id)
        if parsed is None:
            return None
        return await self.db.get(TaskModel, parsed)

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if _is_unique_violation(e):
                logger.warning(f"Unique constraint rejected task write: {e.orig}")
                raise UniqueConstraintViolation(str(e.orig)) from e
            raise


def _build_query(criteria: TaskFilter):
    query = select(TaskModel)
    if criteria.user_id is not None:
        query = query.where(TaskModel.user_id == criteria.user_id)
    if criteria.task_name is not None:
        query = query.where(TaskModel.task_name == criteria.task_name)
    if criteria.is_done is not None:
        query = query.where(TaskModel.is_done == criteria.is_done)
    if criteria.exclude_id is not None:
        excluded = _parse_task_id(criteria.exclude_id)
        if excluded is not None:
            query = query.where(TaskModel.id != excluded)
    return query
