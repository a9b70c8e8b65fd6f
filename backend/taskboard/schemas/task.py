"""Task Schemas — Pydantic request/response shapes for the task endpoints.

Invariants:
    - Wire names are camelCase (taskName, userId, isDone...); Python names are snake_case
    - Schemas check SHAPE only (types, presence); business rules live in core/validate_task.py
      so clients always get the same rule messages regardless of transport
    - TaskUpdate never carries id; user_id identifies the caller, it is never written

Design Decisions:
    - alias_generator=to_camel + populate_by_name: tests and services can use field names
    - Update fields default to None; exclude_unset + exclude_none yield the partial change set
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreate(_CamelModel):
    """Full candidate record for a new task."""
    task_name: str
    description: str
    priority: int
    tags: list[str] | None = None
    user_id: str


class TaskUpdate(_CamelModel):
    """Caller identity plus any subset of the mutable fields."""
    user_id: str
    task_name: str | None = None
    description: str | None = None
    priority: int | None = None
    tags: list[str] | None = None
    is_done: bool | None = None

    def changes(self) -> dict:
        """Only the fields the caller actually sent (explicit nulls count as absent)."""
        return self.model_dump(
            exclude_unset=True, exclude_none=True, exclude={"user_id"},
        )


class TaskResponse(_CamelModel):
    """Public-facing task record."""
    id: str
    task_name: str
    description: str
    priority: int
    tags: list[str]
    is_done: bool
    user_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
