"""Boundary Protocols — the persistence contract consumed by the task services.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Records cross the boundary as plain dicts keyed by TASK_FIELDS
    - A breach of the (task_name, user_id) unique constraint surfaces as
      UniqueConstraintViolation; a field-level document failure as StoreValidationFailed
    - insert/update_by_id are single writes — no multi-step transaction spans them

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; the services await each call in turn
    - TaskFilter is a dataclass of equality predicates plus one exclusion (exclude_id)
"""

from dataclasses import dataclass
from typing import Protocol

from taskboard.core.domain_types import SortSpec, TaskId


@dataclass(frozen=True)
class TaskFilter:
    """Equality predicates for a lookup; None means "don't filter on this field"."""
    user_id: str | None = None
    task_name: str | None = None
    is_done: bool | None = None
    exclude_id: str | None = None


class UniqueConstraintViolation(Exception):
    """Store refused a write because (task_name, user_id) is already taken."""


class StoreValidationFailed(Exception):
    """Store refused a write because the resulting document broke its field rules."""

    def __init__(self, errors: dict[str, str]):
        super().__init__(", ".join(errors.values()))
        self.errors = errors


class TaskRepository(Protocol):
    """Contract for task persistence — implemented by shell."""
    async def find_one(self, criteria: TaskFilter) -> dict | None: ...
    async def find_many(
        self, criteria: TaskFilter, sort: SortSpec,
    ) -> list[dict]: ...
    async def find_by_id(self, task_id: TaskId) -> dict | None: ...
    async def insert(self, record: dict) -> dict: ...
    async def update_by_id(self, task_id: TaskId, changes: dict) -> dict | None: ...
