"""Task Queries — per-user listings of active and finished tasks.

Invariants:
    - userId must be non-empty
    - A user "exists" iff at least one task of theirs is stored (no user registry);
      a user with zero tasks gets "User not found", not an empty list
    - Active: is_done=False, priority desc then created_at desc (newest first on ties)
    - Finished: is_done=True, updated_at desc (most recently completed first)
    - Unknown failures surface as the fixed "Unknown error" text

Design Decisions:
    - Both listings share one flow; _LISTINGS holds the only difference (filter + sort)
"""

import logging

from taskboard.core.classify_errors import classify_query_failure
from taskboard.core.domain_types import (
    SortDirection, SortSpec, TaskListing, UserId,
)
from taskboard.core.errors import (
    TaskBoardError, TaskValidationError, ResourceNotFoundError,
)
from taskboard.core.repository_protocols import TaskFilter, TaskRepository

logger = logging.getLogger(__name__)


_LISTINGS: dict[TaskListing, tuple[bool, SortSpec]] = {
    TaskListing.ACTIVE: (
        False,
        [("priority", SortDirection.DESC), ("created_at", SortDirection.DESC)],
    ),
    TaskListing.FINISHED: (
        True,
        [("updated_at", SortDirection.DESC)],
    ),
}


class TaskQueryService:
    """Read-only listings over an injected TaskRepository."""

    def __init__(self, tasks: TaskRepository):
        self.tasks = tasks

    async def list_active_tasks(self, user_id: UserId) -> list[dict]:
        return await self._list(user_id, TaskListing.ACTIVE)

    async def list_finished_tasks(self, user_id: UserId) -> list[dict]:
        return await self._list(user_id, TaskListing.FINISHED)

    async def _list(self, user_id: UserId, listing: TaskListing) -> list[dict]:
        try:
            if not user_id:
                raise TaskValidationError("userId is required")

            if not await self.tasks.find_one(TaskFilter(user_id=user_id)):
                raise ResourceNotFoundError("User")

            is_done, sort = _LISTINGS[listing]
            return await self.tasks.find_many(
                TaskFilter(user_id=user_id, is_done=is_done), sort,
            )
        except TaskBoardError as e:
            _stamp_context(e, user_id, listing)
            logger.warning(
                f"Listing {listing.value} tasks rejected: {e.message}",
                extra={"user_id": user_id, "error_code": e.code},
            )
            raise
        except Exception as e:
            logger.error(
                f"Listing {listing.value} tasks failed: {e}",
                extra={"user_id": user_id}, exc_info=True,
            )
            error = classify_query_failure(e, listing)
            _stamp_context(error, user_id, listing)
            raise error from e


def _stamp_context(
    error: TaskBoardError, user_id: UserId, listing: TaskListing,
) -> None:
    error.context.user_id = error.context.user_id or user_id or None
    error.context.operation = f"list_{listing.value}_tasks"
