"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TaskId and UserId are opaque strings — the core never parses them
    - All valid sort directions encoded as an Enum — no raw string matching
    - TASK_FIELDS is the single source for field names shared by core and shell

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TaskId = NewType("TaskId", str)
UserId = NewType("UserId", str)


# ─── Limits ──────────────────────────────────────────────────────

MIN_DESCRIPTION_LENGTH: int = 10
MIN_PRIORITY: int = 1
MAX_PRIORITY: int = 5
MAX_TAGS: int = 5


# ─── Field Sets ──────────────────────────────────────────────────

TASK_FIELDS: tuple[str, ...] = (
    "id", "task_name", "description", "priority", "tags",
    "is_done", "user_id", "created_at", "updated_at",
)

# id and user_id are fixed at creation; an update never touches them
UPDATABLE_FIELDS: frozenset[str] = frozenset(
    {"task_name", "description", "priority", "tags", "is_done"},
)


# ─── Enums ───────────────────────────────────────────────────────

class SortDirection(str, Enum):
    """Sort direction for a single key of a find_many sort spec."""
    ASC = "asc"
    DESC = "desc"


class TaskListing(str, Enum):
    """The two listings a user can request, keyed by completion state."""
    ACTIVE = "active"
    FINISHED = "finished"


SortSpec = list[tuple[str, SortDirection]]
