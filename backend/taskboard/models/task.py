"""Task ORM — persists a single user-owned task.

Invariants:
    - id is UUID primary key, assigned on insert and never rewritten
    - (task_name, user_id) is unique — the storage-level duplicate guard
    - created_at set on insert; updated_at set on insert and refreshed on every UPDATE
    - tags stored as a JSON array, insertion order preserved

Design Decisions:
    - JSON for tags: ≤ 5 short strings, never queried by element
    - Composite index (user_id, is_done): both listings filter on exactly these columns
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Text, Integer, Boolean, DateTime, JSON, Index, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from taskboard.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Task(Base):
    """Task entity — one to-do item owned by one user."""
    __tablename__ = "tasks"
    __table_args__ = (
        UniqueConstraint("task_name", "user_id", name="uq_tasks_task_name_user_id"),
        Index("ix_tasks_user_id_is_done", "user_id", "is_done"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    task_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    is_done: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    priority: Mapped[int] = mapped_column(Integer, nullable=False)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=utcnow, onupdate=utcnow,
    )
