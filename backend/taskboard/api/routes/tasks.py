"""Task Routes — thin HTTP binding for the four task operations.

Invariants:
    - Routes never contain business logic (delegate to services/)
    - Services raise TaskBoardError only; the global handler turns it into a response
    - A fresh repository + service per request: no state shared between invocations

Design Decisions:
    - userId query param defaults to "" so a missing id reaches the service's own
      "userId is required" check instead of a generic 400
    - Update identifies the task by path, the caller by body (userId)
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.infrastructure.database import get_db
from taskboard.infrastructure.task_repository import SqlTaskRepository
from taskboard.schemas.task import TaskCreate, TaskUpdate, TaskResponse
from taskboard.services.task_mutations import TaskMutationService
from taskboard.services.task_queries import TaskQueryService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


def get_task_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlTaskRepository:
    return SqlTaskRepository(db)


def get_mutation_service(
    tasks: SqlTaskRepository = Depends(get_task_repository),
) -> TaskMutationService:
    return TaskMutationService(tasks)


def get_query_service(
    tasks: SqlTaskRepository = Depends(get_task_repository),
) -> TaskQueryService:
    return TaskQueryService(tasks)


@router.post(
    "", response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    body: TaskCreate,
    service: TaskMutationService = Depends(get_mutation_service),
):
    """Create a task for body.userId."""
    record = await service.create_task(body)
    return TaskResponse.model_validate(record)


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    body: TaskUpdate,
    service: TaskMutationService = Depends(get_mutation_service),
):
    """Apply a partial update to a task owned by body.userId."""
    record = await service.update_task(task_id, body)
    return TaskResponse.model_validate(record)


@router.get("/active", response_model=list[TaskResponse])
async def list_active_tasks(
    user_id: str = Query("", alias="userId"),
    service: TaskQueryService = Depends(get_query_service),
):
    """Unfinished tasks, highest priority first, newest first within a priority."""
    records = await service.list_active_tasks(user_id)
    return [TaskResponse.model_validate(r) for r in records]


@router.get("/finished", response_model=list[TaskResponse])
async def list_finished_tasks(
    user_id: str = Query("", alias="userId"),
    service: TaskQueryService = Depends(get_query_service),
):
    """Finished tasks, most recently updated first."""
    records = await service.list_finished_tasks(user_id)
    return [TaskResponse.model_validate(r) for r in records]
