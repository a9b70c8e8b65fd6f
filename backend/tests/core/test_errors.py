"""Error Hierarchy — verifies variants share one base type and map to HTTP statuses."""

import pytest

from taskboard.core.errors import (
    TaskBoardError, TaskValidationError, UnauthorizedTaskAccessError,
    ResourceNotFoundError, DuplicateTaskError, UnknownTaskError,
    ErrorCategory, ErrorContext,
)


@pytest.mark.parametrize("error,status,category", [
    (TaskValidationError("bad"), 400, ErrorCategory.VALIDATION),
    (UnauthorizedTaskAccessError(), 403, ErrorCategory.AUTHORIZATION),
    (ResourceNotFoundError("Task"), 404, ErrorCategory.RESOURCE_NOT_FOUND),
    (DuplicateTaskError(), 409, ErrorCategory.CONFLICT),
    (UnknownTaskError("Failed to create task: x"), 500, ErrorCategory.INTERNAL),
])
def test_variants_share_base_and_status(error, status, category):
    assert isinstance(error, TaskBoardError)
    assert error.http_status == status
    assert error.category == category


def test_not_found_message_names_resource():
    assert ResourceNotFoundError("User").message == "User not found"


def test_to_response_envelope():
    ctx = ErrorContext(task_id="t1", user_id="u1", operation="update_task")
    body = DuplicateTaskError(context=ctx).to_response()["error"]
    assert body["code"] == "DUPLICATE_TASK"
    assert body["message"] == "Task with this name already exists for this user"
    assert body["category"] == "conflict"
    assert body["context"] == {
        "task_id": "t1", "user_id": "u1", "operation": "update_task",
    }
