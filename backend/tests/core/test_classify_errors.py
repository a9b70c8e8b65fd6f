"""Failure Classification — tests for mapping raw failures onto error variants.

Tests cover:
    - describe_failure for exceptions, strings, mappings, objects, and None
    - classified errors pass through unchanged
    - port signals map to validation / conflict variants
    - mutation fallback embeds the description; query fallback never does
"""

from taskboard.core.classify_errors import (
    describe_failure, classify_mutation_failure, classify_query_failure,
)
from taskboard.core.domain_types import TaskListing
from taskboard.core.errors import (
    ResourceNotFoundError, TaskValidationError, DuplicateTaskError,
    UnknownTaskError,
)
from taskboard.core.repository_protocols import (
    StoreValidationFailed, UniqueConstraintViolation,
)


class _WithMessage:
    message = "custom failure"


# ─── describe_failure ────────────────────────────────────────────

def test_describe_none_is_literal_null():
    assert describe_failure(None) == "null"


def test_describe_exception_uses_its_text():
    assert describe_failure(RuntimeError("disk full")) == "disk full"


def test_describe_string_is_itself():
    assert describe_failure("plain string failure") == "plain string failure"


def test_describe_mapping_prefers_message_key():
    assert describe_failure({"message": "from mapping"}) == "from mapping"


def test_describe_mapping_without_message_is_stringified():
    assert describe_failure({"code": 1}) == "{'code': 1}"


def test_describe_object_prefers_message_attribute():
    assert describe_failure(_WithMessage()) == "custom failure"


# ─── classify_mutation_failure ───────────────────────────────────

def test_classified_errors_pass_through():
    original = ResourceNotFoundError("Task")
    assert classify_mutation_failure(original, "update") is original


def test_store_validation_messages_are_joined():
    error = classify_mutation_failure(
        StoreValidationFailed({"a": "Field1 error", "b": "Field2 error"}), "create",
    )
    assert isinstance(error, TaskValidationError)
    assert error.message == "Validation Error: Field1 error, Field2 error"


def test_unique_violation_is_duplicate():
    error = classify_mutation_failure(UniqueConstraintViolation(), "update")
    assert isinstance(error, DuplicateTaskError)
    assert error.message == "Task with this name already exists for this user"


def test_unknown_mutation_failure_includes_description():
    error = classify_mutation_failure(ValueError("boom"), "create")
    assert isinstance(error, UnknownTaskError)
    assert error.message == "Failed to create task: boom"
    assert error.raw_description == "boom"


def test_unknown_null_failure():
    error = classify_mutation_failure(None, "update")
    assert error.message == "Failed to update task: null"


# ─── classify_query_failure ──────────────────────────────────────

def test_query_failure_uses_fixed_text():
    active = classify_query_failure(RuntimeError("secret"), TaskListing.ACTIVE)
    finished = classify_query_failure("secret", TaskListing.FINISHED)
    assert active.message == "Failed to retrieve active tasks: Unknown error"
    assert finished.message == "Failed to retrieve completed tasks: Unknown error"
    assert active.raw_description == "secret"


def test_query_classified_errors_pass_through():
    original = ResourceNotFoundError("User")
    assert classify_query_failure(original, TaskListing.ACTIVE) is original
