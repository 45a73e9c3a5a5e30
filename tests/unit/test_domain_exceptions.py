"""Tests for domain exceptions (error_code, message, response body)."""

from taskboard.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConcurrentUpdateException,
    ResourceNotFoundException,
    TaskboardException,
    UserAlreadyExistsException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base TaskboardException uses class name as error_code when not provided."""
    exc = TaskboardException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "TaskboardException"
    assert exc.details == {}
    assert exc.to_dict() == {"message": "Something failed"}


def test_validation_exception_field_shortcut() -> None:
    exc = ValidationException("Assigned user does not exist", field="assignedToId")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.errors == [{"field": "assignedToId", "message": "Assigned user does not exist"}]
    assert exc.to_dict() == {
        "message": "Assigned user does not exist",
        "errors": [{"field": "assignedToId", "message": "Assigned user does not exist"}],
    }


def test_validation_exception_defaults_to_generic_message() -> None:
    exc = ValidationException(errors=[{"field": "title", "message": "too short"}])
    assert exc.message == "Validation failed"
    assert exc.errors[0]["field"] == "title"


def test_authentication_exception() -> None:
    exc = AuthenticationException()
    assert exc.message == "Unauthorized"
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_authorization_exception_carries_context() -> None:
    exc = AuthorizationException("Only the task creator can delete this task", "task", "delete")
    assert exc.error_code == "AUTHORIZATION_ERROR"
    assert exc.details == {"resource": "task", "action": "delete"}
    assert exc.to_dict() == {"message": "Only the task creator can delete this task"}


def test_resource_not_found_message() -> None:
    exc = ResourceNotFoundException("task", 7)
    assert exc.message == "Task not found"
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details["resource_id"] == 7


def test_user_already_exists_points_at_username() -> None:
    exc = UserAlreadyExistsException()
    assert exc.to_dict()["errors"] == [
        {"field": "username", "message": "Username already exists"}
    ]


def test_concurrent_update_exception() -> None:
    exc = ConcurrentUpdateException(3)
    assert exc.error_code == "CONCURRENT_UPDATE"
    assert exc.details == {"task_id": 3}
    assert "errors" not in exc.to_dict()
