"""Domain exceptions for the task board.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. The
presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class TaskboardException(Exception):
    """Base exception for all task board errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. resource_id, field errors).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the response body: ``{message}`` plus ``errors`` when present."""
        body: dict[str, Any] = {"message": self.message}
        errors = self.details.get("errors")
        if errors:
            body["errors"] = errors
        return body


class ValidationException(TaskboardException):
    """Raised when input validation fails. Carries per-field errors."""

    def __init__(
        self,
        message: str = "Validation failed",
        errors: list[dict[str, str]] | None = None,
        *,
        field: str | None = None,
    ) -> None:
        """Initialize with message and field errors.

        Args:
            message: Description of the validation failure.
            errors: List of ``{"field": ..., "message": ...}`` entries.
            field: Shortcut for a single failing field; ``message`` is reused.
        """
        errors = list(errors or [])
        if field:
            errors.append({"field": field, "message": message})
        super().__init__(message, "VALIDATION_ERROR", {"errors": errors})

    @property
    def errors(self) -> list[dict[str, str]]:
        return self.details["errors"]


class AuthenticationException(TaskboardException):
    """Raised when no authenticated identity is available for the request."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(TaskboardException):
    """Raised when the caller lacks the required relationship to a task."""

    def __init__(
        self,
        message: str = "Permission denied",
        resource: str | None = None,
        action: str | None = None,
    ) -> None:
        """Initialize with message and optional resource/action context.

        Args:
            message: Human-readable message.
            resource: Optional resource type (e.g. 'task').
            action: Optional attempted action (e.g. 'delete').
        """
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "AUTHORIZATION_ERROR", details)


class ResourceNotFoundException(TaskboardException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: int | str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'task', 'notification').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type.capitalize()} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class UserAlreadyExistsException(TaskboardException):
    """Raised when registering a username that is already taken."""

    def __init__(self) -> None:
        super().__init__(
            "Username already exists",
            "USER_ALREADY_EXISTS",
            {"errors": [{"field": "username", "message": "Username already exists"}]},
        )


class ConcurrentUpdateException(TaskboardException):
    """Raised when a compare-and-set write keeps losing to concurrent writers."""

    def __init__(self, task_id: int) -> None:
        super().__init__(
            "Task was modified concurrently; retry the request",
            "CONCURRENT_UPDATE",
            {"task_id": task_id},
        )
