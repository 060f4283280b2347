"""
Exception hierarchy for the FlowShare diagram service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class FlowShareError(Exception):
    """Base exception for all FlowShare application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(FlowShareError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class NotFoundError(FlowShareError):
    """Raised when a diagram, user or node cannot be found."""

    def __init__(
        self,
        message: str,
        resource: str | None = None,
        resource_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            message: Error message
            resource: Kind of resource that is missing (diagram, user, node, access)
            resource_id: Identifier that was looked up
            details: Additional context
        """
        details = details or {}
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message, details)


class DiagramNotFoundError(NotFoundError):
    """Raised when a diagram does not exist in the document store."""

    def __init__(self, diagram_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize diagram not found error.

        Args:
            diagram_id: ID of the missing diagram
            details: Additional context
        """
        super().__init__(
            f"Diagram not found: {diagram_id}",
            resource="diagram",
            resource_id=diagram_id,
            details=details,
        )


class UserNotFoundError(NotFoundError):
    """Raised when a share target or account cannot be resolved."""

    def __init__(
        self,
        message: str = "User not found with that email",
        email: str | None = None,
        user_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize user not found error.

        Args:
            message: Error message
            email: Email that was looked up
            user_id: User ID that was looked up
            details: Additional context
        """
        details = details or {}
        if email:
            details["email"] = email
        super().__init__(message, resource="user", resource_id=user_id, details=details)


class NoAccessError(FlowShareError):
    """Raised when an authenticated user is neither owner nor listed in the access map."""

    def __init__(
        self,
        diagram_id: str,
        user_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize no access error.

        Args:
            diagram_id: Diagram the user tried to open
            user_id: User without a role on the diagram
            details: Additional context
        """
        details = details or {}
        details.update({"diagram_id": diagram_id, "user_id": user_id})
        super().__init__("You do not have access to this diagram", details)


class PermissionDeniedError(FlowShareError):
    """Raised when a caller without the editor role attempts a mutation."""

    def __init__(
        self,
        action: str,
        role: str | None = None,
        diagram_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize permission denied error.

        Args:
            action: Operation that was refused (save, share, add_node, ...)
            role: Role the caller holds, if any
            diagram_id: Diagram the operation targeted
            details: Additional context
        """
        details = details or {}
        details["action"] = action
        details["role"] = role
        if diagram_id:
            details["diagram_id"] = diagram_id
        super().__init__(f"Permission denied: cannot {action}", details)


class StorageError(FlowShareError):
    """Raised when the underlying document store fails. The cause is preserved."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize storage error.

        Args:
            message: Error message
            operation: Store operation that failed (create, get, query, update, delete)
            cause: Original exception raised by the store
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        if cause is not None:
            details["cause"] = f"{type(cause).__name__}: {cause}"
        self.operation = operation
        self.cause = cause
        super().__init__(message, details)
