"""
Workflow error taxonomy.

Every failure the workflow can surface is a WorkflowError subclass with a
stable ``code``. AccessDenied, NotFound, InvalidFormat, InvalidTransition and
StorageError abort the current invocation. NotificationError is raised by
notifier adapters only; the workflow logs it and keeps the committed state.
"""

from __future__ import annotations

from collections.abc import Sequence


class WorkflowError(Exception):
    """Base exception for content workflow failures."""

    code = "WORKFLOW_ERROR"


class AccessDenied(WorkflowError):
    """The acting user does not hold the required capability."""

    code = "ACCESS_DENIED"

    def __init__(self, capability: str, user_id: str | None = None) -> None:
        self.capability = capability
        self.user_id = user_id
        super().__init__(f"User {user_id!r} lacks capability {capability}")


class NotFound(WorkflowError):
    """No content exists for the given identifier."""

    code = "NOT_FOUND"

    def __init__(self, content_id: str) -> None:
        self.content_id = content_id
        super().__init__(f"Content not found: {content_id}")


class InvalidFormat(WorkflowError):
    """The content's file failed format validation."""

    code = "INVALID_FORMAT"

    def __init__(self, content_id: str, violations: Sequence[str] = ()) -> None:
        self.content_id = content_id
        self.violations = list(violations)
        detail = f": {'; '.join(self.violations)}" if self.violations else ""
        super().__init__(f"Content {content_id} has an invalid file format{detail}")


class InvalidTransition(WorkflowError):
    """The requested state change is not allowed from the current state."""

    code = "INVALID_TRANSITION"

    def __init__(self, content_id: str, message: str) -> None:
        self.content_id = content_id
        super().__init__(message)


class StorageError(WorkflowError):
    """Persisting or reading content failed."""

    code = "STORAGE_ERROR"


class NotificationError(WorkflowError):
    """Delivering a notification failed."""

    code = "NOTIFICATION_ERROR"

    def __init__(self, label: str, error: str) -> None:
        self.label = label
        self.error = error
        super().__init__(f"Failed to deliver notification {label!r}: {error}")
