"""Workflow component port definitions - protocols for dependencies."""

from datetime import datetime
from typing import Protocol

from contentflow.domain.entities import Content, FileRef, User


class ContentStorePort(Protocol):
    """Protocol for content persistence."""

    def load(self, content_id: str) -> Content:
        """Return the content with this id. Raises NotFound."""
        ...

    def save(self, content: Content) -> Content:
        """Persist the content. Raises StorageError."""
        ...


class FormatCheckerPort(Protocol):
    """Protocol for file format validation."""

    def is_valid_format(self, file_ref: FileRef) -> bool:
        """Check whether the file satisfies the format policy."""
        ...


class NotifierPort(Protocol):
    """Protocol for completed-action notifications."""

    def notify(self, label: str, title: str) -> None:
        """Send a notification. Raises NotificationError."""
        ...


class IdentityPort(Protocol):
    """Protocol for resolving the acting user."""

    def current_user(self) -> User | None:
        """Return the acting user, or None when nobody is signed in."""
        ...


class ClockPort(Protocol):
    """Protocol for time operations."""

    def now(self) -> datetime:
        """Return current UTC time."""
        ...
