from datetime import datetime

from contentflow.domain.entities import Content
from contentflow.domain.errors import InvalidTransition


def can_publish(content: Content) -> bool:
    """Archived content stays archived; everything else may be published."""
    return content.status != "archived"


def ensure_can_publish(content: Content) -> None:
    if not can_publish(content):
        raise InvalidTransition(
            content.id, f"Cannot publish content {content.id} in status {content.status}"
        )


def apply_publish(content: Content, now: datetime) -> Content:
    """
    Return a NEW Content marked as published.
    Raises InvalidTransition if the content cannot be published.
    """
    ensure_can_publish(content)

    # published implies published_at not null; keep the first publication time
    published_at = (content.published_at if content.published else None) or now
    return content.model_copy(
        update={"published": True, "published_at": published_at, "updated_at": now}
    )


def apply_archive(content: Content, now: datetime) -> Content:
    """Return a NEW Content with status archived. The published flag is untouched."""
    if content.status == "archived":
        return content.model_copy()
    return content.model_copy(update={"status": "archived", "updated_at": now})
