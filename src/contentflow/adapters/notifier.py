"""
Logging notifier.

Writes each notification to the log instead of delivering it anywhere and
keeps a record in memory so callers and tests can inspect what was sent.

Key behaviors:
- Logs label and title at a configurable level
- Stores notifications in memory for assertions
- Never raises; delivery cannot fail
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SentNotification:
    """Record of a logged notification."""

    id: str
    label: str
    title: str
    logged_at: datetime


@dataclass
class LoggingNotifier:
    """Notifier that logs instead of delivering. Implements NotifierPort."""

    sent: list[SentNotification] = field(default_factory=list)
    log_level: int = logging.INFO

    def notify(self, label: str, title: str) -> None:
        record = SentNotification(
            id=f"note-{uuid4().hex[:12]}",
            label=label,
            title=title,
            logged_at=datetime.now(UTC),
        )
        self.sent.append(record)
        logger.log(self.log_level, "NOTIFY: %s, Title=%s, ID=%s", label, title, record.id)

    # --- Test Helper Methods ---

    def get_last(self) -> SentNotification | None:
        return self.sent[-1] if self.sent else None

    def with_label(self, label: str) -> list[SentNotification]:
        return [n for n in self.sent if n.label == label]

    def clear(self) -> None:
        self.sent.clear()

    @property
    def count(self) -> int:
        return len(self.sent)
