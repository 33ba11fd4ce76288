"""Workflow component models - frozen dataclass inputs and outputs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from contentflow.domain.entities import Content

WorkflowAction = Literal["publish", "archive"]


@dataclass(frozen=True)
class WorkflowValidationError:
    """Error details for a failed workflow operation."""

    code: str
    message: str
    field: str


@dataclass(frozen=True)
class PublishInput:
    """Input for publishing one content item."""

    content_id: str


@dataclass(frozen=True)
class ArchiveInput:
    """Input for archiving one content item."""

    content_id: str


@dataclass(frozen=True)
class WorkflowOutput:
    """Output for a single publish or archive operation."""

    content_id: str
    content: Content | None
    errors: list[WorkflowValidationError]
    success: bool
    notified: bool = False


@dataclass(frozen=True)
class BatchInput:
    """Input for running one action over many content items."""

    action: WorkflowAction
    content_ids: list[str]
    max_workers: int | None = None  # None = configured default


@dataclass(frozen=True)
class BatchOutput:
    """Output for a batch run, one result per distinct content id, in input order."""

    results: list[WorkflowOutput] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return len(self.results) - self.succeeded

    @property
    def success(self) -> bool:
        return self.failed == 0
