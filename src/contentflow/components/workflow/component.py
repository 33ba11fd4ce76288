"""
Workflow component - publish and archive pipelines for content items.

Each operation is a short linear pipeline:
1. Permission check (PermissionChecker.require)
2. Load the content from the store
3. Transition guard, and for publish only a format check
4. Mutate a copy of the content
5. Save it (the single persistence point)
6. Notify, best effort

Invariants:
- I1: Nothing is loaded before the permission check passes
- I2: Nothing is saved when any step before the save fails
- I3: A failed notification never undoes a committed save
- I4: Batch items run independently; one failure never stops the others
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from contentflow.adapters.clock import SystemClock
from contentflow.domain.entities import ARCHIVE, PUBLISH, Content
from contentflow.domain.errors import (
    AccessDenied,
    InvalidFormat,
    InvalidTransition,
    NotFound,
    NotificationError,
    StorageError,
    WorkflowError,
)
from contentflow.domain.policy import PermissionChecker
from contentflow.domain.state import apply_archive, apply_publish, ensure_can_publish
from contentflow.rules.models import NotificationRules

from .models import (
    ArchiveInput,
    BatchInput,
    BatchOutput,
    PublishInput,
    WorkflowOutput,
    WorkflowValidationError,
)
from .ports import ClockPort, ContentStorePort, FormatCheckerPort, IdentityPort, NotifierPort

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4

# Which input field each error is attributed to
_ERROR_FIELDS: dict[type[WorkflowError], str] = {
    AccessDenied: "user",
    NotFound: "content_id",
    InvalidFormat: "file",
    InvalidTransition: "status",
    StorageError: "content_id",
}

Transition = Callable[[Content, datetime], Content]
WorkflowInput = PublishInput | ArchiveInput | BatchInput


class ContentWorkflow:
    """Orchestrates permission, load, validation, persistence and notification."""

    def __init__(
        self,
        store: ContentStorePort,
        validator: FormatCheckerPort,
        notifier: NotifierPort,
        identity: IdentityPort,
        permissions: PermissionChecker | None = None,
        clock: ClockPort | None = None,
        labels: NotificationRules | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self._store = store
        self._validator = validator
        self._notifier = notifier
        self._identity = identity
        self._permissions = permissions or PermissionChecker()
        self._clock = clock or SystemClock()
        self._labels = labels or NotificationRules()
        self._max_workers = max_workers

    # --- Operations ---

    def publish(self, content_id: str) -> Content:
        """
        Publish a content item.

        Raises AccessDenied, NotFound, InvalidTransition, InvalidFormat or
        StorageError. Notification failures are logged, not raised.
        """
        content, _ = self._publish(content_id)
        return content

    def archive(self, content_id: str) -> Content:
        """
        Archive a content item. No format check is made.

        Raises AccessDenied, NotFound or StorageError. Notification failures
        are logged, not raised.
        """
        content, _ = self._archive(content_id)
        return content

    def _publish(self, content_id: str) -> tuple[Content, bool]:
        self._authorize(PUBLISH)
        content = self._store.load(content_id)
        ensure_can_publish(content)
        if not self._validator.is_valid_format(content.file):
            logger.info("Rejected publish of %s: invalid format %s", content.id, content.file.path)
            raise InvalidFormat(content.id, [f"Unsupported file: {content.file.path}"])
        saved = self._commit(content, apply_publish)
        logger.info("Published content %s", saved.id)
        return saved, self._notify(self._labels.published_label, saved)

    def _archive(self, content_id: str) -> tuple[Content, bool]:
        self._authorize(ARCHIVE)
        content = self._store.load(content_id)
        saved = self._commit(content, apply_archive)
        logger.info("Archived content %s", saved.id)
        return saved, self._notify(self._labels.archived_label, saved)

    # --- Pipeline steps ---

    def _authorize(self, capability: str) -> None:
        self._permissions.require(capability, self._identity.current_user())

    def _commit(self, content: Content, transition: Transition) -> Content:
        """Apply the transition to a copy and save it. The caller's object is never mutated."""
        updated = transition(content, self._clock.now())
        return self._store.save(updated)

    def _notify(self, label: str, content: Content) -> bool:
        """Best-effort notification; the state change is already committed."""
        try:
            self._notifier.notify(label, content.title)
        except NotificationError as e:
            logger.warning("Notification for %s failed: %s", content.id, e)
            return False
        except Exception:
            logger.exception("Unexpected notifier failure for %s", content.id)
            return False
        return True

    # --- Component Entry Points ---

    def run(self, input_data: WorkflowInput) -> WorkflowOutput | BatchOutput:
        """Main dispatcher - routes to appropriate handler based on input type."""
        if isinstance(input_data, PublishInput):
            return self.run_publish(input_data)
        elif isinstance(input_data, ArchiveInput):
            return self.run_archive(input_data)
        elif isinstance(input_data, BatchInput):
            return self.run_batch(input_data)
        else:
            raise TypeError(f"Unknown input type: {type(input_data)}")

    def run_publish(self, input_data: PublishInput) -> WorkflowOutput:
        """Publish one item, reporting failures as errors instead of raising."""
        return self._run_single(input_data.content_id, self._publish)

    def run_archive(self, input_data: ArchiveInput) -> WorkflowOutput:
        """Archive one item, reporting failures as errors instead of raising."""
        return self._run_single(input_data.content_id, self._archive)

    def run_batch(self, input_data: BatchInput) -> BatchOutput:
        """
        Run publish or archive over many items with bounded concurrency.

        Duplicate ids are collapsed to their first occurrence so that no two
        workers touch the same item. Results keep input order.
        """
        if input_data.action == "publish":
            operation = self._publish
        elif input_data.action == "archive":
            operation = self._archive
        else:
            raise ValueError(f"Unknown batch action: {input_data.action}")

        content_ids = list(dict.fromkeys(input_data.content_ids))
        if not content_ids:
            return BatchOutput(results=[])

        max_workers = (
            self._max_workers if input_data.max_workers is None else input_data.max_workers
        )
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")

        logger.info(
            "Batch %s of %d items with %d workers",
            input_data.action,
            len(content_ids),
            max_workers,
        )
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = [
                pool.submit(self._run_single, content_id, operation)
                for content_id in content_ids
            ]
            results = [future.result() for future in futures]

        batch = BatchOutput(results=results)
        logger.info(
            "Batch %s done: %d ok, %d failed", input_data.action, batch.succeeded, batch.failed
        )
        return batch

    def _run_single(
        self,
        content_id: str,
        operation: Callable[[str], tuple[Content, bool]],
    ) -> WorkflowOutput:
        try:
            content, notified = operation(content_id)
        except WorkflowError as e:
            return WorkflowOutput(
                content_id=content_id,
                content=None,
                errors=[
                    WorkflowValidationError(
                        code=e.code,
                        message=str(e),
                        field=_ERROR_FIELDS.get(type(e), "content_id"),
                    )
                ],
                success=False,
            )
        except Exception as e:
            # Unexpected adapter failure; keep the batch going
            logger.exception("Unexpected failure for content %s", content_id)
            return WorkflowOutput(
                content_id=content_id,
                content=None,
                errors=[
                    WorkflowValidationError(
                        code="UNEXPECTED_ERROR",
                        message=str(e),
                        field="content_id",
                    )
                ],
                success=False,
            )
        return WorkflowOutput(
            content_id=content_id,
            content=content,
            errors=[],
            success=True,
            notified=notified,
        )


# --- Factory Function ---


def create_workflow(
    store: ContentStorePort,
    validator: FormatCheckerPort,
    notifier: NotifierPort,
    identity: IdentityPort,
    *,
    role_grants: dict[str, list[str]] | None = None,
    clock: ClockPort | None = None,
    labels: NotificationRules | None = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> ContentWorkflow:
    """
    Create a content workflow.

    Args:
        store: Content store port
        validator: Format checker used by publish
        notifier: Notifier for completed actions
        identity: Provider of the acting user
        role_grants: Role name -> capability names, from the rules file
        clock: Optional clock (defaults to SystemClock)
        labels: Optional notification labels
        max_workers: Default batch concurrency

    Returns:
        Configured ContentWorkflow
    """
    return ContentWorkflow(
        store=store,
        validator=validator,
        notifier=notifier,
        identity=identity,
        permissions=PermissionChecker(role_grants),
        clock=clock,
        labels=labels,
        max_workers=max_workers,
    )
