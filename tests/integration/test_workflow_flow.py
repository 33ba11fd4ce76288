"""
End-to-end workflow tests.

Real adapters throughout: SQLite store, filesystem store with signature
sniffing, logging notifier, rules loaded from the project rules file.
"""

from datetime import UTC, datetime
from pathlib import Path

import pytest

from contentflow.adapters.clock import FixedClock
from contentflow.adapters.notifier import LoggingNotifier
from contentflow.components.workflow import BatchInput, PublishInput
from contentflow.context import WorkflowContext
from contentflow.domain.entities import Content, FileRef, User
from contentflow.domain.errors import AccessDenied, InvalidFormat, NotFound, NotificationError
from contentflow.rules.loader import RULES_PATH_ENV

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class SwitchableIdentity:
    def __init__(self, user: User | None) -> None:
        self.user = user

    def current_user(self) -> User | None:
        return self.user


class RejectingNotifier:
    def notify(self, label: str, title: str) -> None:
        raise NotificationError(label, "webhook returned 503")


@pytest.fixture
def identity(editor: User) -> SwitchableIdentity:
    return SwitchableIdentity(editor)


@pytest.fixture
def ctx(tmp_path: Path, rules, identity: SwitchableIdentity) -> WorkflowContext:
    return WorkflowContext.create(
        db_path=str(tmp_path / "content.db"),
        fs_path=str(tmp_path / "files"),
        rules=rules,
        identity=identity,
    )


def add_content(ctx: WorkflowContext, content_id: str, name: str, data: bytes) -> Content:
    path = ctx.files.save(name, data)
    item = Content(id=content_id, title=f"Title {content_id}", file=FileRef(path=path))
    ctx.store.save(item)
    return item


def test_publish_flow(ctx: WorkflowContext):
    add_content(ctx, "C1", "img/c1.png", PNG_BYTES)

    ctx.workflow.publish("C1")

    stored = ctx.store.load("C1")
    assert stored.published is True
    assert stored.published_at is not None
    assert isinstance(ctx.notifier, LoggingNotifier)
    assert [(n.label, n.title) for n in ctx.notifier.sent] == [("Content published", "Title C1")]


def test_publish_denied_flow(ctx: WorkflowContext, identity: SwitchableIdentity):
    add_content(ctx, "C1", "img/c1.png", PNG_BYTES)
    identity.user = User(id="u-empty")

    with pytest.raises(AccessDenied):
        ctx.workflow.publish("C1")

    assert ctx.store.load("C1").published is False


def test_publish_rejects_disguised_file(ctx: WorkflowContext):
    add_content(ctx, "C1", "img/fake.png", b"MZ\x90\x00 this is an executable")

    with pytest.raises(InvalidFormat):
        ctx.workflow.publish("C1")

    assert ctx.store.load("C1").published is False
    assert isinstance(ctx.notifier, LoggingNotifier)
    assert ctx.notifier.count == 0


def test_publish_rejects_missing_file(ctx: WorkflowContext):
    ctx.store.save(Content(id="C1", title="Ghost", file=FileRef(path="img/ghost.png")))

    with pytest.raises(InvalidFormat):
        ctx.workflow.publish("C1")


def test_publish_rejects_path_outside_file_root(ctx: WorkflowContext):
    ctx.store.save(Content(id="C1", title="Escape", file=FileRef(path="../../etc/hosts.txt")))

    with pytest.raises(InvalidFormat):
        ctx.workflow.publish("C1")

    result = ctx.workflow.run_publish(PublishInput(content_id="C1"))
    assert [e.code for e in result.errors] == ["INVALID_FORMAT"]
    assert ctx.store.load("C1").published is False


def test_publish_unknown_id(ctx: WorkflowContext):
    with pytest.raises(NotFound):
        ctx.workflow.publish("missing")


def test_archive_flow(tmp_path: Path, rules, curator: User):
    ctx = WorkflowContext.create(
        db_path=str(tmp_path / "content.db"),
        fs_path=str(tmp_path / "files"),
        rules=rules,
        user=curator,
    )
    # archive does not look at the file at all
    ctx.store.save(Content(id="C1", title="Ghost", file=FileRef(path="img/ghost.png")))

    ctx.workflow.archive("C1")

    assert ctx.store.load("C1").status == "archived"


def test_notification_failure_flow(tmp_path: Path, rules, editor: User):
    ctx = WorkflowContext.create(
        db_path=str(tmp_path / "content.db"),
        fs_path=str(tmp_path / "files"),
        rules=rules,
        user=editor,
        notifier=RejectingNotifier(),
    )
    add_content(ctx, "C1", "img/c1.png", PNG_BYTES)

    result = ctx.workflow.publish("C1")

    assert result.published is True
    assert ctx.store.load("C1").published is True


def test_batch_flow(ctx: WorkflowContext):
    for i in range(6):
        add_content(ctx, f"C{i}", f"img/{i}.png", PNG_BYTES)
    add_content(ctx, "BAD", "docs/bad.pdf", b"not a pdf")

    ids = [f"C{i}" for i in range(6)] + ["BAD"]
    result = ctx.workflow.run_batch(BatchInput(action="publish", content_ids=ids))

    assert result.succeeded == 6
    assert [r.content_id for r in result.results if not r.success] == ["BAD"]
    assert all(ctx.store.load(f"C{i}").published for i in range(6))
    assert ctx.store.load("BAD").published is False


def test_context_loads_rules_from_env(tmp_path: Path, monkeypatch, rules_path: Path, editor):
    monkeypatch.setenv(RULES_PATH_ENV, str(rules_path))

    ctx = WorkflowContext.create(
        db_path=str(tmp_path / "content.db"),
        fs_path=str(tmp_path / "files"),
        user=editor,
        clock=FixedClock(datetime(2025, 1, 1, tzinfo=UTC)),
    )

    assert ctx.rules.batch.max_workers == 4
    assert ctx.validator.policy.max_bytes == 52428800

    add_content(ctx, "C1", "img/c1.png", PNG_BYTES)
    assert ctx.workflow.publish("C1").published_at == datetime(2025, 1, 1, tzinfo=UTC)
