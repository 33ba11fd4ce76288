from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from contentflow.adapters.clock import SystemClock
from contentflow.adapters.filestore import FileSystemStore
from contentflow.adapters.identity import StaticIdentity
from contentflow.adapters.notifier import LoggingNotifier
from contentflow.adapters.sqlite_store import SQLiteContentStore
from contentflow.components.formats import FormatValidator, create_format_validator
from contentflow.components.workflow import (
    ClockPort,
    ContentWorkflow,
    IdentityPort,
    NotifierPort,
    create_workflow,
)
from contentflow.domain.entities import User
from contentflow.rules.loader import load_rules
from contentflow.rules.models import Rules


@dataclass
class WorkflowContext:
    workflow: ContentWorkflow
    store: SQLiteContentStore
    files: FileSystemStore
    validator: FormatValidator
    notifier: NotifierPort
    identity: IdentityPort
    rules: Rules

    @classmethod
    def create(
        cls,
        db_path: str,
        fs_path: str,
        user: User | None = None,
        rules: Rules | None = None,
        rules_path: Path | str | None = None,
        notifier: NotifierPort | None = None,
        identity: IdentityPort | None = None,
        clock: ClockPort | None = None,
    ) -> WorkflowContext:
        """
        Wire adapters, rules and the workflow.

        Rules come from the argument if given, otherwise from the rules file
        (explicit path, CONTENTFLOW_RULES_PATH, then the project root).
        """
        if rules is None:
            rules = load_rules(rules_path)

        # Adapters
        store = SQLiteContentStore(db_path)
        store.ensure_schema()
        files = FileSystemStore(fs_path)
        validator = create_format_validator(rules.formats, files)
        notifier = notifier or LoggingNotifier()
        identity = identity or StaticIdentity(user)

        workflow = create_workflow(
            store=store,
            validator=validator,
            notifier=notifier,
            identity=identity,
            role_grants=rules.roles,
            clock=clock or SystemClock(),
            labels=rules.notifications,
            max_workers=rules.batch.max_workers,
        )

        return cls(
            workflow=workflow,
            store=store,
            files=files,
            validator=validator,
            notifier=notifier,
            identity=identity,
            rules=rules,
        )
