"""Workflow component - publish and archive pipelines for content."""

from contentflow.components.workflow.component import (
    DEFAULT_MAX_WORKERS,
    ContentWorkflow,
    create_workflow,
)
from contentflow.components.workflow.models import (
    ArchiveInput,
    BatchInput,
    BatchOutput,
    PublishInput,
    WorkflowAction,
    WorkflowOutput,
    WorkflowValidationError,
)
from contentflow.components.workflow.ports import (
    ClockPort,
    ContentStorePort,
    FormatCheckerPort,
    IdentityPort,
    NotifierPort,
)

__all__ = [
    # Component
    "ContentWorkflow",
    "create_workflow",
    "DEFAULT_MAX_WORKERS",
    # Models
    "PublishInput",
    "ArchiveInput",
    "BatchInput",
    "BatchOutput",
    "WorkflowAction",
    "WorkflowOutput",
    "WorkflowValidationError",
    # Ports
    "ContentStorePort",
    "FormatCheckerPort",
    "NotifierPort",
    "IdentityPort",
    "ClockPort",
]
