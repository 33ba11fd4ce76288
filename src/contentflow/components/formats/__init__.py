"""Formats component - content file format validation."""

from contentflow.components.formats.component import (
    SIGNATURES,
    FormatValidator,
    create_format_validator,
    matches_signature,
    resolve_mime_type,
    run_validate,
)
from contentflow.components.formats.models import (
    FormatPolicy,
    FormatViolation,
    ValidateFormatInput,
    ValidateFormatOutput,
)
from contentflow.components.formats.ports import FileStorePort

__all__ = [
    # Entry point
    "run_validate",
    "create_format_validator",
    # Validator
    "FormatValidator",
    "resolve_mime_type",
    "matches_signature",
    "SIGNATURES",
    # Models
    "FormatPolicy",
    "FormatViolation",
    "ValidateFormatInput",
    "ValidateFormatOutput",
    # Ports
    "FileStorePort",
]
