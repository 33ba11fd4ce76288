"""Formats component models - frozen dataclass inputs and outputs."""

from __future__ import annotations

from dataclasses import dataclass, field

from contentflow.domain.entities import FileRef
from contentflow.rules.models import FormatRules


@dataclass(frozen=True)
class FormatViolation:
    """Why a file reference failed format validation."""

    code: str
    message: str
    field: str = "file"


@dataclass(frozen=True)
class FormatPolicy:
    """Accepted formats and limits for content files."""

    allowed_mime_types: frozenset[str]
    max_bytes: int | None = None
    sniff_signatures: bool = True

    @classmethod
    def from_rules(cls, rules: FormatRules) -> FormatPolicy:
        return cls(
            allowed_mime_types=frozenset(rules.allowed_mime_types),
            max_bytes=rules.max_bytes,
            sniff_signatures=rules.sniff_signatures,
        )


@dataclass(frozen=True)
class ValidateFormatInput:
    """Input for validating a single file reference."""

    file: FileRef


@dataclass(frozen=True)
class ValidateFormatOutput:
    """Output for validating a single file reference."""

    mime_type: str | None
    errors: list[FormatViolation] = field(default_factory=list)
    success: bool = True
