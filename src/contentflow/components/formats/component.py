"""
Formats component - decides whether a content file has an accepted format.

Checks run in order and stop at the first failing stage:
1. MIME type (declared, or guessed from the path suffix) is in the allowlist
2. Declared size is within max_bytes
3. File exists and is readable in the file store (when one is configured)
4. Leading bytes match the known signature for the MIME type

Validation is deterministic and never raises for a bad file; every reason
a file is rejected comes back as a FormatViolation.
"""

from __future__ import annotations

import logging
import mimetypes

from contentflow.domain.entities import FileRef
from contentflow.rules.models import FormatRules

from .models import FormatPolicy, FormatViolation, ValidateFormatInput, ValidateFormatOutput
from .ports import FileStorePort

logger = logging.getLogger(__name__)

# Bytes read from the start of a file for signature sniffing
HEADER_BYTES = 16

# MIME type -> alternatives; each alternative is a tuple of (offset, expected bytes)
SIGNATURES: dict[str, tuple[tuple[tuple[int, bytes], ...], ...]] = {
    "image/png": (((0, b"\x89PNG\r\n\x1a\n"),),),
    "image/jpeg": (((0, b"\xff\xd8\xff"),),),
    "image/gif": (((0, b"GIF87a"),), ((0, b"GIF89a"),)),
    "image/webp": (((0, b"RIFF"), (8, b"WEBP")),),
    "application/pdf": (((0, b"%PDF-"),),),
    "video/mp4": (((4, b"ftyp"),),),
}


def resolve_mime_type(file_ref: FileRef) -> str | None:
    """Declared MIME type without parameters, else a guess from the path."""
    if file_ref.mime_type:
        return file_ref.mime_type.split(";")[0].strip().lower()
    guessed, _ = mimetypes.guess_type(file_ref.path)
    return guessed.lower() if guessed else None


def validate_mime_type(mime_type: str, policy: FormatPolicy) -> list[FormatViolation]:
    if mime_type not in policy.allowed_mime_types:
        return [
            FormatViolation(
                code="invalid_mime_type",
                message=(
                    f"MIME type '{mime_type}' is not allowed. "
                    f"Allowed types: {', '.join(sorted(policy.allowed_mime_types))}"
                ),
                field="file.mime_type",
            )
        ]
    return []


def validate_size(file_ref: FileRef, policy: FormatPolicy) -> list[FormatViolation]:
    if file_ref.size_bytes is None:
        return []
    if file_ref.size_bytes < 0:
        return [
            FormatViolation(
                code="invalid_size",
                message=f"File size cannot be negative ({file_ref.size_bytes})",
                field="file.size_bytes",
            )
        ]
    if policy.max_bytes is not None and file_ref.size_bytes > policy.max_bytes:
        return [
            FormatViolation(
                code="file_too_large",
                message=(
                    f"File is {file_ref.size_bytes} bytes, "
                    f"the maximum is {policy.max_bytes} bytes"
                ),
                field="file.size_bytes",
            )
        ]
    return []


def matches_signature(header: bytes, mime_type: str) -> bool:
    """True if the header matches a known signature, or none is known for the type."""
    alternatives = SIGNATURES.get(mime_type)
    if not alternatives:
        return True
    return any(
        all(header[offset : offset + len(magic)] == magic for offset, magic in parts)
        for parts in alternatives
    )


class FormatValidator:
    """Pluggable format policy for content files."""

    def __init__(self, policy: FormatPolicy, files: FileStorePort | None = None) -> None:
        self._policy = policy
        self._files = files

    @property
    def policy(self) -> FormatPolicy:
        return self._policy

    def check(self, file_ref: FileRef) -> list[FormatViolation]:
        """Return every reason the file is rejected; empty means valid."""
        mime_type = resolve_mime_type(file_ref)
        if mime_type is None:
            return [
                FormatViolation(
                    code="unknown_mime_type",
                    message="Could not determine the file's MIME type",
                    field="file.mime_type",
                )
            ]

        errors = validate_mime_type(mime_type, self._policy)
        if errors:
            return errors

        errors = validate_size(file_ref, self._policy)
        if errors:
            return errors

        if self._files is None:
            return []

        try:
            if not self._files.exists(file_ref.path):
                return [self._missing(file_ref)]
        except (ValueError, OSError) as e:
            return [self._unreadable(file_ref, e)]

        if self._policy.sniff_signatures and mime_type in SIGNATURES:
            return self._sniff(self._files, file_ref, mime_type)
        return []

    def is_valid_format(self, file_ref: FileRef) -> bool:
        return not self.check(file_ref)

    def _sniff(
        self, files: FileStorePort, file_ref: FileRef, mime_type: str
    ) -> list[FormatViolation]:
        try:
            with files.open_stream(file_ref.path) as stream:
                header = stream.read(HEADER_BYTES)
        except FileNotFoundError:
            return [self._missing(file_ref)]
        except (ValueError, OSError) as e:
            return [self._unreadable(file_ref, e)]

        if not matches_signature(header, mime_type):
            logger.info("Signature mismatch for %s (declared %s)", file_ref.path, mime_type)
            return [
                FormatViolation(
                    code="signature_mismatch",
                    message=f"File contents do not look like {mime_type}",
                    field="file",
                )
            ]
        return []

    @staticmethod
    def _missing(file_ref: FileRef) -> FormatViolation:
        return FormatViolation(
            code="file_missing",
            message=f"File not found: {file_ref.path}",
            field="file.path",
        )

    @staticmethod
    def _unreadable(file_ref: FileRef, error: Exception) -> FormatViolation:
        logger.info("Could not read %s: %s", file_ref.path, error)
        return FormatViolation(
            code="invalid_path",
            message=f"File cannot be read: {file_ref.path}",
            field="file.path",
        )


# --- Component Entry Points ---


def run_validate(
    inp: ValidateFormatInput,
    *,
    policy: FormatPolicy,
    files: FileStorePort | None = None,
) -> ValidateFormatOutput:
    """
    Validate a file reference against a format policy.

    Args:
        inp: Input containing the file reference.
        policy: Accepted formats and limits.
        files: Optional file store for existence and signature checks.

    Returns:
        ValidateFormatOutput with the resolved MIME type and any violations.
    """
    validator = FormatValidator(policy, files)
    errors = validator.check(inp.file)
    return ValidateFormatOutput(
        mime_type=resolve_mime_type(inp.file),
        errors=errors,
        success=len(errors) == 0,
    )


# --- Factory Function ---


def create_format_validator(
    rules: FormatRules | None = None,
    files: FileStorePort | None = None,
) -> FormatValidator:
    """
    Create a format validator from the formats section of the rules file.

    Args:
        rules: Formats rules; defaults apply when None.
        files: Optional file store for existence and signature checks.

    Returns:
        Configured FormatValidator
    """
    return FormatValidator(FormatPolicy.from_rules(rules or FormatRules()), files)
