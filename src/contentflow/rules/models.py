from pydantic import BaseModel, Field, field_validator

DEFAULT_ALLOWED_MIME_TYPES = [
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "application/pdf",
    "video/mp4",
    "audio/mpeg",
    "text/markdown",
    "text/plain",
]


class FormatRules(BaseModel):
    allowed_mime_types: list[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_MIME_TYPES))
    max_bytes: int | None = None
    sniff_signatures: bool = True

    @field_validator("allowed_mime_types")
    @classmethod
    def _lowercase(cls, value: list[str]) -> list[str]:
        return [v.strip().lower() for v in value]


class BatchRules(BaseModel):
    max_workers: int = Field(default=4, ge=1, le=64)


class NotificationRules(BaseModel):
    published_label: str = "Content published"
    archived_label: str = "Content archived"


class Rules(BaseModel):
    schema_version: int = 1
    formats: FormatRules = Field(default_factory=FormatRules)
    batch: BatchRules = Field(default_factory=BatchRules)
    notifications: NotificationRules = Field(default_factory=NotificationRules)
    roles: dict[str, list[str]] = Field(default_factory=dict)
