from datetime import UTC, datetime
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Enums / Literals ---
ContentStatus = Literal["draft", "processed", "archived"]

# Capability names understood by the workflow
PUBLISH = "PUBLISH"
ARCHIVE = "ARCHIVE"
MANAGE = "MANAGE"
WILDCARD = "*"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def normalize_capability(name: str) -> str:
    return name.strip().upper()


# --- User ---

class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    display_name: str = ""
    capabilities: frozenset[str] = Field(default_factory=frozenset)
    roles: frozenset[str] = Field(default_factory=frozenset)

    @field_validator("capabilities", mode="before")
    @classmethod
    def _normalize_capabilities(cls, value: object) -> object:
        if isinstance(value, (list, tuple, set, frozenset)):
            return frozenset(normalize_capability(str(v)) for v in value)
        return value


# --- Content ---

class FileRef(BaseModel):
    """Opaque handle to the bytes behind a content entity."""

    model_config = ConfigDict(frozen=True)

    path: str
    mime_type: str | None = None
    size_bytes: int | None = None


class Content(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()), frozen=True)
    title: str
    file: FileRef
    published: bool = False
    status: ContentStatus = "draft"

    published_at: datetime | None = None
    updated_at: datetime = Field(default_factory=_utcnow)
