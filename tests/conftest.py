from pathlib import Path

import pytest

from contentflow.domain.entities import Content, FileRef, User
from contentflow.rules.loader import load_rules
from contentflow.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def rules_path() -> Path:
    path = PROJECT_ROOT / "contentflow_rules.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Rules not found at {path}")
    return path


@pytest.fixture
def rules(rules_path: Path) -> Rules:
    """The real project rules file."""
    return load_rules(rules_path)


@pytest.fixture
def editor() -> User:
    return User(id="u-editor", display_name="Editor", roles={"editor"})


@pytest.fixture
def curator() -> User:
    return User(id="u-curator", display_name="Curator", roles={"curator"})


@pytest.fixture
def draft() -> Content:
    return Content(
        id="C1",
        title="Quarterly Report",
        file=FileRef(path="reports/q1.png", mime_type="image/png", size_bytes=len(PNG_BYTES)),
    )
