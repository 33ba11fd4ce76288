import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from contentflow.rules.models import Rules

logger = logging.getLogger(__name__)

# Default rules file name (relative to project root)
DEFAULT_RULES_PATH = "contentflow_rules.yaml"
RULES_PATH_ENV = "CONTENTFLOW_RULES_PATH"
EXPECTED_SCHEMA_VERSION = 1


class RulesValidationError(ValueError):
    """Raised when the rules file is not valid YAML or fails schema validation."""


def _find_project_root() -> Path:
    """Find project root by looking for marker files."""
    current = Path.cwd()

    for parent in [current, *current.parents]:
        if (parent / "pyproject.toml").exists() or (parent / ".git").exists():
            return parent

    return current


def resolve_rules_path(path: Path | str | None = None) -> Path:
    """Explicit path first, then the environment, then the project root."""
    if path is not None:
        return Path(path)
    env_path = os.environ.get(RULES_PATH_ENV)
    if env_path:
        return Path(env_path)
    return _find_project_root() / DEFAULT_RULES_PATH


def parse_rules(text: str) -> Rules:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise RulesValidationError(f"Invalid YAML syntax in rules file: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise RulesValidationError("Rules file must contain a mapping at the top level")

    try:
        rules = Rules.model_validate(data)
    except ValidationError as e:
        raise RulesValidationError(f"Rules validation failed:\n{e}") from e

    if rules.schema_version != EXPECTED_SCHEMA_VERSION:
        raise RulesValidationError(
            f"Invalid schema_version: expected {EXPECTED_SCHEMA_VERSION}, "
            f"got {rules.schema_version}"
        )
    return rules


def load_rules(path: Path | str | None = None) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises RulesValidationError if syntax or schema invalid.
    """
    rules_path = resolve_rules_path(path)
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules file not found at: {rules_path}")

    with open(rules_path) as f:
        content = f.read()

    rules = parse_rules(content)
    logger.info("Loaded rules from %s", rules_path)
    return rules
