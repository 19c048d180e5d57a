"""Resource definitions and YAML loader.

Maps resource names (``departments``, ``books``...) to the REST path they live
under and, for list endpoints that nest their items under a named field, the
key to read them from.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class ResourceDefinition(BaseModel):
    """Where a backend collection lives and how its list responses are keyed."""

    path: str = Field(..., pattern=r"^/[A-Za-z0-9_\-/]*$")
    resource_key: str | None = None
    update_method: Literal["PATCH", "PUT"] = "PATCH"

    @field_validator("update_method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


def load_resource_definitions(yaml_path: str) -> dict[str, ResourceDefinition]:
    """Parse a resources YAML file into typed ResourceDefinition objects.

    Args:
        yaml_path: Path to the YAML configuration file.

    Returns:
        A dict mapping resource names to ResourceDefinition instances. A
        missing or unparseable file yields an empty dict; invalid entries
        are skipped.
    """
    path = Path(yaml_path)

    if not path.exists():
        logger.warning("Resources file not found at %s; no resources registered", yaml_path)
        return {}

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Failed to parse resources YAML at %s: %s", yaml_path, exc)
        return {}

    if not isinstance(raw, dict) or not isinstance(raw.get("resources"), dict):
        logger.warning("Resources YAML missing 'resources' mapping; no resources registered")
        return {}

    definitions: dict[str, ResourceDefinition] = {}
    for name, config in raw["resources"].items():
        if isinstance(config, str):
            config = {"path": config}
        try:
            definitions[str(name)] = ResourceDefinition.model_validate(config)
        except ValidationError as exc:
            logger.error("Invalid definition for resource '%s': %s; skipping", name, exc)

    return definitions
