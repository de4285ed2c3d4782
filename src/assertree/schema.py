"""Generate JSON Schema for the settings YAML format."""

from __future__ import annotations

import json
from pathlib import Path

from assertree.config import AssertreeConfig


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def generate_json_schema() -> dict:
    schema = AssertreeConfig.model_json_schema()
    schema["title"] = "assertree settings"
    return schema


def write_json_schema(path: Path) -> None:
    _ensure_parent(path)
    schema = generate_json_schema()
    path.write_text(json.dumps(schema, indent=2) + "\n")
