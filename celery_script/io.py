from __future__ import annotations

import json
from pathlib import Path
from typing import Any

YAML_SUFFIXES = {".yml", ".yaml"}


class LoadError(RuntimeError):
    pass


def load_document(path: Path) -> Any:
    """Read a raw node document from a ``.json``, ``.yml`` or ``.yaml`` file."""
    if not path.exists() or not path.is_file():
        raise LoadError(f"Input file not found: {path}")

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            import yaml
        except ModuleNotFoundError as exc:
            raise LoadError("Missing dependency 'PyYAML'. Install with: pip install pyyaml") from exc
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise LoadError(f"Invalid YAML in {path}: {exc}") from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise LoadError(f"Invalid JSON in {path}: {exc}") from exc
