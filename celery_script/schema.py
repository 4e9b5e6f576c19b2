from __future__ import annotations

import json
from pathlib import Path

DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "node.v0_1.json"


class SchemaValidationError(RuntimeError):
    pass


def load_schema(schema_path: Path) -> dict:
    return json.loads(schema_path.read_text(encoding="utf-8"))


def validate_node_schema(document: dict, schema_path: Path | None = None) -> None:
    """Check a serialized node tree (see ``node_to_dict``) against the node schema."""
    try:
        from jsonschema import Draft202012Validator
    except ModuleNotFoundError as exc:
        raise SchemaValidationError(
            "Missing dependency 'jsonschema'. Install with: pip install jsonschema"
        ) from exc

    schema = load_schema(schema_path or DEFAULT_SCHEMA_PATH)
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.path])
    if errors:
        first = errors[0]
        location = ".".join([str(p) for p in first.path]) or "root"
        raise SchemaValidationError(f"Schema validation failed at {location}: {first.message}")
