from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

from celery_script.models import Atom, Node


def _plain(value: Any) -> Any:
    if isinstance(value, Node):
        return node_to_dict(value)
    if isinstance(value, Atom):
        return str(value)
    if isinstance(value, (date, datetime, time)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, Mapping):
        return {str(key): _plain(item) for key, item in value.items()}
    return value


def node_to_dict(node: Node) -> dict[str, Any]:
    return {
        "kind": node.kind,
        "args": {str(key): _plain(value) for key, value in node.args.items()},
        "body": [node_to_dict(child) for child in node.body],
    }


def node_json_compact(node: Node) -> str:
    return json.dumps(node_to_dict(node), separators=(",", ":"), default=str)


def node_json(node: Node) -> str:
    return json.dumps(node_to_dict(node), indent=2, default=str)


def node_yaml(node: Node) -> str:
    try:
        import yaml
    except ModuleNotFoundError as exc:
        raise RuntimeError("Missing dependency 'PyYAML'. Install with: pip install pyyaml") from exc

    return yaml.safe_dump(node_to_dict(node), sort_keys=False)


def write_node_yaml(node: Node, output_path: Path) -> None:
    output_path.write_text(node_yaml(node), encoding="utf-8")
