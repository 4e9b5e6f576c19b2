from __future__ import annotations

import argparse
import os
import uuid
from pathlib import Path

from celery_script.ast import DEFAULT_MAX_DEPTH, ASTError, normalize
from celery_script.io import LoadError, load_document
from celery_script.log import log_event
from celery_script.models import Node
from celery_script.schema import SchemaValidationError, validate_node_schema
from celery_script.serialize import node_json, node_to_dict, node_yaml

DEFAULT_FORMAT = "json"
OUTPUT_FORMATS = ("json", "yaml")
MAX_DEPTH_HELP = f"Maximum nesting depth (default: {DEFAULT_MAX_DEPTH}, env CELERY_SCRIPT_MAX_DEPTH)"


def _max_depth(raw: str) -> int:
    # argparse also runs string defaults through this, so bad env values are reported too
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {raw!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {raw!r}")
    return value


def _output_format(raw: str) -> str:
    if raw not in OUTPUT_FORMATS:
        raise argparse.ArgumentTypeError(f"expected one of {', '.join(OUTPUT_FORMATS)}, got {raw!r}")
    return raw


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="celery-script", description="CeleryScript AST tools")
    sub = parser.add_subparsers(dest="command")
    max_depth_default = os.environ.get("CELERY_SCRIPT_MAX_DEPTH", str(DEFAULT_MAX_DEPTH))

    norm = sub.add_parser("normalize", help="Print the canonical tree of a JSON/YAML node document")
    norm.add_argument("path", help="Input document (.json, .yml, .yaml)")
    norm.add_argument(
        "--format",
        type=_output_format,
        default=os.environ.get("CELERY_SCRIPT_FORMAT", DEFAULT_FORMAT),
        help="Output format: json or yaml (default: json, env CELERY_SCRIPT_FORMAT)",
    )
    norm.add_argument("--validate", action="store_true", help="Also check the result against the node schema")
    norm.add_argument("--max-depth", type=_max_depth, default=max_depth_default, help=MAX_DEPTH_HELP)

    check = sub.add_parser("check", help="Normalize and schema-check one or more documents")
    check.add_argument("paths", nargs="+", help="Input documents")
    check.add_argument("--max-depth", type=_max_depth, default=max_depth_default, help=MAX_DEPTH_HELP)

    sub.add_parser("help", help="Show help")
    return parser


def _load_and_normalize(path: Path, max_depth: int, correlation_id: str) -> Node:
    try:
        raw = load_document(path)
    except LoadError:
        log_event("load.failed", correlation_id, path=str(path))
        raise
    try:
        node = normalize(raw, max_depth=max_depth)
    except ASTError as exc:
        log_event("normalize.failed", correlation_id, path=str(path), at=exc.path, error=str(exc))
        raise
    log_event("normalize.ok", correlation_id, path=str(path), kind=node.kind, children=len(node.body))
    return node


def _validate(node: Node, path: Path, correlation_id: str) -> None:
    try:
        validate_node_schema(node_to_dict(node))
    except SchemaValidationError as exc:
        log_event("schema.failed", correlation_id, path=str(path), error=str(exc))
        raise


def _run_normalize(args: argparse.Namespace) -> int:
    correlation_id = uuid.uuid4().hex
    path = Path(args.path)
    try:
        node = _load_and_normalize(path, args.max_depth, correlation_id)
        if args.validate:
            _validate(node, path, correlation_id)
    except (LoadError, ASTError, SchemaValidationError) as exc:
        print(f"ERROR: {exc}")
        return 1

    if args.format == "yaml":
        print(node_yaml(node), end="")
    else:
        print(node_json(node))
    return 0


def _run_check(args: argparse.Namespace) -> int:
    correlation_id = uuid.uuid4().hex
    failures = 0
    for raw_path in args.paths:
        path = Path(raw_path)
        try:
            node = _load_and_normalize(path, args.max_depth, correlation_id)
            _validate(node, path, correlation_id)
        except (LoadError, ASTError, SchemaValidationError) as exc:
            failures += 1
            print(f"FAIL {path}: {exc}")
            continue
        print(f"OK   {path} ({node.kind})")
    return 1 if failures else 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command in (None, "help"):
        parser.print_help()
        return 0

    if args.command == "normalize":
        return _run_normalize(args)

    if args.command == "check":
        return _run_check(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
