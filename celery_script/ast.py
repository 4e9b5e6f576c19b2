"""Normalization of raw CeleryScript nodes into canonical :class:`Node` trees.

Three raw shapes are accepted:

* a mapping keyed by plain strings (``{"kind": ..., "args": ..., "body": ...}``)
* a mapping keyed by atoms (``{Atom("kind"): ..., Atom("args"): ...}``)
* a record exposing ``kind`` and ``args`` attributes, ``body`` optional

Each node is dispatched once to a field reader; everything after that is
shape-agnostic.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Callable

from celery_script.models import Atom, Node

DEFAULT_MAX_DEPTH = 256

KIND = Atom("kind")
ARGS = Atom("args")
BODY = Atom("body")

_MISSING = object()

FieldReader = Callable[[Atom], Any]


class ASTError(ValueError):
    def __init__(self, message: str, path: str = "root") -> None:
        super().__init__(f"{message} (at {path})")
        self.path = path


class UnrecognizedNodeError(ASTError):
    pass


class MalformedNodeError(ASTError):
    pass


class NodeDepthError(ASTError):
    pass


class CyclicNodeError(ASTError):
    pass


def canonical_key(key: Any, path: str = "root") -> Atom:
    if isinstance(key, Atom):
        return key
    if isinstance(key, str):
        return Atom(key)
    raise MalformedNodeError(f"args key must be a string, got {type(key).__name__}", path)


def _is_record(value: Any) -> bool:
    if isinstance(value, (Mapping, type, str, bytes)):
        return False
    return hasattr(value, "kind") and hasattr(value, "args")


def is_node(value: Any) -> bool:
    """Return True when ``value`` should be normalized as a nested node."""
    if isinstance(value, Mapping):
        return KIND in value and ARGS in value
    return _is_record(value)


def _reader_for(raw: Any, path: str) -> FieldReader:
    if isinstance(raw, Mapping):
        # Atom hashes like its text, so one lookup serves both key styles.
        if KIND not in raw:
            if ARGS in raw or BODY in raw:
                raise UnrecognizedNodeError("node has no kind", path)
            raise UnrecognizedNodeError("unrecognized node shape: mapping without kind/args", path)
        return lambda name: raw.get(name, _MISSING)

    if _is_record(raw):
        return lambda name: getattr(raw, name, _MISSING)

    raise UnrecognizedNodeError(f"unrecognized node shape: {type(raw).__name__}", path)


def _read_kind(read: FieldReader, path: str) -> str:
    kind = read(KIND)
    if kind is _MISSING or kind is None:
        raise UnrecognizedNodeError("node has no kind", path)
    if not isinstance(kind, str):
        raise MalformedNodeError(f"kind must be a string, got {type(kind).__name__}", path)
    return str(kind)


def _read_args(read: FieldReader, path: str) -> Mapping:
    args = read(ARGS)
    if args is _MISSING or args is None:
        return {}
    if not isinstance(args, Mapping):
        raise MalformedNodeError(f"args must be a mapping, got {type(args).__name__}", path)
    return args


def _read_body(read: FieldReader, path: str) -> Sequence:
    body = read(BODY)
    if body is _MISSING or body is None:
        return ()
    if isinstance(body, (str, bytes, bytearray)) or not isinstance(body, Sequence):
        raise MalformedNodeError(f"body must be a sequence, got {type(body).__name__}", path)
    return body


def _normalize(raw: Any, path: str, depth: int, max_depth: int, ancestors: set[int]) -> Node:
    if depth > max_depth:
        raise NodeDepthError(f"nesting exceeds max depth of {max_depth}", path)
    marker = id(raw)
    if marker in ancestors:
        raise CyclicNodeError("node contains itself", path)

    read = _reader_for(raw, path)
    kind = _read_kind(read, path)
    raw_args = _read_args(read, path)
    raw_body = _read_body(read, path)

    ancestors.add(marker)
    try:
        args: dict[Atom, Any] = {}
        for key, value in raw_args.items():
            name = canonical_key(key, path)
            if is_node(value):
                value = _normalize(value, f"{path}.args.{name}", depth + 1, max_depth, ancestors)
            args[name] = value

        body = []
        for index, child in enumerate(raw_body):
            body.append(_normalize(child, f"{path}.body[{index}]", depth + 1, max_depth, ancestors))
    finally:
        ancestors.discard(marker)

    return Node(kind=kind, args=args, body=tuple(body))


def normalize(raw: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Node:
    """Canonicalize ``raw`` into a :class:`Node`.

    ``args`` keys become :class:`Atom`, node-shaped ``args`` values and every
    ``body`` element are normalized recursively, and a missing ``body`` becomes
    an empty tuple. Values that are not node-shaped, including lists, are kept
    as they are.

    Raises a subclass of :class:`ASTError` for anything that is not a node, and
    for cyclic or overly deep input.
    """
    if max_depth < 0:
        raise ValueError("max_depth must be >= 0")
    return _normalize(raw, "root", 0, max_depth, set())


parse = normalize
