from celery_script.ast import (
    ASTError,
    CyclicNodeError,
    MalformedNodeError,
    NodeDepthError,
    UnrecognizedNodeError,
    canonical_key,
    is_node,
    normalize,
    parse,
)
from celery_script.models import Atom, Node

__all__ = [
    "ASTError",
    "Atom",
    "CyclicNodeError",
    "MalformedNodeError",
    "Node",
    "NodeDepthError",
    "UnrecognizedNodeError",
    "canonical_key",
    "is_node",
    "normalize",
    "parse",
]
