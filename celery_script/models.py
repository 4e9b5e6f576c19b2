from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


class Atom(str):
    """Symbol value. Compares and hashes like the equivalent plain string."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f":{str.__str__(self)}"


@dataclass(frozen=True)
class Node:
    kind: str
    args: Mapping[Atom, Any] = field(default_factory=dict, hash=False)
    body: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        # args is a read-only view over a private copy; hashing skips it
        object.__setattr__(self, "args", MappingProxyType(dict(self.args)))
        object.__setattr__(self, "body", tuple(self.body))

    def to_dict(self) -> dict[str, Any]:
        from celery_script.serialize import node_to_dict

        return node_to_dict(self)
