from __future__ import annotations
from typing import Any, Mapping, Protocol
from zammad_node.domain.models import Node


class NodeContext(Protocol):
    """What the host workflow engine hands to the adapter on every call."""

    def get_node(self) -> Node:
        ...

    def get_credentials(self, name: str) -> Mapping[str, Any]:
        ...
