from __future__ import annotations
from typing import Any
from zammad_node.domain.models import Node


class CredentialsError(RuntimeError):
    """Raised when Zammad credentials are missing or cannot be parsed."""


class NodeError(RuntimeError):
    """Base error carrying the identity of the workflow node that failed."""

    def __init__(self, node: Node, message: str) -> None:
        super().__init__(message)
        self.node = node
        self.message = message

    def __str__(self) -> str:
        return f"[{self.node.name}] {self.message}"


class NodeApiError(NodeError):
    """Raised when the Zammad API returns an error or cannot be reached."""

    def __init__(
        self,
        node: Node,
        message: str,
        http_code: int | None = None,
        description: Any = None,
    ) -> None:
        super().__init__(node, message)
        self.http_code = http_code
        self.description = description


class NodeOperationError(NodeError):
    """Raised when the user input for a node operation is invalid."""
