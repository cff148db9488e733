from __future__ import annotations
from typing import Any, Mapping, NoReturn
from zammad_node.domain.models import Node
from zammad_node.shared.errors import NodeOperationError


def raise_on_empty_update(node: Node, resource: str) -> NoReturn:
    raise NodeOperationError(
        node,
        f"Please enter at least one field to update for the {resource}",
    )

def ensure_update_fields(
    node: Node,
    resource: str,
    fields: Mapping[str, Any],
) -> Mapping[str, Any]:
    if not fields:
        raise_on_empty_update(node, resource)
    return fields
