"""Queue identity from a decorator or call argument."""

from __future__ import annotations

from typing import Optional

from tree_sitter import Node

from ..ast.nodes import node_text, string_value
from ..graph.model import QueueKey


def resolve_queue_key(argument: Optional[Node]) -> Optional[QueueKey]:
    """Return the queue key named by ``argument``.

    A string literal gives a literal key with the string's value; a member
    access such as ``Queues.ORDERS`` gives a symbolic key with its source
    text. Any other shape, or no argument, gives ``None``.
    """
    if argument is None:
        return None
    if argument.type == "string":
        value = string_value(argument)
        return QueueKey.literal(value) if value is not None else None
    if argument.type == "member_expression":
        return QueueKey.symbolic(node_text(argument))
    return None
