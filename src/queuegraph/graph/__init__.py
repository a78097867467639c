"""Graph model, construction and export."""

from .builder import QueueGroup, build_graph, group_by_queue
from .export import summarize, to_dot, to_json
from .model import (
    GraphData,
    GraphLink,
    GraphNode,
    MethodRecord,
    NodeDetails,
    QueueKey,
    QueueKeyKind,
    Role,
)

__all__ = [
    "GraphData",
    "GraphLink",
    "GraphNode",
    "MethodRecord",
    "NodeDetails",
    "QueueGroup",
    "QueueKey",
    "QueueKeyKind",
    "Role",
    "build_graph",
    "group_by_queue",
    "summarize",
    "to_dot",
    "to_json",
]
