"""Build the sender/listener graph from extracted method records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from .model import GraphData, GraphLink, GraphNode, MethodRecord, Role
from ..log import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class QueueGroup:
    """Records that share one queue key, split by role."""

    key: str
    senders: List[MethodRecord] = field(default_factory=list)
    listeners: List[MethodRecord] = field(default_factory=list)

    def add(self, record: MethodRecord) -> None:
        if record.role is Role.SENDER:
            self.senders.append(record)
        else:
            self.listeners.append(record)


def _record_order(record: MethodRecord) -> Tuple[str, str, str, str]:
    return (record.class_name, record.name, record.file, record.queue.kind.value)


def group_by_queue(records: Iterable[MethodRecord]) -> List[QueueGroup]:
    """Group records by the display text of their queue key.

    Groups come back sorted by key and members sorted by class, method and
    file, so the graph does not depend on file discovery order.
    """
    groups: Dict[str, QueueGroup] = {}
    for record in sorted(records, key=_record_order):
        key = record.queue.display
        group = groups.get(key)
        if group is None:
            group = groups[key] = QueueGroup(key=key)
        group.add(record)
    return [groups[key] for key in sorted(groups)]


def _ensure_node(nodes: Dict[str, GraphNode], record: MethodRecord) -> str:
    node_id = record.node_id
    if node_id not in nodes:
        nodes[node_id] = GraphNode.from_record(record)
    return node_id


def build_graph(records: Iterable[MethodRecord]) -> GraphData:
    """Turn method records into nodes and sender -> listener links.

    Every sender and listener gets a node, even when its queue has no
    counterpart. Within each queue group one link is emitted per
    (sender, listener) pair; the first record seen for a node id fixes its
    label and details.
    """
    nodes: Dict[str, GraphNode] = {}
    links: List[GraphLink] = []

    for group in group_by_queue(records):
        sender_ids = [_ensure_node(nodes, sender) for sender in group.senders]
        listener_ids = [_ensure_node(nodes, listener) for listener in group.listeners]

        if not sender_ids or not listener_ids:
            logger.debug(
                "Queue %r has %d senders and %d listeners; no links",
                group.key,
                len(sender_ids),
                len(listener_ids),
            )
            continue

        for sender_id in sender_ids:
            for listener_id in listener_ids:
                links.append(GraphLink(source=sender_id, target=listener_id, label=group.key))

    return GraphData(nodes=tuple(nodes.values()), links=tuple(links))
