"""Records extracted from source and the graph built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Role(str, Enum):
    LISTENER = "listener"
    SENDER = "sender"


class QueueKeyKind(str, Enum):
    LITERAL = "literal"
    SYMBOLIC = "symbolic"


@dataclass(frozen=True, slots=True)
class QueueKey:
    """Identity of a queue as written at a call site or decorator.

    ``LITERAL`` keys carry the string value; ``SYMBOLIC`` keys carry the
    source text of a member access such as ``Queues.ORDERS``. Either way the
    text is what identifies the queue: keys are grouped by :attr:`display`.
    """

    kind: QueueKeyKind
    text: str

    @classmethod
    def literal(cls, text: str) -> "QueueKey":
        return cls(QueueKeyKind.LITERAL, text)

    @classmethod
    def symbolic(cls, text: str) -> "QueueKey":
        return cls(QueueKeyKind.SYMBOLIC, text)

    @property
    def display(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class MethodRecord:
    """One listener or sender fact found in a source file."""

    file: str
    class_name: str
    name: str
    role: Role
    queue: QueueKey

    @property
    def node_id(self) -> str:
        return f"{self.role.value}:{self.class_name}.{self.name}"

    @property
    def label(self) -> str:
        return f"{self.class_name}.{self.name}()"


@dataclass(frozen=True, slots=True)
class NodeDetails:
    file: str
    class_name: str

    def to_dict(self) -> Dict[str, str]:
        return {"file": self.file, "class": self.class_name}


@dataclass(frozen=True, slots=True)
class GraphNode:
    """A sender or listener endpoint; unique by ``id``."""

    id: str
    role: Role
    label: str
    details: NodeDetails

    @classmethod
    def from_record(cls, record: MethodRecord) -> "GraphNode":
        return cls(
            id=record.node_id,
            role=record.role,
            label=record.label,
            details=NodeDetails(file=record.file, class_name=record.class_name),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.role.value,
            "label": self.label,
            "details": self.details.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class GraphLink:
    """Directed edge from a sender node to a listener node over a queue."""

    source: str
    target: str
    label: str

    def to_dict(self) -> Dict[str, str]:
        return {"source": self.source, "target": self.target, "label": self.label}


@dataclass(frozen=True, slots=True)
class GraphData:
    """Immutable snapshot handed to renderers.

    Consumers that need a mutable working copy (layout engines, for
    instance) should build one from :meth:`to_dict`.
    """

    nodes: Tuple[GraphNode, ...] = ()
    links: Tuple[GraphLink, ...] = ()
    _by_id: Dict[str, GraphNode] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_id", {node.id: node for node in self.nodes})

    @property
    def is_empty(self) -> bool:
        return not self.nodes and not self.links

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        return self._by_id.get(node_id)

    def node_ids(self) -> Tuple[str, ...]:
        return tuple(node.id for node in self.nodes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "links": [link.to_dict() for link in self.links],
        }
