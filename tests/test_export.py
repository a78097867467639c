from __future__ import annotations

import json

from queuegraph.graph.builder import build_graph
from queuegraph.graph.export import summarize, to_dot, to_json
from queuegraph.graph.model import GraphData, MethodRecord, QueueKey, Role


def _graph() -> GraphData:
    queue = QueueKey.symbolic("Queues.ORDERS")
    return build_graph([
        MethodRecord("/p/src/order.service.ts", "OrderService", "create", Role.SENDER, queue),
        MethodRecord("/p/src/order.listener.ts", "OrderListener", "onOrder", Role.LISTENER, queue),
        MethodRecord("/p/src/audit.listener.ts", "AuditListener", "onAudit", Role.LISTENER, QueueKey.literal("audit")),
    ])


def test_json_matches_renderer_contract() -> None:
    data = json.loads(to_json(_graph()))
    assert data["links"] == [
        {
            "source": "sender:OrderService.create",
            "target": "listener:OrderListener.onOrder",
            "label": "Queues.ORDERS",
        }
    ]
    sender = next(node for node in data["nodes"] if node["id"] == "sender:OrderService.create")
    assert sender == {
        "id": "sender:OrderService.create",
        "type": "sender",
        "label": "OrderService.create()",
        "details": {"file": "/p/src/order.service.ts", "class": "OrderService"},
    }


def test_json_of_empty_graph() -> None:
    assert json.loads(to_json(GraphData())) == {"nodes": [], "links": []}


def test_dot_declares_nodes_and_edges() -> None:
    dot = to_dot(_graph())
    assert dot.startswith('digraph "queues" {')
    assert '"sender:OrderService.create" [label="OrderService.create()", shape=box' in dot
    assert '"listener:AuditListener.onAudit" [label="AuditListener.onAudit()", shape=ellipse' in dot
    assert '"sender:OrderService.create" -> "listener:OrderListener.onOrder" [label="Queues.ORDERS"];' in dot
    assert dot.rstrip().endswith("}")


def test_dot_escapes_quotes() -> None:
    graph = build_graph([
        MethodRecord("/p/a.ts", "A", "send", Role.SENDER, QueueKey.literal('say "hi"')),
        MethodRecord("/p/b.ts", "B", "hear", Role.LISTENER, QueueKey.literal('say "hi"')),
    ])
    assert '[label="say \\"hi\\""]' in to_dot(graph)


def test_summary_lists_links_and_unconnected_endpoints() -> None:
    text = summarize(_graph())
    assert "Senders   : 1" in text
    assert "Listeners : 2" in text
    assert "Links     : 1" in text
    assert "OrderService.create() -> OrderListener.onOrder()  [Queues.ORDERS]" in text
    assert "Unconnected:" in text
    assert "AuditListener.onAudit()" in text
