"""Text encodings of :class:`GraphData`."""

from __future__ import annotations

import json
from typing import List

from .model import GraphData, Role

_NODE_STYLE = {
    Role.SENDER: 'shape=box, style=filled, fillcolor="#cfe2ff"',
    Role.LISTENER: 'shape=ellipse, style=filled, fillcolor="#d1e7dd"',
}


def to_json(graph: GraphData, indent: int | None = 2) -> str:
    return json.dumps(graph.to_dict(), indent=indent)


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def to_dot(graph: GraphData, name: str = "queues") -> str:
    """Render the graph as a Graphviz digraph."""
    lines: List[str] = [f"digraph {_quote(name)} {{", "  rankdir=LR;"]
    for node in graph.nodes:
        lines.append(f"  {_quote(node.id)} [label={_quote(node.label)}, {_NODE_STYLE[node.role]}];")
    for link in graph.links:
        lines.append(f"  {_quote(link.source)} -> {_quote(link.target)} [label={_quote(link.label)}];")
    lines.append("}")
    return "\n".join(lines) + "\n"


def summarize(graph: GraphData) -> str:
    """Human readable overview: counts, links and unconnected endpoints."""
    senders = [node for node in graph.nodes if node.role is Role.SENDER]
    listeners = [node for node in graph.nodes if node.role is Role.LISTENER]
    lines = [
        f"Senders   : {len(senders)}",
        f"Listeners : {len(listeners)}",
        f"Links     : {len(graph.links)}",
    ]

    if graph.links:
        lines.append("")
        for link in graph.links:
            source = graph.get_node(link.source)
            target = graph.get_node(link.target)
            lines.append(
                f"  {source.label if source else link.source} -> "
                f"{target.label if target else link.target}  [{link.label}]"
            )

    linked = {link.source for link in graph.links} | {link.target for link in graph.links}
    unconnected = [node for node in graph.nodes if node.id not in linked]
    if unconnected:
        lines.append("")
        lines.append("Unconnected:")
        for node in unconnected:
            lines.append(f"  {node.role.value:<8} {node.label}  ({node.details.file})")

    return "\n".join(lines) + "\n"
