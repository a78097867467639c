"""MCP tools exposing the queue analysis."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from ..analyze import run_analysis
from ..config import AnalyzerConfig
from ..graph.export import summarize, to_dot, to_json

FORMATS = ("json", "dot", "summary")


def analyze_queues(arguments: Dict[str, Any], config: AnalyzerConfig | None = None) -> str:
    """Analyse a project path and render the graph in the requested format.

    Failures come back as a JSON object with ``state`` and ``message`` so the
    client can tell a bad path from an empty project.
    """
    fmt = arguments.get("format", "json")
    if fmt not in FORMATS:
        raise ValueError(f"Unsupported format: {fmt}")

    config_path = arguments.get("config")
    outcome = run_analysis(
        arguments.get("path"),
        config,
        config_path=Path(config_path) if config_path else None,
    )
    if not outcome.succeeded:
        return json.dumps({"state": outcome.state.value, "message": outcome.message})

    graph = outcome.graph
    if fmt == "dot":
        return to_dot(graph)
    if fmt == "summary":
        return f"{outcome.message}\n{summarize(graph)}"
    return to_json(graph)


def register_tools(server) -> None:
    """Register queue analysis tools with the MCP server."""
    for tool_def in QUEUE_TOOLS:
        server.register_tool(
            tool_def["name"],
            tool_def["description"],
            tool_def["inputSchema"],
            analyze_queues,
        )


# Tool registration metadata
QUEUE_TOOLS = [
    {
        "name": "analyze_queues",
        "description": (
            "Map RabbitMQ senders and listeners of a NestJS project into a "
            "graph of sender -> listener links keyed by queue"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "path": {
                    "type": "string",
                    "description": "Absolute path of the project root (contains tsconfig.json)",
                },
                "format": {
                    "type": "string",
                    "enum": list(FORMATS),
                    "description": "Output encoding (default: json)",
                },
                "config": {
                    "type": "string",
                    "description": "Optional path to a queuegraph settings file",
                },
            },
            "required": ["path"],
        },
    },
]
