"""MCP server implementation for queuegraph."""

from __future__ import annotations

from typing import Any, Callable, Dict

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from ..config import AnalyzerConfig
from ..log import get_logger

logger = get_logger(__name__)


class QueueGraphServer:
    """MCP server answering queue-graph questions about local projects."""

    def __init__(self, config: AnalyzerConfig | None = None):
        self.config = config
        self.server = Server("queuegraph")
        self.tools: Dict[str, Callable] = {}
        self.tool_metadata: Dict[str, tuple[str, Dict]] = {}

        # Register handlers once at initialization
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Set up MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[types.Tool]:
            """List available tools."""
            return [
                types.Tool(
                    name=tool_name,
                    description=desc,
                    inputSchema=schema,
                )
                for tool_name, (desc, schema) in self.tool_metadata.items()
            ]

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict) -> list[types.TextContent]:
            """Handle tool invocation."""
            return [types.TextContent(type="text", text=self.call(name, arguments))]

    def register_tool(
        self,
        name: str,
        description: str,
        input_schema: Dict[str, Any],
        handler: Callable,
    ) -> None:
        """Register an MCP tool.

        Parameters
        ----------
        name:
            Tool name
        description:
            Tool description
        input_schema:
            JSON schema for tool inputs
        handler:
            Function called with the tool arguments and the server config
        """
        self.tools[name] = handler
        self.tool_metadata[name] = (description, input_schema)

    def call(self, name: str, arguments: Dict[str, Any] | None) -> str:
        """Invoke a registered tool and return its text result."""
        if name not in self.tools:
            raise ValueError(f"Unknown tool: {name}")
        try:
            return str(self.tools[name](arguments or {}, self.config))
        except ValueError as e:
            logger.warning("Tool %s rejected arguments: %s", name, e)
            return f"Error: {e}"

    async def run(self) -> None:
        """Run the MCP server with stdio transport."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


def create_server(config: AnalyzerConfig | None = None) -> QueueGraphServer:
    """Create and configure an MCP server instance.

    Parameters
    ----------
    config:
        Analyzer settings applied to every request; ``None`` lets each
        project's own settings file apply.

    Returns
    -------
    Configured QueueGraphServer instance
    """
    server = QueueGraphServer(config)

    from . import tools

    tools.register_tools(server)

    return server
