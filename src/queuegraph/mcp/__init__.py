"""MCP (Model Context Protocol) surface for queuegraph."""

from .server import QueueGraphServer, create_server

__all__ = ["QueueGraphServer", "create_server"]
