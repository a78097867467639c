"""queuegraph package.

Statically maps message-queue traffic in a NestJS codebase: which methods
listen on a queue, which methods send to it, and the edges between them.
"""

__all__ = [
    "config",
    "errors",
    "ast",
    "extract",
    "graph",
    "analyze",
    "mcp",
]
