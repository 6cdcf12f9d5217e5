"""shadcn-mcp - Model Context Protocol server for shadcn/ui.

Exposes the shadcn/ui documentation site and component repository to MCP
clients as tools, resources, resource templates and prompts. Upstream
responses are cached in-process with a TTL.

Quick Start:
    $ shadcn-mcp                          # stdio, for desktop MCP clients
    $ PORT=3001 shadcn-mcp --transport sse

Programmatic:
    >>> from shadcn_mcp import create_app
    >>> app = create_app()
    >>> await app.dispatcher.call_tool("get_usage", {"componentName": "button"})
    {'content': [{'type': 'text', 'text': '...'}]}
"""

from __future__ import annotations

__version__ = "0.1.0"

from .foundation.errors import ErrorCode, ServerError, ServerException
from .io.cache import ResponseCache
from .io.upstream import UpstreamClient
from .registry import ContentResult, Registry
from .server import Application, Dispatcher, McpServer, create_app

__all__ = [
    "__version__",
    # Errors
    "ErrorCode",
    "ServerError",
    "ServerException",
    # Core
    "ResponseCache",
    "UpstreamClient",
    "Registry",
    "ContentResult",
    "Dispatcher",
    # Server
    "McpServer",
    "Application",
    "create_app",
]
