"""Server layer: dispatcher, MCP transport binding and application assembly."""

from .app import Application, create_app
from .dispatcher import Dispatcher
from .transport import McpServer, to_mcp_error

__all__ = ["Dispatcher", "McpServer", "Application", "create_app", "to_mcp_error"]
