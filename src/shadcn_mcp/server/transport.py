"""MCP protocol binding for the dispatcher.

Registers one request handler per RPC method on the low-level `mcp` Server.
Each converts the dispatcher's wire dict into the matching mcp result type
and turns ServerException into a JSON-RPC error object (McpError), so
clients see NotFound / InvalidParams / InternalError codes rather than
tool results flagged isError.

Transports:
    stdio   stdin/stdout (default; logs go to stderr)
    sse     GET /sse + POST /messages/?session_id=... on starlette/uvicorn

Example:
    >>> server = McpServer(dispatcher, name="shadcn-ui-mcp")
    >>> server.run("sse", host="0.0.0.0", port=3001)
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Literal, TypeVar

import anyio
import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.shared.exceptions import McpError
from pydantic import BaseModel

from .. import __version__
from ..foundation.errors import ServerException
from ..runtime.observability.logging import get_logger
from .dispatcher import Dispatcher

if TYPE_CHECKING:
    from starlette.applications import Starlette

Transport = Literal["stdio", "sse"]
R = TypeVar("R", bound=BaseModel)

SSE_PATH = "/sse"
MESSAGES_PATH = "/messages/"

log = get_logger("transport")


def to_mcp_error(exc: ServerException) -> McpError:
    return McpError(types.ErrorData.model_validate(exc.error.to_error_data()))


def _result(result_type: type[R], wire: dict[str, object]) -> types.ServerResult:
    return types.ServerResult(result_type.model_validate(wire))  # type: ignore[arg-type]


async def _invoke(result_type: type[R], call: Awaitable[dict[str, object]]) -> types.ServerResult:
    """Await a dispatcher call, mapping ServerException to a JSON-RPC error."""
    try:
        wire = await call
    except ServerException as e:
        raise to_mcp_error(e) from e
    return _result(result_type, wire)


class McpServer:
    """Binds a Dispatcher to an mcp Server and runs it over stdio or SSE."""

    __slots__ = ("_dispatcher", "_server", "_on_shutdown")

    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        name: str = "shadcn-ui-mcp",
        on_shutdown: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._on_shutdown = on_shutdown
        self._server: Server = Server(name, version=__version__)
        self._register()

    @property
    def server(self) -> Server:
        return self._server

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    def _register(self) -> None:
        d = self._dispatcher
        handlers = self._server.request_handlers

        async def list_resources(_: types.ListResourcesRequest) -> types.ServerResult:
            return _result(types.ListResourcesResult, d.list_resources())

        async def list_templates(_: types.ListResourceTemplatesRequest) -> types.ServerResult:
            return _result(types.ListResourceTemplatesResult, d.list_resource_templates())

        async def read_resource(req: types.ReadResourceRequest) -> types.ServerResult:
            return await _invoke(types.ReadResourceResult, d.read_resource(str(req.params.uri)))

        async def list_tools(_: types.ListToolsRequest) -> types.ServerResult:
            return _result(types.ListToolsResult, d.list_tools())

        async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
            return await _invoke(types.CallToolResult, d.call_tool(req.params.name, req.params.arguments))

        async def list_prompts(_: types.ListPromptsRequest) -> types.ServerResult:
            return _result(types.ListPromptsResult, d.list_prompts())

        async def get_prompt(req: types.GetPromptRequest) -> types.ServerResult:
            return await _invoke(types.GetPromptResult, d.get_prompt(req.params.name, req.params.arguments))

        handlers[types.ListResourcesRequest] = list_resources
        handlers[types.ListResourceTemplatesRequest] = list_templates
        handlers[types.ReadResourceRequest] = read_resource
        handlers[types.ListToolsRequest] = list_tools
        handlers[types.CallToolRequest] = call_tool
        handlers[types.ListPromptsRequest] = list_prompts
        handlers[types.GetPromptRequest] = get_prompt

    # ─────────────────────────────────────────────────────────────────
    # Transports
    # ─────────────────────────────────────────────────────────────────

    async def run_stdio(self) -> None:
        from mcp.server.stdio import stdio_server

        log.info("serving", transport="stdio")
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self._server.run(read_stream, write_stream, self._server.create_initialization_options())
        finally:
            await self._shutdown()

    async def _shutdown(self) -> None:
        if self._on_shutdown is not None:
            await self._on_shutdown()
        log.info("stopped")

    def sse_app(self) -> Starlette:
        """Starlette app exposing the SSE endpoint and the message POST endpoint."""
        from mcp.server.sse import SseServerTransport
        from starlette.applications import Starlette
        from starlette.requests import Request
        from starlette.responses import JSONResponse, Response
        from starlette.routing import Mount, Route

        sse = SseServerTransport(MESSAGES_PATH)
        server = self._server

        async def handle_sse(request: Request) -> Response:
            async with sse.connect_sse(request.scope, request.receive, request._send) as (read_stream, write_stream):
                await server.run(read_stream, write_stream, server.create_initialization_options())
            return Response()

        async def health(request: Request) -> JSONResponse:
            return JSONResponse({"status": "ok", "server": server.name, "version": __version__})

        @asynccontextmanager
        async def lifespan(_: Starlette) -> AsyncIterator[None]:
            yield
            await self._shutdown()

        return Starlette(lifespan=lifespan, routes=[
            Route(SSE_PATH, endpoint=handle_sse, methods=["GET"]),
            Route("/health", endpoint=health, methods=["GET"]),
            Mount(MESSAGES_PATH, app=sse.handle_post_message),
        ])

    def run(self, transport: Transport = "stdio", *, host: str = "0.0.0.0", port: int = 3001) -> None:
        """Start serving (blocking)."""
        if transport == "stdio":
            anyio.run(self.run_stdio)
            return

        import uvicorn

        log.info("serving", transport="sse", host=host, port=port, endpoint=SSE_PATH)
        uvicorn.run(self.sse_app(), host=host, port=port, log_level="warning")
