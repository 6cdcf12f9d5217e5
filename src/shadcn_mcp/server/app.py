"""Application assembly: settings to a runnable server.

Builds the process-wide pieces exactly once and wires them together:
ResponseCache and UpstreamClient are shared by every handler through the
frozen Registry, which the Dispatcher and the MCP binding sit on top of.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from ..foundation.config import ServerSettings, get_settings
from ..handlers import build_registry
from ..io.cache import ResponseCache
from ..io.upstream import UpstreamClient
from ..registry import Registry
from ..runtime.observability.logging import get_logger
from .dispatcher import Dispatcher
from .transport import McpServer

log = get_logger("app")


@dataclass(slots=True)
class Application:
    settings: ServerSettings
    cache: ResponseCache
    client: UpstreamClient
    registry: Registry
    dispatcher: Dispatcher
    server: McpServer

    def run(self) -> None:
        s = self.settings
        log.info("starting", name=s.name, transport=s.transport, tools=len(self.registry), cache_ttl=s.cache.ttl)
        self.server.run(s.transport, host=s.host, port=s.port)

    async def aclose(self) -> None:
        await self.client.aclose()


def create_app(
    settings: ServerSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Application:
    """Assemble the server. `transport` replaces the network (tests pass httpx.MockTransport)."""
    settings = settings or get_settings()
    cache = ResponseCache(default_ttl=settings.cache.ttl)
    client = UpstreamClient(transport=transport)
    registry = build_registry(cache, client)
    dispatcher = Dispatcher(registry)
    server = McpServer(dispatcher, name=settings.name, on_shutdown=client.aclose)
    return Application(settings, cache, client, registry, dispatcher, server)
