"""Shared upstream access for handlers backed by the docs site or the repository."""

from __future__ import annotations

from ..extract import ComponentInfo, extract_component_info, extract_component_list
from ..io.cache import ResponseCache
from ..io.upstream import UpstreamClient
from ..runtime.observability.logging import get_logger

log = get_logger("handlers")


class UpstreamHandler:
    """Holds the injected cache and client; fetches shared by several handlers.

    Failed fetches propagate and are not cached.
    """

    __slots__ = ("cache", "client")

    def __init__(self, cache: ResponseCache, client: UpstreamClient) -> None:
        self.cache = cache
        self.client = client

    async def _docs_page(self, name: str) -> str:
        async def fetch() -> str:
            log.info("fetching docs page", component=name)
            return await self.client.fetch_docs(f"/components/{name}")
        return await self.cache.get_or_fetch(f"page:{name}", fetch)

    async def _component_details(self, name: str) -> ComponentInfo:
        async def fetch() -> ComponentInfo:
            return extract_component_info(await self._docs_page(name), name)
        return await self.cache.get_or_fetch(f"component:{name}", fetch)

    async def _component_list(self) -> list[ComponentInfo]:
        async def fetch() -> list[ComponentInfo]:
            log.info("fetching component index")
            return extract_component_list(await self.client.fetch_docs("/components"))
        return await self.cache.get_or_fetch("components:list", fetch)
