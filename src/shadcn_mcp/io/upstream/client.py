"""Outbound HTTP access to the two upstream content sources.

- docs: the rendered shadcn/ui documentation site (HTML)
- github: raw files from the shadcn/ui repository (TSX source)

Base URLs, headers and the timeout are fixed. Tests inject an
httpx.MockTransport instead of reaching the network.

Example:
    >>> client = UpstreamClient()
    >>> html = await client.fetch_docs("/components/button")
    >>> source = await client.first_success(
    ...     component_source_paths("button"), client.fetch_source)
    >>> await client.aclose()
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

import httpx

from ...foundation.errors import UpstreamError, exception_message
from ...runtime.observability.logging import get_logger

SHADCN_DOCS_URL = "https://ui.shadcn.com/docs"
SHADCN_SITE_URL = "https://ui.shadcn.com"
GITHUB_RAW_URL = "https://raw.githubusercontent.com/shadcn-ui/ui/main/apps/v4"
USER_AGENT = "Mozilla/5.0 (compatible; ShadcnUiMcpServer/0.1.0)"
UPSTREAM_TIMEOUT: float = 10.0

REGISTRY_ROOT = "registry/new-york-v4"
GITHUB_DIRECTORIES: tuple[str, ...] = ("ui", "blocks", "charts", "hooks", "lib")
EXAMPLES_DIRECTORY = f"{REGISTRY_ROOT}/examples"

T = TypeVar("T")

log = get_logger("upstream")


def component_source_paths(name: str) -> list[str]:
    """Candidate repository paths for a component's source, in lookup order."""
    return [f"{REGISTRY_ROOT}/{directory}/{name}.tsx" for directory in GITHUB_DIRECTORIES]


def demo_source_path(name: str) -> str:
    return f"{EXAMPLES_DIRECTORY}/{name}-demo.tsx"


def block_source_path(slug: str) -> str:
    return f"{REGISTRY_ROOT}/blocks/{slug}.tsx"


class UpstreamClient:
    """Pair of lazily created httpx clients sharing headers and timeout.

    Args:
        transport: Optional transport used by both clients (tests pass MockTransport)
        timeout: Per-request timeout in seconds
    """

    __slots__ = ("_transport", "_timeout", "_docs", "_github")

    def __init__(self, *, transport: httpx.AsyncBaseTransport | None = None, timeout: float = UPSTREAM_TIMEOUT) -> None:
        self._transport = transport
        self._timeout = timeout
        self._docs: httpx.AsyncClient | None = None
        self._github: httpx.AsyncClient | None = None

    def _client(self, base_url: str) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=base_url,
            headers={"User-Agent": USER_AGENT, "Accept": "text/html,text/plain,*/*"},
            timeout=self._timeout,
            follow_redirects=True,
            transport=self._transport,
        )

    @property
    def docs(self) -> httpx.AsyncClient:
        if self._docs is None:
            self._docs = self._client(SHADCN_DOCS_URL)
        return self._docs

    @property
    def github(self) -> httpx.AsyncClient:
        if self._github is None:
            self._github = self._client(GITHUB_RAW_URL)
        return self._github

    async def fetch_docs(self, path: str) -> str:
        """GET a documentation page relative to the docs root. Non-2xx raises."""
        return await self._get(self.docs, path)

    async def fetch_source(self, path: str) -> str:
        """GET a raw repository file relative to the app root. Non-2xx raises."""
        return await self._get(self.github, path)

    async def _get(self, client: httpx.AsyncClient, path: str) -> str:
        url = path if path.startswith("/") or "://" in path else f"/{path}"
        log.debug("fetch", base=str(client.base_url), path=url)
        resp = await client.get(url)
        resp.raise_for_status()
        return resp.text

    async def first_success(self, candidates: Iterable[str], fetch: Callable[[str], Awaitable[T]]) -> T:
        """Try each candidate in order, returning the first successful fetch.

        Intermediate failures are collected; when every candidate fails the
        UpstreamError carries the last failure's message.
        """
        failures: list[tuple[str, BaseException]] = []
        for candidate in candidates:
            try:
                return await fetch(candidate)
            except (httpx.HTTPError, UpstreamError) as e:
                log.debug("candidate failed", candidate=candidate, error=exception_message(e))
                failures.append((candidate, e))
        if not failures:
            raise UpstreamError("No upstream candidates to try")
        raise UpstreamError(exception_message(failures[-1][1]), failures)

    async def aclose(self) -> None:
        """Close both underlying clients."""
        for client in (self._docs, self._github):
            if client is not None:
                await client.aclose()
        self._docs = self._github = None

    async def __aenter__(self) -> UpstreamClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()
