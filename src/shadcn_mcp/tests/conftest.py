"""Shared fixtures: a scripted upstream, a fake clock and an assembled dispatcher."""

from __future__ import annotations

from collections.abc import Iterator

import httpx
import pytest

from shadcn_mcp.handlers import build_registry
from shadcn_mcp.io.cache import ResponseCache
from shadcn_mcp.io.upstream import UpstreamClient
from shadcn_mcp.registry import Registry
from shadcn_mcp.runtime.observability.logging import MemoryRenderer, set_renderer
from shadcn_mcp.server import Dispatcher

DOCS = "https://ui.shadcn.com/docs"
SITE = "https://ui.shadcn.com"
RAW = "https://raw.githubusercontent.com/shadcn-ui/ui/main/apps/v4/registry/new-york-v4"


BUTTON_PAGE = """\
<html><body>
<div class="mdx">
<h1>Button</h1>
<p>Displays a button or a component that looks like a button.</p>
<h2>Installation</h2>
<pre><code>npx shadcn@latest add button</code></pre>
<h2>Usage</h2>
<pre><code>import { Button } from "@/components/ui/button"</code></pre>
<pre><code>&lt;Button variant="outline"&gt;Button&lt;/Button&gt;</code></pre>
<h2>Link</h2>
<pre><code>import Link from "next/link"</code></pre>
<h2>Examples</h2>
<h3>Secondary</h3>
<div class="tabs-content"><pre><code>&lt;Button variant="secondary"&gt;Secondary&lt;/Button&gt;</code></pre></div>
<h3>Outline</h3>
<div class="tabs-content"><pre><code>&lt;Button variant="outline"&gt;Outline&lt;/Button&gt;</code></pre></div>
</div>
</body></html>
"""

BARE_PAGE = """\
<html><body>
<div class="mdx"><h1>Aspect Ratio</h1><p>Displays content within a desired ratio.</p></div>
</body></html>
"""

INDEX_PAGE = """\
<html><body><nav>
<a href="/docs/installation">Installation</a>
<a href="/docs/components/accordion">Accordion</a>
<a href="/docs/components/button">Button</a>
<a href="/docs/components/button#usage">Button usage</a>
<a href="/docs/components/date-picker/">Date Picker</a>
</nav></body></html>
"""

THEMES_PAGE = """\
<html><body>
<div class="grid-cols-1">
<h3>Zinc</h3><p>Cool neutral grays</p>
<img src="/themes/zinc.png"/>
<a href="https://github.com/shadcn">shadcn</a>
</div>
<div class="grid-cols-1"><h3>Rose</h3><p>Warm pink accents</p></div>
</body></html>
"""

BLOCKS_LISTING = """\
<html><body>
<a href="login-form.tsx">login-form.tsx</a>
<a href="sidebar-07.tsx">sidebar-07.tsx</a>
<a href="README.md">README.md</a>
</body></html>
"""

LOGIN_FORM_SOURCE = """\
import * as React from "react"
import { cn } from "@/lib/utils"
import { Button } from "@/registry/new-york-v4/ui/button"
import { Input } from "@/registry/new-york-v4/ui/input"
import { GalleryVerticalEnd } from "lucide-react"
import { LoginImage } from "./login-image"

export function LoginForm() {}
"""

THEMING_PAGE = """\
<html><body><div class="mdx"><h1>Theming</h1><p>Use CSS variables for colors.</p></div></body></html>
"""

BUTTON_SOURCE = 'import { Slot } from "@radix-ui/react-slot"\n\nexport function Button() {}\n'
BUTTON_DEMO = 'import { Button } from "@/components/ui/button"\n\nexport default function ButtonDemo() {}\n'


class Upstream:
    """Scripted upstream: full URL -> (status, body). Unrouted URLs answer 404.

    A route whose body is an exception raises it from the transport instead.
    """

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, str | Exception]] = {}
        self.requests: list[str] = []

    def add(self, url: str, body: str | Exception, status: int = 200) -> None:
        self.routes[url] = (status, body)

    def calls(self, url: str) -> int:
        return self.requests.count(url)

    def handle(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        status, body = self.routes.get(url, (404, "Not Found"))
        if isinstance(body, Exception):
            raise body
        return httpx.Response(status, text=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ═════════════════════════════════════════════════════════════════════════════
# Fixtures
# ═════════════════════════════════════════════════════════════════════════════


@pytest.fixture(autouse=True)
def log_entries() -> Iterator[MemoryRenderer]:
    """Capture log output in memory for every test."""
    renderer = MemoryRenderer()
    set_renderer(renderer)
    yield renderer
    set_renderer(None)


@pytest.fixture
def upstream() -> Upstream:
    up = Upstream()
    up.add(f"{DOCS}/components", INDEX_PAGE)
    up.add(f"{DOCS}/components/button", BUTTON_PAGE)
    up.add(f"{DOCS}/components/aspect-ratio", BARE_PAGE)
    up.add(f"{DOCS}/theming", THEMING_PAGE)
    up.add(f"{SITE}/themes", THEMES_PAGE)
    up.add(f"{RAW}/blocks/", BLOCKS_LISTING)
    up.add(f"{RAW}/blocks/login-form.tsx", LOGIN_FORM_SOURCE)
    up.add(f"{RAW}/ui/button.tsx", BUTTON_SOURCE)
    up.add(f"{RAW}/examples/button-demo.tsx", BUTTON_DEMO)
    return up


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ResponseCache:
    return ResponseCache(default_ttl=60.0, clock=clock)


@pytest.fixture
def client(upstream: Upstream) -> UpstreamClient:
    return UpstreamClient(transport=upstream.transport)


@pytest.fixture
def registry(cache: ResponseCache, client: UpstreamClient) -> Registry:
    return build_registry(cache, client)


@pytest.fixture
def dispatcher(registry: Registry) -> Dispatcher:
    return Dispatcher(registry)
