"""Static resource handlers.

`resource:get_components` serves the cached component index. The docs
resources serve the live page text and fall back to built-in text when the
page is unavailable or has no content.
"""

from __future__ import annotations

from typing import ClassVar

import httpx

from ..extract import extract_docs_text, slugify
from ..foundation.errors import ExtractionError, UpstreamError, exception_message
from ..io.cache import ResponseCache
from ..io.upstream import UpstreamClient
from ..registry import ContentResult, ResourceDescriptor
from ..runtime.observability.logging import get_logger
from .base import UpstreamHandler

log = get_logger("resources")

OVERVIEW_FALLBACK = """\
shadcn/ui is a collection of reusable components built using Radix UI and Tailwind CSS.

It's not a component library, but rather a collection of re-usable components that you can copy and paste into your apps.

The components are accessible, customizable, and open source.

To learn more, visit https://ui.shadcn.com/
"""

INSTALLATION_FALLBACK = """\
Installation instructions for shadcn/ui:

1. Create a new project (e.g., Next.js, Vite, etc.)
2. Initialize shadcn/ui:
   npx shadcn@latest init
3. Answer the prompts for your project configuration
4. Install components as needed:
   npx shadcn@latest add button

For more details, visit https://ui.shadcn.com/docs/installation
"""

THEMING_FALLBACK = """\
Theming in shadcn/ui:

shadcn/ui components use CSS variables for theming. You can customize the theme by:

1. Editing the CSS variables in your globals.css file
2. Using the provided themes or creating custom themes
3. Using the Dark Mode feature

The default theme includes light and dark modes.

For more details on theming, visit https://ui.shadcn.com/docs/theming
"""

KNOWN_COMPONENTS: tuple[str, ...] = (
    "Accordion", "Alert", "Alert Dialog", "Aspect Ratio", "Avatar", "Badge", "Button",
    "Calendar", "Card", "Carousel", "Checkbox", "Collapsible", "Command", "Context Menu",
    "Data Table", "Date Picker", "Dialog", "Drawer", "Dropdown Menu", "Form", "Hover Card",
    "Input", "Label", "Menubar", "Navigation Menu", "Pagination", "Popover", "Progress",
    "Radio Group", "Scroll Area", "Select", "Separator", "Sheet", "Skeleton", "Slider",
    "Switch", "Table", "Tabs", "Textarea", "Toast", "Toggle", "Toggle Group", "Tooltip",
)


class ComponentsResource(UpstreamHandler):
    """Component index as JSON, shared with list_shadcn_components."""

    descriptor: ClassVar[ResourceDescriptor] = ResourceDescriptor(
        uri="resource:get_components",
        name="get_components",
        description="List of components provided by shadcn/ui",
        mime_type="application/json",
    )

    async def invoke(self) -> ContentResult:
        return ContentResult.from_json(await self._component_list())


class DocsResource:
    """Docs page text for a topic, with built-in fallback text."""

    __slots__ = ("descriptor", "topic", "fallback", "cache", "client")

    def __init__(
        self,
        descriptor: ResourceDescriptor,
        topic: str,
        fallback: str,
        cache: ResponseCache,
        client: UpstreamClient,
    ) -> None:
        self.descriptor = descriptor
        self.topic = slugify(topic)
        self.fallback = fallback
        self.cache = cache
        self.client = client

    async def invoke(self) -> ContentResult:
        return ContentResult.from_text(await self.text())

    async def text(self) -> str:
        """Live docs text, or the fallback. Only live text is cached."""
        async def fetch() -> str:
            candidates = (f"/components/{self.topic}", f"/{self.topic}")
            return extract_docs_text(await self.client.first_success(candidates, self.client.fetch_docs))

        key = f"docs:{self.topic}"
        try:
            text = await self.cache.get_or_fetch(key, fetch)
        except (httpx.HTTPError, UpstreamError, ExtractionError) as e:
            log.warning("docs unavailable, using fallback", topic=self.topic, error=exception_message(e))
            return self.fallback
        if not text:
            self.cache.delete(key)
            return self.fallback
        return text


class StaticTextResource:
    __slots__ = ("descriptor", "body")

    def __init__(self, descriptor: ResourceDescriptor, body: str) -> None:
        self.descriptor = descriptor
        self.body = body

    async def invoke(self) -> ContentResult:
        return ContentResult.from_text(self.body, self.descriptor.mime_type)


def component_list_text() -> str:
    lines = "\n".join(f"- {name}" for name in KNOWN_COMPONENTS)
    return (
        f"Available shadcn/ui components:\n\n{lines}\n\n"
        "For details on each component, use the get_component_details tool.\n"
    )


def build_resources(cache: ResponseCache, client: UpstreamClient) -> list[ComponentsResource | DocsResource | StaticTextResource]:
    """Static resource handlers in listing order."""
    def docs(name: str, description: str, topic: str, fallback: str) -> DocsResource:
        return DocsResource(ResourceDescriptor(uri=f"resource:{name}", name=name, description=description),
                            topic, fallback, cache, client)

    return [
        ComponentsResource(cache, client),
        docs("shadcn-ui-overview", "Overview of shadcn/ui component library", "getting-started", OVERVIEW_FALLBACK),
        docs("shadcn-ui-installation", "Installation instructions for shadcn/ui", "installation", INSTALLATION_FALLBACK),
        StaticTextResource(
            ResourceDescriptor(
                uri="resource:shadcn-ui-component-list",
                name="shadcn-ui-component-list",
                description="List of available shadcn/ui components",
            ),
            component_list_text(),
        ),
        docs("shadcn-ui-theming", "Theming information for shadcn/ui", "theming", THEMING_FALLBACK),
    ]
