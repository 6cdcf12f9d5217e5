"""Tool handlers.

Each handler class carries its descriptor (name, description, params model)
and implements `async invoke(params) -> ContentResult`. Handlers share one
ResponseCache and one UpstreamClient, injected at construction.

Cache keys:
    page:{name}        docs page HTML for a component
    component:{name}   extracted ComponentInfo
    examples:{name}    extracted examples (docs + GitHub demo)
    source:{name}      component source
    demo:{name}        demo source
    components:list    component index
    themes:all         theme list (unfiltered)
    blocks:all         block list (unfiltered)
    block:{slug}       block source with its dependencies
"""

from __future__ import annotations

from typing import ClassVar

import httpx

from ..extract import (
    Block,
    ComponentExample,
    Theme,
    extract_block_listing,
    extract_component_examples,
    extract_config,
    extract_dependencies,
    extract_hooks,
    extract_themes,
    filter_blocks,
    filter_components,
    filter_themes,
    slugify,
)
from ..foundation.errors import ExtractionError, exception_message, not_found
from ..io.upstream import (
    REGISTRY_ROOT,
    SHADCN_SITE_URL,
    block_source_path,
    component_source_paths,
    demo_source_path,
)
from ..registry import ContentResult, ToolDescriptor
from ..runtime.observability.logging import get_logger
from .base import UpstreamHandler
from .schemas import BlockDetailsParams, BlockParams, ComponentParams, SearchParams, ThemeParams

NO_USAGE = "No usage instructions available for this component."
NO_INSTALLATION = "No installation instructions available."
BLOCKS_LISTING_PATH = f"{REGISTRY_ROOT}/blocks/"

log = get_logger("tools")


class UpstreamTool(UpstreamHandler):
    """Base for tool handlers; subclasses set descriptor."""

    descriptor: ClassVar[ToolDescriptor]

    @property
    def name(self) -> str:
        return self.descriptor.name


# ─────────────────────────────────────────────────────────────────────────────
# Source
# ─────────────────────────────────────────────────────────────────────────────


class GetComponent(UpstreamTool):
    descriptor: ClassVar[ToolDescriptor] = ToolDescriptor(
        name="get_component",
        description="Get the source code for a specific shadcn/ui v4 component",
        params_schema=ComponentParams,
    )

    async def invoke(self, params: ComponentParams) -> ContentResult:
        name = slugify(params.component_name)

        async def fetch() -> str:
            return await self.client.first_success(component_source_paths(name), self.client.fetch_source)

        return ContentResult.from_text(await self.cache.get_or_fetch(f"source:{name}", fetch))


class GetComponentDemo(UpstreamTool):
    descriptor: ClassVar[ToolDescriptor] = ToolDescriptor(
        name="get_component_demo",
        description="Get demo code illustrating how a shadcn/ui v4 component should be used",
        params_schema=ComponentParams,
    )

    async def invoke(self, params: ComponentParams) -> ContentResult:
        name = slugify(params.component_name)

        async def fetch() -> str:
            return await self.client.fetch_source(demo_source_path(name))

        return ContentResult.from_text(await self.cache.get_or_fetch(f"demo:{name}", fetch))


# ─────────────────────────────────────────────────────────────────────────────
# Docs
# ─────────────────────────────────────────────────────────────────────────────


class ListComponents(UpstreamTool):
    descriptor: ClassVar[ToolDescriptor] = ToolDescriptor(
        name="list_shadcn_components",
        description="Get a list of all available shadcn/ui components",
    )

    async def invoke(self, params: None = None) -> ContentResult:
        return ContentResult.from_json(await self._component_list())


class GetComponentDetails(UpstreamTool):
    descriptor: ClassVar[ToolDescriptor] = ToolDescriptor(
        name="get_component_details",
        description="Get detailed information about a specific shadcn/ui component",
        params_schema=ComponentParams,
    )

    async def invoke(self, params: ComponentParams) -> ContentResult:
        return ContentResult.from_json(await self._component_details(slugify(params.component_name)))


class GetExamples(UpstreamTool):
    """Docs page code blocks plus the repository demo, when one exists."""

    descriptor: ClassVar[ToolDescriptor] = ToolDescriptor(
        name="get_examples",
        description="Get usage examples for a specific shadcn/ui component",
        params_schema=ComponentParams,
    )

    async def invoke(self, params: ComponentParams) -> ContentResult:
        name = slugify(params.component_name)

        async def fetch() -> list[ComponentExample]:
            examples = extract_component_examples(await self._docs_page(name))
            if demo := await self._demo(name):
                examples.append(ComponentExample(title="GitHub Demo Example", code=demo))
            return examples

        return ContentResult.from_json(await self.cache.get_or_fetch(f"examples:{name}", fetch))

    async def _demo(self, name: str) -> str | None:
        try:
            return await self.client.fetch_source(demo_source_path(name))
        except httpx.HTTPError as e:
            log.warning("demo unavailable", component=name, error=exception_message(e))
            return None


class GetUsage(UpstreamTool):
    descriptor: ClassVar[ToolDescriptor] = ToolDescriptor(
        name="get_usage",
        description="Get usage instructions for a specific shadcn/ui component",
        params_schema=ComponentParams,
    )

    async def invoke(self, params: ComponentParams) -> ContentResult:
        info = await self._component_details(slugify(params.component_name))
        return ContentResult.from_text(info.usage or NO_USAGE)


class SearchComponents(UpstreamTool):
    descriptor: ClassVar[ToolDescriptor] = ToolDescriptor(
        name="search_components",
        description="Search for shadcn/ui components by name or description",
        params_schema=SearchParams,
    )

    async def invoke(self, params: SearchParams) -> ContentResult:
        return ContentResult.from_json(filter_components(await self._component_list(), params.query))


class GetComponentConfig(UpstreamTool):
    """Installation command, config snippet and hooks derived from the docs page."""

    descriptor: ClassVar[ToolDescriptor] = ToolDescriptor(
        name="get_component_config",
        description="Get installation and configuration details for a shadcn/ui component",
        params_schema=ComponentParams,
    )

    async def invoke(self, params: ComponentParams) -> ContentResult:
        info = await self._component_details(slugify(params.component_name))
        usage = info.usage or ""
        return ContentResult.from_json({
            "installation": info.installation or NO_INSTALLATION,
            "config": extract_config(usage),
            "hooks": extract_hooks(usage),
        })


# ─────────────────────────────────────────────────────────────────────────────
# Themes & blocks (upstream failure yields an empty list)
# ─────────────────────────────────────────────────────────────────────────────


class GetThemes(UpstreamTool):
    descriptor: ClassVar[ToolDescriptor] = ToolDescriptor(
        name="get_themes",
        description="Get available shadcn/ui themes, optionally filtered by a query",
        params_schema=ThemeParams,
    )

    async def invoke(self, params: ThemeParams) -> ContentResult:
        async def fetch() -> list[Theme]:
            return extract_themes(await self.client.fetch_docs(f"{SHADCN_SITE_URL}/themes"))

        try:
            themes = await self.cache.get_or_fetch("themes:all", fetch)
        except (httpx.HTTPError, ExtractionError) as e:
            log.warning("themes unavailable", error=exception_message(e))
            themes = []
        return ContentResult.from_json(filter_themes(themes, params.query))


class GetBlocks(UpstreamTool):
    descriptor: ClassVar[ToolDescriptor] = ToolDescriptor(
        name="get_blocks",
        description="Get reusable UI blocks from shadcn/ui, optionally filtered by query and category",
        params_schema=BlockParams,
    )

    async def invoke(self, params: BlockParams) -> ContentResult:
        async def fetch() -> list[Block]:
            return extract_block_listing(await self.client.fetch_source(BLOCKS_LISTING_PATH))

        try:
            blocks = await self.cache.get_or_fetch("blocks:all", fetch)
        except (httpx.HTTPError, ExtractionError) as e:
            log.warning("blocks unavailable", error=exception_message(e))
            blocks = []
        return ContentResult.from_json(filter_blocks(blocks, params.query, params.category))


class GetBlockDetails(UpstreamTool):
    descriptor: ClassVar[ToolDescriptor] = ToolDescriptor(
        name="get_block_details",
        description="Get the source code and dependencies of a specific shadcn/ui block",
        params_schema=BlockDetailsParams,
    )

    async def invoke(self, params: BlockDetailsParams) -> ContentResult:
        slug = slugify(params.block_name)

        async def fetch() -> Block:
            source = await self.client.fetch_source(block_source_path(slug))
            return Block(
                name=params.block_name,
                description=f"UI block for {params.block_name.lower()}",
                code=source,
                dependencies=extract_dependencies(source),
            )

        try:
            block = await self.cache.get_or_fetch(f"block:{slug}", fetch)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise not_found("Block", params.block_name) from e
            raise
        return ContentResult.from_json(block)


TOOLS: tuple[type[UpstreamTool], ...] = (
    GetComponent,
    GetComponentDemo,
    ListComponents,
    GetComponentDetails,
    GetExamples,
    GetUsage,
    SearchComponents,
    GetThemes,
    GetBlocks,
    GetBlockDetails,
    GetComponentConfig,
)
