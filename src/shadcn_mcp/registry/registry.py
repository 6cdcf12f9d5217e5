"""Static tables of tools, resources, resource templates and prompts.

The registry is populated once at startup and then frozen. Resolution is a
pure lookup: no I/O, no exceptions, None on a miss. Turning a miss into a
NotFound error is the dispatcher's job.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from functools import partial

from .descriptors import (
    ContentResult,
    PromptDescriptor,
    PromptHandler,
    ResourceDescriptor,
    ResourceHandler,
    ResourceTemplateDescriptor,
    TemplateHandler,
    ToolDescriptor,
    ToolHandler,
)
from .templates import UriTemplate

ResourceReader = Callable[[], Awaitable[ContentResult]]


@dataclass(frozen=True, slots=True)
class ToolBinding:
    descriptor: ToolDescriptor
    handler: ToolHandler


@dataclass(frozen=True, slots=True)
class ResourceBinding:
    descriptor: ResourceDescriptor
    handler: ResourceHandler


@dataclass(frozen=True, slots=True)
class TemplateBinding:
    descriptor: ResourceTemplateDescriptor
    handler: TemplateHandler
    matcher: UriTemplate


@dataclass(frozen=True, slots=True)
class PromptBinding:
    descriptor: PromptDescriptor
    handler: PromptHandler


class Registry:
    """Name/URI to handler tables.

    Example:
        >>> registry = Registry()
        >>> registry.add_tool(ToolDescriptor(name="get_usage", ...), GetUsage(cache, client))
        >>> registry.add_template(ResourceTemplateDescriptor(uri_template="...?pm={pm}", ...), handler)
        >>> registry.freeze()
        >>> reader = registry.resolve_resource("resource:get_components")
        >>> result = await reader()
    """

    __slots__ = ("_tools", "_resources", "_templates", "_prompts", "_frozen")

    def __init__(self) -> None:
        self._tools: dict[str, ToolBinding] = {}
        self._resources: dict[str, ResourceBinding] = {}
        self._templates: list[TemplateBinding] = []
        self._prompts: dict[str, PromptBinding] = {}
        self._frozen = False

    # ─────────────────────────────────────────────────────────────────
    # Registration
    # ─────────────────────────────────────────────────────────────────

    def _check_open(self) -> None:
        if self._frozen:
            raise RuntimeError("Registry is frozen; register everything at startup")

    def add_tool(self, descriptor: ToolDescriptor, handler: ToolHandler) -> None:
        self._check_open()
        if descriptor.name in self._tools:
            raise ValueError(f"Tool '{descriptor.name}' already registered")
        self._tools[descriptor.name] = ToolBinding(descriptor, handler)

    def add_resource(self, descriptor: ResourceDescriptor, handler: ResourceHandler) -> None:
        self._check_open()
        if descriptor.uri in self._resources:
            raise ValueError(f"Resource '{descriptor.uri}' already registered")
        self._resources[descriptor.uri] = ResourceBinding(descriptor, handler)

    def add_template(self, descriptor: ResourceTemplateDescriptor, handler: TemplateHandler) -> None:
        """Templates are tried in the order they are added."""
        self._check_open()
        if any(t.descriptor.uri_template == descriptor.uri_template for t in self._templates):
            raise ValueError(f"Template '{descriptor.uri_template}' already registered")
        self._templates.append(TemplateBinding(descriptor, handler, UriTemplate.compile(descriptor.uri_template)))

    def add_prompt(self, descriptor: PromptDescriptor, handler: PromptHandler) -> None:
        self._check_open()
        if descriptor.name in self._prompts:
            raise ValueError(f"Prompt '{descriptor.name}' already registered")
        self._prompts[descriptor.name] = PromptBinding(descriptor, handler)

    def freeze(self) -> Registry:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ─────────────────────────────────────────────────────────────────
    # Resolution
    # ─────────────────────────────────────────────────────────────────

    def resolve_tool(self, name: str) -> ToolBinding | None:
        return self._tools.get(name)

    def resolve_resource(self, uri: str) -> ResourceReader | None:
        """Exact static match first, then templates in declaration order."""
        if (static := self._resources.get(uri)) is not None:
            return static.handler.invoke
        for binding in self._templates:
            if (params := binding.matcher.match(uri)) is not None:
                return partial(binding.handler.invoke, params)
        return None

    def resolve_prompt(self, name: str) -> PromptBinding | None:
        return self._prompts.get(name)

    # ─────────────────────────────────────────────────────────────────
    # Listing (declaration order)
    # ─────────────────────────────────────────────────────────────────

    def tools(self) -> list[ToolDescriptor]:
        return [b.descriptor for b in self._tools.values()]

    def resources(self) -> list[ResourceDescriptor]:
        return [b.descriptor for b in self._resources.values()]

    def templates(self) -> list[ResourceTemplateDescriptor]:
        return [b.descriptor for b in self._templates]

    def prompts(self) -> list[PromptDescriptor]:
        return [b.descriptor for b in self._prompts.values()]

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[ToolBinding]:
        return iter(self._tools.values())
