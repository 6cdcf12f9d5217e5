"""Handlers for every tool, resource, resource template and prompt.

build_registry() wires them all into a frozen Registry around one shared
cache and upstream client.
"""

from __future__ import annotations

from ..io.cache import ResponseCache
from ..io.upstream import UpstreamClient
from ..registry import Registry
from .prompts import PROMPTS
from .resources import build_resources
from .templates import TEMPLATES
from .tools import NO_INSTALLATION, NO_USAGE, TOOLS


def build_registry(cache: ResponseCache, client: UpstreamClient) -> Registry:
    """Register every handler in listing order and freeze the registry."""
    registry = Registry()
    for tool_cls in TOOLS:
        registry.add_tool(tool_cls.descriptor, tool_cls(cache, client))
    for resource in build_resources(cache, client):
        registry.add_resource(resource.descriptor, resource)
    for template_cls in TEMPLATES:
        registry.add_template(template_cls.descriptor, template_cls())
    for prompt_cls in PROMPTS:
        registry.add_prompt(prompt_cls.descriptor, prompt_cls())
    return registry.freeze()


__all__ = ["build_registry", "NO_USAGE", "NO_INSTALLATION"]
