"""Registry: descriptors, URI templates and handler resolution."""

from .descriptors import (
    APPLICATION_JSON,
    TEXT_PLAIN,
    ContentResult,
    PromptArgument,
    PromptDescriptor,
    PromptHandler,
    PromptMessage,
    PromptResult,
    ResourceDescriptor,
    ResourceHandler,
    ResourceTemplateDescriptor,
    TemplateHandler,
    TextContent,
    ToolDescriptor,
    ToolHandler,
)
from .registry import PromptBinding, Registry, ResourceReader, TemplateBinding, ToolBinding
from .templates import UriTemplate

__all__ = [
    # Descriptors
    "ToolDescriptor", "ResourceDescriptor", "ResourceTemplateDescriptor", "PromptDescriptor", "PromptArgument",
    # Results
    "ContentResult", "TextContent", "PromptResult", "PromptMessage", "TEXT_PLAIN", "APPLICATION_JSON",
    # Handlers
    "ToolHandler", "ResourceHandler", "TemplateHandler", "PromptHandler",
    # Registry
    "Registry", "ToolBinding", "TemplateBinding", "PromptBinding", "ResourceReader", "UriTemplate",
]
