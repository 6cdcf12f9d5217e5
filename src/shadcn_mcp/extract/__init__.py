"""Content extractors: upstream HTML / source text to normalized records."""

from .filters import filter_blocks, filter_components, filter_themes
from .html import (
    component_url,
    extract_component_examples,
    extract_component_info,
    extract_component_list,
    extract_docs_text,
    extract_themes,
    parse_html,
    slugify,
)
from .models import Block, ComponentExample, ComponentInfo, ComponentProp, Record, Theme
from .source import (
    NO_CONFIG,
    block_name,
    extract_block_listing,
    extract_config,
    extract_dependencies,
    extract_hooks,
)

__all__ = [
    # Records
    "Record", "ComponentInfo", "ComponentProp", "ComponentExample", "Theme", "Block",
    # HTML
    "parse_html", "component_url", "slugify",
    "extract_component_info", "extract_component_list", "extract_component_examples",
    "extract_themes", "extract_docs_text",
    # Source
    "block_name", "extract_block_listing", "extract_dependencies", "extract_config", "extract_hooks", "NO_CONFIG",
    # Filters
    "filter_components", "filter_themes", "filter_blocks",
]
