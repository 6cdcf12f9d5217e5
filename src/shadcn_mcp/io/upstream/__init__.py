"""HTTP access to the shadcn/ui docs site and GitHub raw content."""

from .client import (
    EXAMPLES_DIRECTORY,
    GITHUB_DIRECTORIES,
    GITHUB_RAW_URL,
    REGISTRY_ROOT,
    SHADCN_DOCS_URL,
    SHADCN_SITE_URL,
    UPSTREAM_TIMEOUT,
    USER_AGENT,
    UpstreamClient,
    block_source_path,
    component_source_paths,
    demo_source_path,
)

__all__ = [
    "UpstreamClient",
    "block_source_path",
    "component_source_paths",
    "demo_source_path",
    "SHADCN_DOCS_URL",
    "SHADCN_SITE_URL",
    "GITHUB_RAW_URL",
    "USER_AGENT",
    "UPSTREAM_TIMEOUT",
    "REGISTRY_ROOT",
    "GITHUB_DIRECTORIES",
    "EXAMPLES_DIRECTORY",
]
