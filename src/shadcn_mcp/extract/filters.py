"""Case-insensitive substring filters over extracted records."""

from __future__ import annotations

from collections.abc import Sequence

from .models import Block, ComponentInfo, Theme


def _contains(haystack: str | None, needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()  # type: ignore[union-attr]


def filter_components(components: Sequence[ComponentInfo], query: str) -> list[ComponentInfo]:
    """Components whose name or description contains query."""
    q = query.strip().lower()
    if not q:
        return list(components)
    return [c for c in components if _contains(c.name, q) or _contains(c.description, q)]


def filter_themes(themes: Sequence[Theme], query: str | None = None) -> list[Theme]:
    if not query:
        return list(themes)
    q = query.lower()
    return [t for t in themes if _contains(t.name, q) or _contains(t.description, q) or _contains(t.author, q)]


def filter_blocks(blocks: Sequence[Block], query: str | None = None, category: str | None = None) -> list[Block]:
    """Apply query (name/description) then category (name/dependencies)."""
    filtered = list(blocks)
    if query:
        q = query.lower()
        filtered = [b for b in filtered if _contains(b.name, q) or _contains(b.description, q)]
    if category:
        c = category.lower()
        filtered = [b for b in filtered if _contains(b.name, c) or any(_contains(d, c) for d in b.dependencies or ())]
    return filtered
