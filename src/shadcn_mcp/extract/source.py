"""Extractors over raw source text and repository listings."""

from __future__ import annotations

import re

from ..foundation.errors import ExtractionError
from .html import parse_html
from .models import Block

_IMPORT_RE = re.compile(r"""import\s+{([^}]+)}\s+from\s+['"]([^'"]+)['"]""")
_CONFIG_RE = re.compile(r"```(?:js|jsx|ts|tsx)[\s\S]*?(const\s+config[\s\S]*?)```")
_HOOK_RE = re.compile(r"\buse[A-Z][a-zA-Z]*")

NO_CONFIG = "No configuration code found in usage instructions."
BLOCK_CODE_PLACEHOLDER = "// Code will be fetched when block is requested"


def extract_dependencies(source: str) -> list[str]:
    """Non-relative modules named in `import { ... } from "..."` statements, first-seen order."""
    if not isinstance(source, str):
        raise ExtractionError(f"Expected source text, got {type(source).__name__}")
    deps = [m.group(2) for m in _IMPORT_RE.finditer(source) if not m.group(2).startswith(".")]
    return list(dict.fromkeys(deps))


def extract_config(usage: str) -> str:
    """First `const config ...` snippet inside a fenced JS/TS block."""
    if usage and (match := _CONFIG_RE.search(usage)):
        return match.group(1).strip()
    return NO_CONFIG


def extract_hooks(usage: str) -> list[str]:
    """React hook names (useXxx) mentioned in usage text, deduplicated."""
    return list(dict.fromkeys(_HOOK_RE.findall(usage or "")))


def block_name(filename: str) -> str:
    """Display name for a listing entry: "login-form.tsx" becomes "Login form"."""
    name = filename.rsplit("/", 1)[-1].removesuffix(".tsx").replace("-", " ")
    return name[:1].upper() + name[1:]


def extract_block_listing(html: str) -> list[Block]:
    """Blocks from a repository directory listing (links to .tsx files)."""
    soup = parse_html(html)
    blocks = []
    for link in soup.find_all("a", href=True):
        href = str(link["href"])
        if not href.endswith(".tsx"):
            continue
        name = block_name(href)
        blocks.append(Block(
            name=name,
            description=f"UI block for {name.lower()}",
            code=BLOCK_CODE_PLACEHOLDER,
            dependencies=[],
        ))
    return blocks
