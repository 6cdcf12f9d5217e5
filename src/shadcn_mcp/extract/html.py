"""HTML extractors for shadcn/ui documentation pages.

Pure functions: one page in, normalized records out. Missing optional data
yields absent fields, never an exception. ExtractionError is raised only when
the payload is not a usable document at all.

Page shape relied on:
    h1                      component title
    h1 + p                  description
    h2 "Installation" ~ pre install command
    h2 "Usage" ~ pre        usage snippets
    h2 "Examples" ~ h3      variants, code in the following .tabs-content
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

from ..foundation.errors import ExtractionError
from ..io.upstream import SHADCN_SITE_URL
from .models import ComponentExample, ComponentInfo, ComponentProp, Theme

GITHUB_TREE_URL = "https://github.com/shadcn-ui/ui/tree/main/apps/v4/registry/new-york-v4/ui"
COMPONENT_HREF_PREFIX = "/docs/components/"
_HEADINGS = ("h1", "h2", "h3")


def parse_html(html: object) -> BeautifulSoup:
    """Parse a page, rejecting payloads that are not an HTML string."""
    if not isinstance(html, str):
        raise ExtractionError(f"Expected HTML text, got {type(html).__name__}")
    if not html.strip():
        raise ExtractionError("Empty HTML document")
    return BeautifulSoup(html, "html.parser")


def component_url(name: str) -> str:
    return f"{SHADCN_SITE_URL}{COMPONENT_HREF_PREFIX}{name}"


def slugify(text: str) -> str:
    return re.sub(r"\s+", "-", text.strip().lower())


# ─────────────────────────────────────────────────────────────────────────────
# Section helpers
# ─────────────────────────────────────────────────────────────────────────────


def _text(el: Tag | None) -> str:
    return el.get_text().strip() if el is not None else ""


def _section(soup: BeautifulSoup, title: str) -> Tag | None:
    """First h2 whose text is exactly title."""
    return next((h for h in soup.find_all("h2") if _text(h) == title), None)


def _section_siblings(heading: Tag, name: str | tuple[str, ...]) -> list[Tag]:
    """Following siblings matching name, up to the next h2."""
    found = []
    for sib in heading.find_next_siblings():
        if sib.name == "h2":
            break
        if sib.name == name or (isinstance(name, tuple) and sib.name in name):
            found.append(sib)
    return found


def _description(soup: BeautifulSoup) -> str:
    h1 = soup.find("h1")
    if h1 is None:
        return ""
    para = h1.find_next_sibling()
    if para is None or para.name != "p":
        return ""
    for script in para.find_all("script"):
        script.decompose()
    return _text(para)


def _installation(soup: BeautifulSoup) -> str:
    if (heading := _section(soup, "Installation")) is None:
        return ""
    return _text(heading.find_next_sibling("pre"))


def _usage(soup: BeautifulSoup) -> str:
    if (heading := _section(soup, "Usage")) is None:
        return ""
    blocks = [_text(pre) for pre in _section_siblings(heading, "pre")]
    return "\n\n".join(b for b in blocks if b)


def _variants(soup: BeautifulSoup, name: str) -> dict[str, ComponentProp]:
    if (heading := _section(soup, "Examples")) is None:
        return {}
    props: dict[str, ComponentProp] = {}
    for h3 in _section_siblings(heading, "h3"):
        variant = _text(h3)
        if not variant:
            continue
        tabs = h3.find_next_sibling(class_="tabs-content")
        example = _text(tabs.find("pre")) if tabs is not None else ""
        props[variant] = ComponentProp(
            type="variant",
            description=f"{variant} variant of the {name} component",
            required=False,
            example=example or None,
        )
    return props


# ─────────────────────────────────────────────────────────────────────────────
# Extractors
# ─────────────────────────────────────────────────────────────────────────────


def extract_component_info(html: str, name: str, url: str | None = None) -> ComponentInfo:
    """Component details from its docs page."""
    soup = parse_html(html)
    props = _variants(soup, name)
    return ComponentInfo(
        name=name,
        description=_description(soup),
        url=url or component_url(name),
        source_url=f"{GITHUB_TREE_URL}/{name}.tsx",
        installation=_installation(soup) or None,
        usage=_usage(soup) or None,
        props=props or None,
    )


def extract_component_list(html: str) -> list[ComponentInfo]:
    """Components linked from the docs index, in page order without duplicates."""
    soup = parse_html(html)
    seen: set[str] = set()
    components = []
    for link in soup.find_all("a", href=True):
        href = str(link["href"]).split("#", 1)[0].rstrip("/")
        if not href.startswith(COMPONENT_HREF_PREFIX):
            continue
        name = href.rsplit("/", 1)[-1]
        if not name or name in seen:
            continue
        seen.add(name)
        components.append(ComponentInfo(name=name, description="", url=f"{SHADCN_SITE_URL}{href}"))
    return components


def _nearest_heading(pre: Tag) -> Tag | None:
    for sib in pre.find_previous_siblings():
        if sib.name in _HEADINGS:
            return sib if sib.name != "h1" else None
    return None


def _general_examples(soup: BeautifulSoup) -> list[ComponentExample]:
    examples = []
    for i, pre in enumerate(soup.find_all("pre")):
        if not (code := _text(pre)):
            continue
        heading = _nearest_heading(pre)
        title = _text(heading) if heading is not None else ""
        examples.append(ComponentExample(
            title=title or f"Code Example {i + 1}",
            code=code,
            description=f"{title} example" if title else "Code example",
        ))
    return examples


def _section_examples(soup: BeautifulSoup, section: str, description: str) -> list[ComponentExample]:
    if (heading := _section(soup, section)) is None:
        return []
    examples = []
    for i, pre in enumerate(_section_siblings(heading, "pre")):
        if code := _text(pre):
            examples.append(ComponentExample(title=f"{section} Example {i + 1}", code=code, description=description))
    return examples


def extract_component_examples(html: str) -> list[ComponentExample]:
    """Every code block on the page, then the Usage and Link section examples."""
    soup = parse_html(html)
    return [
        *_general_examples(soup),
        *_section_examples(soup, "Usage", "Basic usage example"),
        *_section_examples(soup, "Link", "Link usage example"),
    ]


def extract_themes(html: str) -> list[Theme]:
    """Theme cards from the themes page."""
    soup = parse_html(html)
    themes = []
    for card in soup.select(".grid-cols-1"):
        heading = card.find("h3")
        if not (name := _text(heading)):
            continue
        para = heading.find_next_sibling()
        img = card.find("img", src=True)
        author = card.select_one('a[href^="https://github.com/"]')
        themes.append(Theme(
            name=name,
            description=_text(para) if para is not None and para.name == "p" else "",
            url=f"{SHADCN_SITE_URL}/themes#{slugify(name)}",
            preview=str(img["src"]) if img is not None else None,
            author=_text(author) or None,
        ))
    return themes


def extract_docs_text(html: str) -> str:
    """Plain text of the page's .mdx content blocks ("" when there are none)."""
    soup = parse_html(html)
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    parts = [el.get_text("\n", strip=True) for el in soup.select(".mdx")]
    return "\n\n".join(p for p in parts if p)
