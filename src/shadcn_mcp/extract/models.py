"""Normalized records produced by the content extractors.

Required text fields default to "" and optional fields to None; dumps use
camelCase keys and leave out unset optional fields.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """Base for extracted records: camelCase on the wire, absent instead of null."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def dump(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ComponentProp(Record):
    """A documented property or variant of a component."""

    type: str
    description: str = ""
    required: bool = False
    default: str | None = None
    example: str | None = None


class ComponentExample(Record):
    """A code example lifted from the docs page or the repository."""

    title: str
    code: str
    description: str | None = None


class ComponentInfo(Record):
    """Component summary scraped from its documentation page."""

    name: str
    description: str = ""
    url: str = ""
    source_url: str | None = None
    api_reference: str | None = None
    installation: str | None = None
    usage: str | None = None
    props: dict[str, ComponentProp] | None = None
    examples: list[ComponentExample] | None = None


class Theme(Record):
    name: str
    description: str = ""
    url: str = ""
    preview: str | None = None
    author: str | None = None


class Block(Record):
    """Reusable UI block from the repository listing."""

    name: str
    description: str = ""
    code: str = ""
    preview: str | None = None
    dependencies: list[str] | None = Field(default=None)
