"""Descriptor records, handler protocols and result shapes.

Descriptors are frozen pydantic models built once at startup. Their wire
form (to_wire) is what the list_* RPCs return, with camelCase keys.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Literal, Protocol, Self, runtime_checkable

import orjson
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Role = Literal["user", "assistant"]
TEXT_PLAIN = "text/plain"
APPLICATION_JSON = "application/json"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# ─────────────────────────────────────────────────────────────────────────────
# Results
# ─────────────────────────────────────────────────────────────────────────────


class TextContent(_Frozen):
    """A text content block. mime_type is used for resource contents only."""

    type: Literal["text"] = "text"
    text: str
    mime_type: str = TEXT_PLAIN

    def to_wire(self) -> dict[str, object]:
        return {"type": self.type, "text": self.text}


class ContentResult(_Frozen):
    """Single return shape of every tool and resource handler."""

    content: tuple[TextContent, ...] = Field(min_length=1)

    @classmethod
    def from_text(cls, text: str, mime_type: str = TEXT_PLAIN) -> Self:
        return cls(content=(TextContent(text=text, mime_type=mime_type),))

    @classmethod
    def from_json(cls, data: object) -> Self:
        """Pretty-printed JSON text block."""
        return cls.from_text(orjson.dumps(data, option=orjson.OPT_INDENT_2, default=_dump_default).decode(), APPLICATION_JSON)

    @property
    def first_text(self) -> str:
        return self.content[0].text

    def to_wire(self) -> dict[str, object]:
        return {"content": [block.to_wire() for block in self.content]}


def _dump_default(obj: object) -> object:
    if isinstance(obj, BaseModel):
        dump = getattr(obj, "dump", None)
        return dump() if callable(dump) else obj.model_dump(by_alias=True, exclude_none=True)
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


class PromptMessage(_Frozen):
    role: Role = "user"
    content: TextContent

    def to_wire(self) -> dict[str, object]:
        return {"role": self.role, "content": self.content.to_wire()}


class PromptResult(_Frozen):
    description: str | None = None
    messages: tuple[PromptMessage, ...]

    @classmethod
    def user(cls, text: str, description: str | None = None) -> Self:
        return cls(description=description, messages=(PromptMessage(role="user", content=TextContent(text=text)),))

    def to_wire(self) -> dict[str, object]:
        wire: dict[str, object] = {"messages": [m.to_wire() for m in self.messages]}
        if self.description is not None:
            wire["description"] = self.description
        return wire


# ─────────────────────────────────────────────────────────────────────────────
# Descriptors
# ─────────────────────────────────────────────────────────────────────────────


class ToolDescriptor(_Frozen):
    """Tool metadata with its parameter model attached.

    The wire inputSchema is derived from params_schema, so validation and the
    advertised schema cannot drift apart.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(min_length=1)
    description: str = Field(min_length=10)
    params_schema: type[BaseModel] | None = None

    def input_schema(self) -> dict[str, object]:
        """JSON schema for the params model with pydantic titles stripped."""
        if self.params_schema is None:
            return {"type": "object", "properties": {}}
        schema = self.params_schema.model_json_schema()
        schema.pop("title", None)
        schema.pop("$defs", None)
        schema.pop("definitions", None)
        schema["properties"] = {
            name: {k: v for k, v in prop.items() if k != "title"}
            for name, prop in schema.get("properties", {}).items()
        }
        return schema

    def to_wire(self) -> dict[str, object]:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema()}


class ResourceDescriptor(_Frozen):
    uri: str
    name: str
    description: str = ""
    mime_type: str = TEXT_PLAIN

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


class ResourceTemplateDescriptor(_Frozen):
    uri_template: str
    name: str
    description: str = ""
    mime_type: str = TEXT_PLAIN

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


class PromptArgument(_Frozen):
    name: str
    description: str = ""
    required: bool = False


class PromptDescriptor(_Frozen):
    name: str
    description: str = ""
    arguments: tuple[PromptArgument, ...] = ()

    @property
    def required_arguments(self) -> list[str]:
        return [a.name for a in self.arguments if a.required]

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


# ─────────────────────────────────────────────────────────────────────────────
# Handler protocols
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class ToolHandler(Protocol):
    """Receives the validated params model (or None for schema-less tools)."""

    async def invoke(self, params: BaseModel | None) -> ContentResult: ...


@runtime_checkable
class ResourceHandler(Protocol):
    async def invoke(self) -> ContentResult: ...


@runtime_checkable
class TemplateHandler(Protocol):
    """Receives the parameters extracted from the URI; absent ones are None."""

    async def invoke(self, params: Mapping[str, str | None]) -> ContentResult: ...


@runtime_checkable
class PromptHandler(Protocol):
    async def invoke(self, arguments: Mapping[str, str]) -> PromptResult: ...
