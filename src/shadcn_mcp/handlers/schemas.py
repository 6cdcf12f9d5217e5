"""Parameter models for the tools.

Field aliases are the camelCase names clients send; the JSON schema and
validation error locations use them too. Unknown keys are ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class ToolParams(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
    )


class ComponentParams(ToolParams):
    """Parameters for tools addressing a single component."""

    component_name: StrictStr = Field(
        ...,
        alias="componentName",
        min_length=1,
        description='Name of the shadcn/ui component (e.g., "accordion", "button")',
    )


class SearchParams(ToolParams):
    query: StrictStr = Field(..., min_length=1, description="Search query to find relevant components")


class ThemeParams(ToolParams):
    query: StrictStr | None = Field(default=None, description="Optional search query to filter themes")


class BlockParams(ToolParams):
    query: StrictStr | None = Field(default=None, description="Optional search query to filter blocks")
    category: StrictStr | None = Field(default=None, description="Category of blocks to filter by")


class BlockDetailsParams(ToolParams):
    block_name: StrictStr = Field(
        ...,
        alias="blockName",
        min_length=1,
        description='Name of the block as listed by get_blocks (e.g., "Login form", "sidebar-07")',
    )
