"""Tests for structured logging."""

import io
from collections.abc import Iterator

import orjson
import pytest

from shadcn_mcp.runtime.observability.logging import (
    JsonRenderer,
    MemoryRenderer,
    configure_logging,
    get_logger,
    log_context,
    set_renderer,
)


@pytest.fixture(autouse=True)
def restore_level() -> Iterator[None]:
    yield
    configure_logging("none", "INFO")
    set_renderer(None)


def test_bound_context(log_entries: MemoryRenderer) -> None:
    """Test logger name, bound keys, scoped context and call keys are merged."""
    log = get_logger("tools").bind(tool="get_component")
    with log_context(method="tools/call"):
        log.info("fetching", path="ui/button.tsx")
    log.info("outside")

    inside, outside = log_entries.entries
    assert inside.context == {"method": "tools/call", "logger": "tools", "tool": "get_component", "path": "ui/button.tsx"}
    assert "method" not in outside.context


def test_level_filter() -> None:
    """Test entries below the configured level are dropped."""
    configure_logging("none", "WARNING")
    memory = MemoryRenderer()
    set_renderer(memory)

    log = get_logger("upstream")
    log.info("fetch")
    log.warning("candidate failed")

    assert memory.events() == ["candidate failed"]


def test_json_renderer() -> None:
    """Test JSON lines carry level, event and context."""
    out = io.StringIO()
    assert isinstance(configure_logging("json", "DEBUG", output=out), JsonRenderer)

    get_logger("dispatcher").debug("request handled", duration_ms=1.5)

    line = orjson.loads(out.getvalue().strip())
    assert line["level"] == "debug"
    assert line["event"] == "request handled"
    assert line["logger"] == "dispatcher"
    assert line["duration_ms"] == 1.5


def test_configure_rejects_unknown_format() -> None:
    with pytest.raises(ValueError, match="Unknown format"):
        configure_logging("xml")
