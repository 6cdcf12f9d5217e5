"""Request dispatcher: the one seam between decoded RPC requests and handlers.

Every failure leaves here as a ServerException of one of three kinds:
    NotFound       unknown tool / prompt / resource URI
    InvalidParams  arguments rejected by the tool's params model, or a
                   missing required prompt argument
    InternalError  anything else a handler raised, message kept verbatim

Typed ServerExceptions raised by handlers pass through unchanged.

Example:
    >>> dispatcher = Dispatcher(build_registry(cache, client))
    >>> result = await dispatcher.call_tool("get_usage", {"componentName": "button"})
    >>> result["content"][0]["text"]
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Iterator, Mapping
from contextlib import contextmanager
from typing import TypeVar

from pydantic import ValidationError

from ..foundation.errors import (
    ServerException,
    format_validation_error,
    invalid_params,
    not_found,
)
from ..registry import ContentResult, Registry
from ..runtime.observability.logging import get_logger, log_context

T = TypeVar("T")
JsonDict = dict[str, object]

log = get_logger("dispatcher")


class Dispatcher:
    """Stateless request router over a frozen Registry."""

    __slots__ = ("_registry",)

    def __init__(self, registry: Registry) -> None:
        self._registry = registry

    @property
    def registry(self) -> Registry:
        return self._registry

    # ─────────────────────────────────────────────────────────────────
    # Listing
    # ─────────────────────────────────────────────────────────────────

    def list_resources(self) -> JsonDict:
        return {"resources": [d.to_wire() for d in self._registry.resources()]}

    def list_resource_templates(self) -> JsonDict:
        return {"resourceTemplates": [d.to_wire() for d in self._registry.templates()]}

    def list_tools(self) -> JsonDict:
        return {"tools": [d.to_wire() for d in self._registry.tools()]}

    def list_prompts(self) -> JsonDict:
        return {"prompts": [d.to_wire() for d in self._registry.prompts()]}

    # ─────────────────────────────────────────────────────────────────
    # Invocation
    # ─────────────────────────────────────────────────────────────────

    async def read_resource(self, uri: str) -> JsonDict:
        with _request("resources/read", uri):
            reader = self._registry.resolve_resource(uri)
            if reader is None:
                raise not_found("Resource", uri)
            result = await _guard(reader(), uri)
            return {
                "contents": [
                    {"uri": uri, "mimeType": block.mime_type, "text": block.text}
                    for block in result.content
                ],
            }

    async def get_prompt(self, name: str, arguments: Mapping[str, str] | None = None) -> JsonDict:
        with _request("prompts/get", name):
            binding = self._registry.resolve_prompt(name)
            if binding is None:
                raise not_found("Prompt", name)
            args = dict(arguments or {})
            if missing := [a for a in binding.descriptor.required_arguments if not args.get(a)]:
                raise invalid_params(
                    f"Missing required arguments for prompt '{name}': {', '.join(missing)}", target=name,
                )
            result = await _guard(binding.handler.invoke(args), name)
            return result.to_wire()

    async def call_tool(self, name: str, arguments: Mapping[str, object] | None = None) -> JsonDict:
        with _request("tools/call", name):
            binding = self._registry.resolve_tool(name)
            if binding is None:
                raise not_found("Tool", name)

            schema = binding.descriptor.params_schema
            params = None
            if schema is not None:
                try:
                    params = schema.model_validate(dict(arguments or {}))
                except ValidationError as e:
                    raise invalid_params(format_validation_error(name, e), target=name) from e

            result: ContentResult = await _guard(binding.handler.invoke(params), name)
            return result.to_wire()


async def _guard(awaitable: Awaitable[T], target: str) -> T:
    """Await a handler, re-classifying untyped failures as InternalError."""
    try:
        return await awaitable
    except ServerException:
        raise
    except Exception as e:
        raise ServerException.from_exc(e, target=target) from e


@contextmanager
def _request(method: str, target: str) -> Iterator[None]:
    """Log one request with its duration, and its error code on failure."""
    start = time.perf_counter()
    with log_context(method=method, target=target):
        try:
            yield
        except ServerException as e:
            err = e.error
            extra = {"reason": err.reason} if err.reason is not None else {}
            emit = log.error if err.reason is not None else log.warning
            emit("request failed", code=str(err.code), message=err.message, duration_ms=_elapsed(start), **extra)
            raise
        log.info("request handled", duration_ms=_elapsed(start))


def _elapsed(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)
