"""Standardized error handling for the MCP server.

Every failure that crosses the dispatcher boundary is one of three kinds:
InvalidParams, NotFound or InternalError. Handlers raise ServerException to
report a typed failure; anything else is re-classified as InternalError.
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING, Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field

if TYPE_CHECKING:
    from pydantic import ValidationError


class ErrorCode(StrEnum):
    """Error taxonomy exposed to RPC callers."""
    INVALID_PARAMS = "INVALID_PARAMS"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    @property
    def rpc_code(self) -> int:
        """JSON-RPC numeric code for the wire error object."""
        return _RPC_CODES[self]


_RPC_CODES: dict[ErrorCode, int] = {
    ErrorCode.INVALID_PARAMS: -32602,
    ErrorCode.NOT_FOUND: -32002,
    ErrorCode.INTERNAL_ERROR: -32603,
}

# Substring -> reason label, checked in order against "<ExcType> <message>"
_PATTERN_REASONS: dict[str, str] = {
    "timeout": "timeout",
    "connect": "network",
    "network": "network",
    "status": "http_status",
    "extraction": "parse",
    "parse": "parse",
    "decode": "parse",
    "json": "parse",
    "upstream": "upstream",
}
_PATTERN_KEYS = tuple(_PATTERN_REASONS.keys())


@lru_cache(maxsize=256)
def _classify_cached(exc_key: str) -> str:
    haystack = exc_key.lower()
    for pattern in _PATTERN_KEYS:
        if pattern in haystack:
            return _PATTERN_REASONS[pattern]
    return "unexpected"


def classify_exception(exc: BaseException) -> str:
    """Label the likely cause of an untyped failure (timeout, network, parse, ...)."""
    return _classify_cached(f"{type(exc).__name__} {exc}")


def exception_message(exc: BaseException) -> str:
    """Exception text, falling back to the type name for message-less errors."""
    return str(exc) or type(exc).__name__


class ServerError(BaseModel):
    """Structured error returned to the client instead of crashing the process.

    Attributes:
        code: Error kind
        message: Human-readable message, verbatim cause text for internal errors
        target: Tool name, prompt name or resource URI the request addressed
        reason: Cause label for internal errors (see classify_exception)
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "title": "Server Error",
            "examples": [{
                "code": "NOT_FOUND",
                "message": "Tool not found: not_a_tool",
                "target": "not_a_tool",
            }],
        },
    )

    code: ErrorCode = Field(description="Error classification")
    message: Annotated[str, Field(min_length=1, description="Human-readable message")]
    target: str | None = Field(default=None, description="Addressed tool, prompt or URI")
    reason: str | None = Field(default=None, description="Cause label for internal errors")

    @computed_field
    @property
    def rpc_code(self) -> int:
        return self.code.rpc_code

    @property
    def recoverable(self) -> bool:
        """Whether the caller can succeed by retrying with corrected input."""
        return self.code is ErrorCode.INVALID_PARAMS

    @classmethod
    def create(
        cls,
        code: ErrorCode,
        message: str,
        *,
        target: str | None = None,
        reason: str | None = None,
    ) -> Self:
        return cls(code=code, message=message, target=target, reason=reason)

    @classmethod
    def from_exception(cls, exc: BaseException, *, target: str | None = None) -> Self:
        """Wrap an untyped exception as an internal error, keeping its text."""
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=exception_message(exc),
            target=target,
            reason=classify_exception(exc),
        )

    def to_error_data(self) -> dict[str, object]:
        """JSON-RPC error object (code/message/data)."""
        data: dict[str, object] = {"kind": self.code.value}
        if self.target is not None:
            data["target"] = self.target
        if self.reason is not None:
            data["reason"] = self.reason
        return {"code": self.rpc_code, "message": self.message, "data": data}

    def render(self) -> str:
        return f"[{self.code}] {self.message}"

    __str__ = render


class ServerException(Exception):
    """Exception wrapping a ServerError for raising."""

    __slots__ = ("error",)

    def __init__(self, error: ServerError) -> None:
        self.error = error
        super().__init__(error.message)

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @classmethod
    def create(
        cls,
        code: ErrorCode,
        message: str,
        *,
        target: str | None = None,
        reason: str | None = None,
    ) -> Self:
        return cls(ServerError.create(code, message, target=target, reason=reason))

    @classmethod
    def from_exc(cls, exc: BaseException, *, target: str | None = None) -> Self:
        return cls(ServerError.from_exception(exc, target=target))


def invalid_params(message: str, *, target: str | None = None) -> ServerException:
    return ServerException.create(ErrorCode.INVALID_PARAMS, message, target=target)


def not_found(kind: str, target: str) -> ServerException:
    """NotFound error, e.g. not_found("Tool", "not_a_tool")."""
    return ServerException.create(ErrorCode.NOT_FOUND, f"{kind} not found: {target}", target=target)


def internal_error(message: str, *, target: str | None = None, reason: str | None = None) -> ServerException:
    return ServerException.create(ErrorCode.INTERNAL_ERROR, message, target=target, reason=reason)


def format_validation_error(tool_name: str, exc: ValidationError) -> str:
    """Enumerate every failing field, in schema declaration order."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "arguments"
        parts.append(f"{loc}: {err['msg']}")
    return f"Invalid arguments for tool '{tool_name}': " + "; ".join(parts)


class ExtractionError(ValueError):
    """Upstream payload could not be parsed at all."""


class UpstreamError(Exception):
    """Every candidate in an upstream fallback chain failed.

    The message is the last failure's text; all failures are kept on `failures`.
    """

    def __init__(self, message: str, failures: list[tuple[str, BaseException]] | None = None) -> None:
        super().__init__(message)
        self.failures = failures or []

    @property
    def attempts(self) -> list[str]:
        return [candidate for candidate, _ in self.failures]
