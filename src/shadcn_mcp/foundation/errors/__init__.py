"""Error taxonomy for the server.

- ErrorCode: InvalidParams / NotFound / InternalError
- ServerError/ServerException: structured errors and the exception carrying them
- ExtractionError/UpstreamError: failures raised below the handler layer
"""

from .errors import (
    ErrorCode,
    ExtractionError,
    ServerError,
    ServerException,
    UpstreamError,
    classify_exception,
    exception_message,
    format_validation_error,
    internal_error,
    invalid_params,
    not_found,
)

__all__ = [
    "ErrorCode", "ServerError", "ServerException", "classify_exception", "exception_message",
    "invalid_params", "not_found", "internal_error", "format_validation_error",
    "ExtractionError", "UpstreamError",
]
