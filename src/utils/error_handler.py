"""Error handling utilities and custom exceptions."""

from __future__ import annotations

from typing import Any

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..models.error_response import ErrorResponse


class ChatError(Exception):
    """Base class for failures raised while answering a chat message.

    Subclasses set the HTTP status the API answers with.  ``kind`` is a
    short machine readable category, ``upstream_status`` and ``details``
    carry whatever an external service returned.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    kind: str | None = None

    def __init__(
        self,
        message: str,
        *,
        kind: str | None = None,
        upstream_status: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        self.upstream_status = upstream_status
        self.details = details

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error=self.message,
            kind=self.kind,
            status=self.upstream_status,
            details=self.details,
        )


class ValidationError(ChatError):
    """The request itself is unusable, e.g. the message is blank."""

    status_code = status.HTTP_400_BAD_REQUEST
    kind = "validation"


class ConfigurationError(ChatError):
    """A credential required to answer requests is missing."""

    kind = "configuration"


class RetrievalError(ChatError):
    """The lookup service failed.  Never surfaced to API clients."""

    status_code = status.HTTP_502_BAD_GATEWAY
    kind = "retrieval"


class CompletionError(ChatError):
    """The completion service failed or answered with an unusable payload."""

    kind = "upstream error"

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.status_code = self._resolve_status()

    def _resolve_status(self) -> int:
        if self.kind == "timeout":
            return status.HTTP_504_GATEWAY_TIMEOUT
        if self.upstream_status is not None and self.upstream_status >= 500:
            return self.upstream_status
        return status.HTTP_502_BAD_GATEWAY


def _error_json(status_code: int, payload: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(payload, exclude_none=True),
    )


async def chat_error_handler(request: Request, exc: ChatError) -> JSONResponse:
    """Convert a ChatError into its structured HTTP response."""
    if exc.status_code >= 500:
        logger.error("{} on {}: {}", type(exc).__name__, request.url.path, exc.message)
    else:
        logger.info("{} on {}: {}", type(exc).__name__, request.url.path, exc.message)
    return _error_json(exc.status_code, exc.to_response())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed request bodies with a 400 instead of FastAPI's 422."""
    logger.info("Rejected malformed body on {}: {}", request.url.path, exc.errors())
    return _error_json(status.HTTP_400_BAD_REQUEST, ErrorResponse(error="Invalid request body"))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Give routing errors (404, 405, ...) the same ``{"error": ...}`` shape."""
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = "Method not allowed"
    else:
        message = str(exc.detail)
    response = _error_json(exc.status_code, ErrorResponse(error=message))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort handler so a single failing request never leaks a traceback."""
    logger.exception("Unhandled exception while processing {}", request.url.path)
    return _error_json(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(error="Internal server error", message=str(exc)),
    )
