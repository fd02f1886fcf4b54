"""Error payload returned by the chat API."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Structured error body; ``error`` is always present."""

    error: str
    kind: str | None = None
    status: int | None = None
    details: Any = None
    message: str | None = None
