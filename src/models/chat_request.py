"""Request model for the chat API."""

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Represents a request payload for a chat message.

    The ``message`` field contains the user's prompt, optionally prefixed
    with ``/search`` or ``/ask`` to choose how it is answered.  It is
    declared optional so that a missing or blank message can be rejected
    by the chat service with a ``Message is required`` error instead of a
    generic schema violation.
    """

    message: str | None = Field(
        default=None,
        description="The user's message content, optionally starting with /search or /ask.",
    )
