"""Enumerations used across models."""

from enum import Enum


class MessageRole(str, Enum):
    """Enum for message roles sent to the completion service.

    ``SYSTEM`` carries the instructions for the model and ``USER`` the
    prompt built from the incoming chat message.  ``ASSISTANT`` is the
    role of the generated reply.
    """

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class Intent(str, Enum):
    """How a chat message wants to be answered.

    ``SEARCH`` is requested with the ``/search`` command and ``DIRECT``
    with ``/ask``.  Any other message is ``AUTO``: documents are looked up
    when retrieval is configured and used when something is found.
    """

    SEARCH = "search"
    DIRECT = "direct"
    AUTO = "auto"


class DocumentKind(str, Enum):
    """Shape of a match returned by the lookup service."""

    RAW_TEXT = "raw_text"
    FIELD_TEXT = "field_text"
    OPAQUE = "opaque"
