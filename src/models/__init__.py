"""Expose commonly used model classes at the package level.

Importing these classes here allows consumers to write concise imports like::

    from src.models import ChatRequest, ChatResponse, RetrievedDocument

These names refer to the underlying Pydantic models defined in their
respective modules.
"""

from .chat_request import ChatRequest  # noqa: F401
from .chat_response import ChatResponse  # noqa: F401
from .error_response import ErrorResponse  # noqa: F401
from .retrieved_document import RetrievedDocument  # noqa: F401
from .enums import DocumentKind, Intent, MessageRole  # noqa: F401
