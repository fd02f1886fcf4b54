"""Prompt templates shared by the chat service."""

from .context import CONTEXT_SEPARATOR, CONTEXT_USER_PROMPT  # noqa: F401
from .system import CONTEXT_SYSTEM_PROMPT, DEFAULT_SYSTEM_PROMPT  # noqa: F401
