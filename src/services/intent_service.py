"""Classify chat messages by the command they start with."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..models.enums import Intent

# A command is only recognised when followed by whitespace or the end of
# the message, so "/searching" stays a plain message.
_COMMAND_RE = re.compile(r"^/(?P<command>search|ask)(?:\s+|$)", re.IGNORECASE)

_COMMANDS = {
    "search": Intent.SEARCH,
    "ask": Intent.DIRECT,
}


@dataclass(frozen=True)
class ClassifiedMessage:
    intent: Intent
    query: str


def classify_intent(message: str) -> ClassifiedMessage:
    """Split ``message`` into its intent and the query to answer.

    ``/search <query>`` asks for document lookup, ``/ask <query>`` asks
    for a direct answer and anything else is :attr:`Intent.AUTO` with the
    whole message as the query.  A command without a query yields an
    empty query.
    """
    text = (message or "").strip()
    match = _COMMAND_RE.match(text)
    if match is None:
        return ClassifiedMessage(intent=Intent.AUTO, query=text)

    intent = _COMMANDS[match.group("command").lower()]
    return ClassifiedMessage(intent=intent, query=text[match.end():].strip())
