"""Normalised representation of a lookup service match."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field

from .enums import DocumentKind


class RetrievedDocument(BaseModel):
    """A single match, resolved once into display text.

    The lookup service may answer with bare strings, objects exposing a
    ``text`` or ``content`` field, or arbitrary objects.  ``kind`` records
    which of these shapes was seen and ``raw`` keeps the original item.
    """

    kind: DocumentKind
    text: str
    raw: Any = Field(default=None, description="The match exactly as returned upstream.")

    @classmethod
    def from_match(cls, match: Any) -> "RetrievedDocument":
        if isinstance(match, str):
            return cls(kind=DocumentKind.RAW_TEXT, text=match, raw=match)
        if isinstance(match, dict):
            for field in ("text", "content"):
                value = match.get(field)
                if isinstance(value, str):
                    return cls(kind=DocumentKind.FIELD_TEXT, text=value, raw=match)
        return cls(
            kind=DocumentKind.OPAQUE,
            text=json.dumps(match, ensure_ascii=False, default=str),
            raw=match,
        )
