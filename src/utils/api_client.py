"""Simple HTTP client utilities using httpx.

Both outbound integrations (document lookup and chat completion) post
JSON with a bearer token.  Clients are opened per call so that no
connection state is shared between concurrent chat requests.
"""

from __future__ import annotations

import httpx
from typing import Any, Dict


def bearer_headers(token: str) -> Dict[str, str]:
    """Return the headers expected by both external services."""
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }


async def post(
    url: str,
    json: Dict[str, Any],
    *,
    headers: Dict[str, str] | None = None,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """Perform an asynchronous HTTP POST request."""
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        return await client.post(url, json=json, headers=headers)


def response_details(response: httpx.Response) -> Any:
    """Return the decoded JSON error body, or the raw text when it is not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text
