"""Client for the external document lookup service.

The service is asked for documents matching a query and answers with a
JSON object holding a list of matches.  Older and newer deployments have
used different keys for that list, so ``matches``, ``results`` and
``data`` are all accepted, in that order.
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from ..config.retrieval_config import RetrievalConfig, get_retrieval_config
from ..models.retrieved_document import RetrievedDocument
from ..utils import api_client
from ..utils.error_handler import RetrievalError

MATCH_LIST_KEYS = ("matches", "results", "data")


def extract_matches(payload: Any) -> list[Any]:
    """Return the list of raw matches from a lookup response body.

    The first key of :data:`MATCH_LIST_KEYS` holding a non-null value
    wins.  A body without any of them yields an empty list.

    Raises
    ------
    RetrievalError
        If the body is not an object or the selected value is not a list.
    """
    if not isinstance(payload, dict):
        raise RetrievalError("Malformed retrieval payload", details=payload)

    for key in MATCH_LIST_KEYS:
        value = payload.get(key)
        if value is None:
            continue
        if not isinstance(value, list):
            raise RetrievalError(
                "Malformed retrieval payload",
                details=f"'{key}' is {type(value).__name__}, expected a list",
            )
        return value
    return []


class RetrievalClient:
    """Looks up documents relevant to a query."""

    def __init__(
        self,
        retrieval_config: RetrievalConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.retrieval_config = retrieval_config or get_retrieval_config()
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return self.retrieval_config.is_configured

    async def lookup(self, query: str) -> list[RetrievedDocument]:
        """Return the documents matching ``query`` in relevance order.

        Raises
        ------
        RetrievalError
            On transport failures, non-success statuses and bodies that do
            not contain a list of matches.
        """
        config = self.retrieval_config
        if not config.is_configured:
            raise RetrievalError("Retrieval credentials are not configured")

        payload = {"deployment_id": config.deployment_id, "data": query}
        try:
            response = await api_client.post(
                config.api_url,
                json=payload,
                headers=api_client.bearer_headers(config.deployment_token or ""),
                timeout=config.timeout,
                transport=self._transport,
            )
        except httpx.TimeoutException as exc:
            raise RetrievalError("Retrieval service timed out", kind="timeout") from exc
        except httpx.HTTPError as exc:
            raise RetrievalError(
                "Retrieval service unavailable", kind="unavailable", details=str(exc)
            ) from exc

        if not response.is_success:
            raise RetrievalError(
                "Error fetching from retrieval service",
                upstream_status=response.status_code,
                details=api_client.response_details(response),
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise RetrievalError(
                "Malformed retrieval payload", upstream_status=response.status_code
            ) from exc

        documents = [RetrievedDocument.from_match(match) for match in extract_matches(body)]
        logger.debug("Retrieval returned {} document(s)", len(documents))
        return documents
