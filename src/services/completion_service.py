"""Client for the external chat completion service.

The request carries a system prompt, a user prompt and a fixed set of
generation parameters.  The answer is read from
``choices[0].message.content``; any other shape is reported as an
invalid response rather than replaced by a default.
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from ..config.llm_config import LlmConfig, get_llm_config
from ..models.enums import MessageRole
from ..utils import api_client
from ..utils.error_handler import CompletionError, ConfigurationError

# Generation parameters sent with every request.
GENERATION_CONFIG: dict[str, Any] = {
    "max_tokens": 4096,
    "top_p": 1,
    "top_k": 40,
    "presence_penalty": 0,
    "frequency_penalty": 0,
    "temperature": 0.7,
}

INVALID_RESPONSE_FORMAT = "invalid response format"


def build_payload(model: str, system_prompt: str, user_prompt: str) -> dict[str, Any]:
    """Return the JSON body for a completion request."""
    return {
        "model": model,
        **GENERATION_CONFIG,
        "messages": [
            {"role": MessageRole.SYSTEM.value, "content": system_prompt},
            {"role": MessageRole.USER.value, "content": user_prompt},
        ],
    }


def extract_answer(payload: Any) -> str:
    """Return ``choices[0].message.content`` or raise :class:`CompletionError`."""
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise CompletionError(
            "Invalid response format from completion service", kind=INVALID_RESPONSE_FORMAT
        ) from exc
    if not isinstance(content, str):
        raise CompletionError(
            "Invalid response format from completion service", kind=INVALID_RESPONSE_FORMAT
        )
    return content


class CompletionClient:
    """Generates an answer from a system prompt and a user prompt."""

    def __init__(
        self,
        llm_config: LlmConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.llm_config = llm_config or get_llm_config()
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return self.llm_config.is_configured

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Return the generated answer text.

        Raises
        ------
        ConfigurationError
            If no API key is configured.
        CompletionError
            If the service cannot be reached, answers with a non-success
            status, or returns a payload without answer text.
        """
        config = self.llm_config
        if not config.is_configured:
            raise ConfigurationError("Server configuration error")

        payload = build_payload(config.model, system_prompt, user_prompt)
        logger.debug(
            "Requesting completion model={} prompt_chars={}",
            config.model,
            len(system_prompt) + len(user_prompt),
        )
        try:
            response = await api_client.post(
                config.api_url,
                json=payload,
                headers=api_client.bearer_headers(config.api_key or ""),
                timeout=config.timeout,
                transport=self._transport,
            )
        except httpx.TimeoutException as exc:
            raise CompletionError("Completion service timed out", kind="timeout") from exc
        except httpx.HTTPError as exc:
            raise CompletionError(
                "Completion service unavailable", kind="unavailable", details=str(exc)
            ) from exc

        if not response.is_success:
            raise CompletionError(
                "Error fetching from completion service",
                upstream_status=response.status_code,
                details=api_client.response_details(response),
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise CompletionError(
                "Invalid response format from completion service",
                kind=INVALID_RESPONSE_FORMAT,
                upstream_status=response.status_code,
            ) from exc

        return extract_answer(body)
