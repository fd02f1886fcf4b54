from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from src.config.llm_config import LlmConfig
from src.config.retrieval_config import RetrievalConfig
from src.services.chat_service import ChatService
from src.services.completion_service import CompletionClient
from src.services.retrieval_service import RetrievalClient

RETRIEVAL_URL = "https://lookup.test/api/v0/lookup_matches"
COMPLETION_URL = "https://completion.test/v1/chat/completions"


class RecordingTransport(httpx.MockTransport):
    """Mock transport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _handle(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_handle)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def json_bodies(self) -> list[Any]:
        return [json.loads(request.content) for request in self.requests]


def json_responder(status_code: int, payload: Any) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status_code, json=payload)


def completion_payload(content: str) -> dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def retrieval_config() -> RetrievalConfig:
    return RetrievalConfig(
        deployment_token="lookup-token",
        deployment_id="deployment-1",
        api_url=RETRIEVAL_URL,
        timeout=5.0,
    )


@pytest.fixture
def unconfigured_retrieval_config() -> RetrievalConfig:
    return RetrievalConfig(deployment_token=None, deployment_id=None, api_url=RETRIEVAL_URL)


@pytest.fixture
def llm_config() -> LlmConfig:
    return LlmConfig(
        api_key="completion-key",
        api_url=COMPLETION_URL,
        model="test-model",
        timeout=5.0,
    )


@pytest.fixture
def make_service(
    retrieval_config: RetrievalConfig, llm_config: LlmConfig
) -> Callable[..., ChatService]:
    """Build a ChatService whose clients talk to the given mock transports."""

    def _make(
        retrieval_transport: httpx.AsyncBaseTransport,
        completion_transport: httpx.AsyncBaseTransport,
        *,
        retrieval: RetrievalConfig | None = None,
        llm: LlmConfig | None = None,
    ) -> ChatService:
        return ChatService(
            retrieval_client=RetrievalClient(retrieval or retrieval_config, transport=retrieval_transport),
            completion_client=CompletionClient(llm or llm_config, transport=completion_transport),
        )

    return _make
