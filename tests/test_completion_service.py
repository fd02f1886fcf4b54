"""
Unit tests for the completion service client.
"""

from __future__ import annotations

import asyncio

import httpx
import pytest

from conftest import COMPLETION_URL, RecordingTransport, completion_payload, json_responder
from src.config.llm_config import LlmConfig
from src.services.completion_service import (
    INVALID_RESPONSE_FORMAT,
    CompletionClient,
    build_payload,
    extract_answer,
)
from src.utils.error_handler import CompletionError, ConfigurationError


def _complete(config: LlmConfig, transport: httpx.AsyncBaseTransport) -> str:
    client = CompletionClient(config, transport=transport)
    return asyncio.run(client.complete("system text", "user text"))


def test_payload_carries_fixed_generation_config() -> None:
    payload = build_payload("some-model", "sys", "usr")

    assert payload == {
        "model": "some-model",
        "max_tokens": 4096,
        "top_p": 1,
        "top_k": 40,
        "presence_penalty": 0,
        "frequency_penalty": 0,
        "temperature": 0.7,
        "messages": [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "usr"},
        ],
    }


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"choices": []},
        {"choices": [{}]},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": None}}]},
        {"choices": "nope"},
        None,
    ],
)
def test_extract_answer_rejects_unexpected_shapes(payload) -> None:
    with pytest.raises(CompletionError) as excinfo:
        extract_answer(payload)
    assert excinfo.value.kind == INVALID_RESPONSE_FORMAT


def test_complete_posts_to_configured_endpoint(llm_config: LlmConfig) -> None:
    transport = RecordingTransport(json_responder(200, completion_payload("4")))

    assert _complete(llm_config, transport) == "4"

    request = transport.requests[0]
    assert str(request.url) == COMPLETION_URL
    assert request.headers["Authorization"] == "Bearer completion-key"
    body = transport.json_bodies()[0]
    assert body["model"] == "test-model"
    assert body["messages"][0] == {"role": "system", "content": "system text"}
    assert body["messages"][1] == {"role": "user", "content": "user text"}


def test_missing_api_key_is_a_configuration_error() -> None:
    transport = RecordingTransport(json_responder(200, completion_payload("4")))
    config = LlmConfig(api_key=None, api_url=COMPLETION_URL)

    with pytest.raises(ConfigurationError):
        _complete(config, transport)
    assert transport.calls == 0


def test_error_status_keeps_upstream_status(llm_config: LlmConfig) -> None:
    transport = RecordingTransport(json_responder(401, {"error": "bad key"}))

    with pytest.raises(CompletionError) as excinfo:
        _complete(llm_config, transport)

    assert excinfo.value.upstream_status == 401
    assert excinfo.value.details == {"error": "bad key"}
    assert excinfo.value.status_code == 502


def test_upstream_server_error_status_is_passed_through(llm_config: LlmConfig) -> None:
    transport = RecordingTransport(json_responder(503, {"error": "overloaded"}))

    with pytest.raises(CompletionError) as excinfo:
        _complete(llm_config, transport)

    assert excinfo.value.status_code == 503


def test_missing_content_is_invalid_response_format(llm_config: LlmConfig) -> None:
    transport = RecordingTransport(json_responder(200, {"choices": [{"message": {}}]}))

    with pytest.raises(CompletionError) as excinfo:
        _complete(llm_config, transport)

    assert excinfo.value.kind == INVALID_RESPONSE_FORMAT
    assert excinfo.value.status_code == 502


def test_non_json_body_is_invalid_response_format(llm_config: LlmConfig) -> None:
    transport = RecordingTransport(lambda request: httpx.Response(200, text="not json"))

    with pytest.raises(CompletionError) as excinfo:
        _complete(llm_config, transport)

    assert excinfo.value.kind == INVALID_RESPONSE_FORMAT


def test_timeout_maps_to_gateway_timeout(llm_config: LlmConfig) -> None:
    def _slow(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(CompletionError) as excinfo:
        _complete(llm_config, RecordingTransport(_slow))

    assert excinfo.value.kind == "timeout"
    assert excinfo.value.status_code == 504


def test_network_error_is_unavailable(llm_config: LlmConfig) -> None:
    def _fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(CompletionError) as excinfo:
        _complete(llm_config, RecordingTransport(_fail))

    assert excinfo.value.kind == "unavailable"
    assert excinfo.value.status_code == 502


def test_padded_api_key_is_sent_trimmed() -> None:
    transport = RecordingTransport(json_responder(200, completion_payload("4")))
    config = LlmConfig(api_key="  completion-key \n", api_url=COMPLETION_URL)

    _complete(config, transport)

    assert transport.requests[0].headers["Authorization"] == "Bearer completion-key"
