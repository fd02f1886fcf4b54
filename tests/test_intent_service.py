"""
Unit tests for classify_intent().
"""

import pytest

from src.models.enums import Intent
from src.services.intent_service import classify_intent


class TestClassifyIntent:
    """Tests for classify_intent()."""

    def test_search_command(self) -> None:
        result = classify_intent("/search X")
        assert result.intent is Intent.SEARCH
        assert result.query == "X"

    def test_ask_command(self) -> None:
        result = classify_intent("/ask X")
        assert result.intent is Intent.DIRECT
        assert result.query == "X"

    def test_plain_text_is_auto(self) -> None:
        result = classify_intent("plain text")
        assert result.intent is Intent.AUTO
        assert result.query == "plain text"

    @pytest.mark.parametrize(
        "message, intent",
        [
            ("/SEARCH X", Intent.SEARCH),
            ("/Search X", Intent.SEARCH),
            ("/ASK X", Intent.DIRECT),
            ("/aSk X", Intent.DIRECT),
        ],
    )
    def test_prefix_is_case_insensitive(self, message: str, intent: Intent) -> None:
        result = classify_intent(message)
        assert result.intent is intent
        assert result.query == "X"

    def test_query_case_is_preserved(self) -> None:
        assert classify_intent("/search Capital Of FRANCE").query == "Capital Of FRANCE"

    def test_surrounding_whitespace_is_trimmed(self) -> None:
        result = classify_intent("   /search    capital of France   ")
        assert result.intent is Intent.SEARCH
        assert result.query == "capital of France"

    def test_auto_query_is_trimmed(self) -> None:
        assert classify_intent("  hello there \n").query == "hello there"

    @pytest.mark.parametrize("message, intent", [("/search ", Intent.SEARCH), ("/ask", Intent.DIRECT)])
    def test_command_without_query_yields_empty_query(self, message: str, intent: Intent) -> None:
        result = classify_intent(message)
        assert result.intent is intent
        assert result.query == ""

    def test_command_must_be_a_whole_word(self) -> None:
        result = classify_intent("/searching for answers")
        assert result.intent is Intent.AUTO
        assert result.query == "/searching for answers"

    def test_command_only_at_start(self) -> None:
        result = classify_intent("please /search this")
        assert result.intent is Intent.AUTO
        assert result.query == "please /search this"

    def test_tab_after_command_is_accepted(self) -> None:
        result = classify_intent("/ask\tWhat is 2+2?")
        assert result.intent is Intent.DIRECT
        assert result.query == "What is 2+2?"
