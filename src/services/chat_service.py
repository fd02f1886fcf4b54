"""Orchestration service combining document lookup and LLM completion.

The ChatService receives a user message, decides from its command
prefix whether documents should be looked up, builds the prompts and
asks the completion service for the answer.  Lookup is best effort:
when it is not configured or fails, the message is answered without
context.  Completion failures are propagated to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from loguru import logger

from ..models.chat_request import ChatRequest
from ..models.chat_response import ChatResponse
from ..models.enums import Intent
from ..models.retrieved_document import RetrievedDocument
from ..prompts import (
    CONTEXT_SEPARATOR,
    CONTEXT_SYSTEM_PROMPT,
    CONTEXT_USER_PROMPT,
    DEFAULT_SYSTEM_PROMPT,
)
from ..utils.error_handler import ConfigurationError, RetrievalError, ValidationError
from .completion_service import CompletionClient
from .intent_service import ClassifiedMessage, classify_intent
from .retrieval_service import RetrievalClient


@dataclass(frozen=True)
class PromptPair:
    system: str
    user: str


def build_context(documents: list[RetrievedDocument]) -> str:
    """Join document texts into the context handed to the model."""
    return CONTEXT_SEPARATOR.join(document.text for document in documents)


def build_prompts(query: str, context: str) -> PromptPair:
    """Return the system and user prompts for ``query``.

    With a non-empty ``context`` the model is told to answer from it;
    otherwise it receives the query alone with a generic instruction.
    """
    if context:
        return PromptPair(
            system=CONTEXT_SYSTEM_PROMPT,
            user=CONTEXT_USER_PROMPT.format(context=context, question=query),
        )
    return PromptPair(system=DEFAULT_SYSTEM_PROMPT, user=query)


class ChatService:
    """Coordinates document lookup and answer generation.

    Both clients are injected so that configuration is read once at
    start up and tests can swap the HTTP transport.
    """

    def __init__(
        self,
        retrieval_client: RetrievalClient | None = None,
        completion_client: CompletionClient | None = None,
    ) -> None:
        self.retrieval_client = retrieval_client or RetrievalClient()
        self.completion_client = completion_client or CompletionClient()

    async def chat(self, chat_request: ChatRequest) -> ChatResponse:
        """Answer a chat request.

        Parameters
        ----------
        chat_request: ChatRequest
            The incoming request.  Its message may start with ``/search``
            or ``/ask``.

        Returns
        -------
        ChatResponse
            The answer, the documents used as context (if any) and whether
            document search contributed.

        Raises
        ------
        ValidationError
            If the message is missing or blank.
        ConfigurationError
            If the completion service credential is missing.
        CompletionError
            If the completion service fails.
        """
        message = (chat_request.message or "").strip()
        if not message:
            raise ValidationError("Message is required")
        if not self.completion_client.is_configured:
            logger.error("Completion API key is not configured")
            raise ConfigurationError("Server configuration error")

        classified = classify_intent(message)
        logger.info(
            "Processing chat message intent={} query_chars={}",
            classified.intent.value,
            len(classified.query),
        )

        consulted, documents = await self._retrieve(classified)
        context = build_context(documents)
        # Documents count as used only when they put text in front of the model.
        search_mode = consulted and bool(context.strip())
        prompts = build_prompts(classified.query, context if search_mode else "")
        answer = await self.completion_client.complete(prompts.system, prompts.user)

        logger.info(
            "Answer generated intent={} documents={} search_mode={}",
            classified.intent.value,
            len(documents),
            search_mode,
        )
        return ChatResponse(
            response=answer,
            context=documents if search_mode else None,
            search_mode=search_mode,
        )

    async def _retrieve(self, classified: ClassifiedMessage) -> tuple[bool, list[RetrievedDocument]]:
        """Look up documents when the intent allows it.

        Returns whether the lookup service was consulted together with the
        documents it returned.  Lookup failures are logged and yield no
        documents.
        """
        if classified.intent is Intent.DIRECT:
            return False, []
        if not self.retrieval_client.is_configured:
            logger.warning("Retrieval credentials not configured; answering without documents")
            return False, []

        try:
            documents = await self.retrieval_client.lookup(classified.query)
        except RetrievalError as exc:
            logger.warning(
                "Retrieval failed, continuing without context: {} (status={}, details={})",
                exc.message,
                exc.upstream_status,
                exc.details,
            )
            return True, []
        return True, documents

    def get_service_info(self) -> dict[str, object]:
        """Return basic information about the chat service.

        Lets the UI show which model answers and whether document search
        is available, without exposing any credential.
        """
        return {
            "model": self.completion_client.llm_config.model,
            "completion_configured": self.completion_client.is_configured,
            "retrieval_configured": self.retrieval_client.is_configured,
        }


@lru_cache()
def get_chat_service() -> ChatService:
    """Dependency injector for ChatService instances.

    FastAPI will call this function to obtain a singleton
    ChatService.  The lru_cache decorator ensures only one
    instance exists.
    """
    return ChatService()
