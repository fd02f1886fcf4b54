"""Controllers for chat endpoints."""

from fastapi import APIRouter, Body, Depends
from loguru import logger

from ..models.chat_request import ChatRequest
from ..models.chat_response import ChatResponse
from ..models.error_response import ErrorResponse
from ..services.chat_service import ChatService, get_chat_service

router = APIRouter(prefix="/api", tags=["Chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse},
        405: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def chat_endpoint(
    request: ChatRequest | None = Body(default=None),
    service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Accept a chat message and return the assistant's response.

    Prefix the message with ``/search`` to answer from retrieved
    documents or with ``/ask`` to skip document lookup.  Errors are
    raised as :class:`~src.utils.error_handler.ChatError` subclasses and
    rendered by the application's exception handlers.
    """
    logger.debug("Received chat request")
    return await service.chat(request or ChatRequest())


@router.get("/info")
async def info_endpoint(
    service: ChatService = Depends(get_chat_service),
) -> dict[str, object]:
    """Return the model name and which integrations are configured."""
    return service.get_service_info()
