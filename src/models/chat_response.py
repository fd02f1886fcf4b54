"""Response model for the chat API."""

from pydantic import BaseModel, ConfigDict, Field

from .retrieved_document import RetrievedDocument


class ChatResponse(BaseModel):
    """Represents the assistant's reply to a chat request.

    ``context`` lists the documents that were handed to the model, or is
    ``None`` when the answer was produced without any.  ``search_mode`` is
    serialised as ``searchMode`` and is true only when the lookup service
    was consulted and returned at least one document.
    """

    model_config = ConfigDict(populate_by_name=True)

    response: str
    context: list[RetrievedDocument] | None = None
    search_mode: bool = Field(
        default=False,
        alias="searchMode",
        description="Whether retrieved documents contributed to the answer.",
    )
