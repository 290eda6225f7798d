"""
Perplexica Ask data models

Pydantic models for the incoming conversation messages and the request body
sent to the Perplexica search endpoint.
"""

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field

HistoryPair = Tuple[str, str]

# role -> speaker label understood by the backend; other roles are dropped
HISTORY_SPEAKERS = {
    "user": "human",
    "assistant": "assistant",
}


class Message(BaseModel):
    """One conversation turn as supplied by the caller"""

    model_config = ConfigDict(extra="ignore")

    role: str = Field(..., description="Role of the message (e.g., system, user, assistant)")
    content: str = Field(..., description="The content of the message")


class ModelSelection(BaseModel):
    provider: str
    model: str


class SearchRequest(BaseModel):
    """Body of POST /api/search"""

    model_config = ConfigDict(populate_by_name=True)

    chat_model: ModelSelection = Field(..., alias="chatModel")
    embedding_model: ModelSelection = Field(..., alias="embeddingModel")
    optimization_mode: str = Field(..., alias="optimizationMode")
    focus_mode: str = Field(..., alias="focusMode")
    query: str
    history: List[HistoryPair] = Field(default_factory=list)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


def convert_history(messages: List[Message]) -> List[HistoryPair]:
    """Map prior turns to (speaker, content) pairs, preserving order.

    ``user`` becomes ``human``, ``assistant`` is kept, and every other role
    (``system`` included) is dropped.
    """
    history: List[HistoryPair] = []
    for message in messages:
        speaker = HISTORY_SPEAKERS.get(message.role)
        if speaker is None:
            continue
        history.append((speaker, message.content))
    return history
