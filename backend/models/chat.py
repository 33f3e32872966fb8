"""
Chat request/response schemas.

Dependencies: pydantic
System role: Chat API contracts
"""

from pydantic import BaseModel, Field

from backend.models.citation import SourceCitation
from backend.models.conversation import ConversationMessage


class ChannelBotRequest(BaseModel):
    """Question addressed to a channel's bot."""

    message: str = Field(min_length=1, description="User message, may contain the @channel-bot mention")
    history: list[ConversationMessage] = Field(default_factory=list, description="Prior turns, oldest first")
    parent_message_id: str | None = Field(
        default=None,
        description="Message the bot reply is threaded under",
    )


class DocumentChatRequest(BaseModel):
    """Question about the caller's personal documents."""

    query: str = Field(min_length=1, description="User question")
    history: list[ConversationMessage] = Field(default_factory=list, description="Prior turns, oldest first")


class DocumentChatResponse(BaseModel):
    """Grounded answer with the context that was used."""

    content: str = Field(description="Generated answer")
    context: list[str] = Field(description="Passages included in the prompt")
    sources: list[SourceCitation] = Field(description="Document chunks backing the answer")


class ChannelBotResponse(DocumentChatResponse):
    """Channel bot answer, persisted as a threaded reply."""

    reply_message_id: str = Field(description="ID of the stored bot reply message")
