"""
Conversation message model.

Dependencies: pydantic
System role: Chat history entries passed to answer generation
"""

from typing import Literal

from pydantic import BaseModel, Field

Role = Literal["system", "user", "assistant"]


class ConversationMessage(BaseModel):
    """One prior turn of a conversation."""

    role: Role = Field(description="Message role: 'system', 'user' or 'assistant'")
    content: str = Field(description="Message content")
