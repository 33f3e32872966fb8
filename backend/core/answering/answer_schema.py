"""
Answer generation schemas.

Dependencies: pydantic, backend.models.citation
System role: Answer generator output definitions
"""

from pydantic import BaseModel, Field

from backend.models.citation import SourceCitation


class GeneratedAnswer(BaseModel):
    """Answer text plus the grounding that produced it."""

    content: str = Field(description="Answer text, never empty")
    used_context: list[str] = Field(
        default_factory=list,
        description="Passages that were placed in the prompt",
    )
    sources: list[SourceCitation] = Field(
        default_factory=list,
        description="Document chunks among the retrieved passages",
    )
