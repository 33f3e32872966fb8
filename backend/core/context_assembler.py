"""
Context assembly under a token budget.

Token counts are estimated as ceil(characters / 4). The conversation is
always kept whole; retrieved passages fill whatever window is left after
the conversation and the response reserve, best passage first, stopping
at the first passage that does not fit.

Dependencies: pydantic, backend.models.conversation
System role: Prompt budgeting between retrieval and generation
"""

import math

from pydantic import BaseModel, Field

from backend.models.conversation import ConversationMessage

# Fixed per-message framing cost (role markers, separators)
MESSAGE_OVERHEAD_TOKENS = 4


def estimate_tokens(text: str) -> int:
    """Approximate token count of a string."""
    return math.ceil(len(text) / 4)


def message_tokens(messages: list[ConversationMessage]) -> int:
    """Estimated token cost of a conversation."""
    return sum(
        estimate_tokens(message.content) + estimate_tokens(message.role) + MESSAGE_OVERHEAD_TOKENS
        for message in messages
    )


class AssembledContext(BaseModel):
    """Passages that fit the budget plus the untouched conversation."""

    kept_passages: list[str] = Field(default_factory=list)
    messages: list[ConversationMessage] = Field(default_factory=list)
    context_budget: int = Field(default=0, description="Tokens that were available for passages")
    context_tokens: int = Field(default=0, description="Tokens used by kept passages")


class ContextAssembler:
    """Fit retrieved passages into the model window alongside the conversation."""

    def assemble(
        self,
        passages: list[str],
        history: list[ConversationMessage],
        model_window: int,
        response_reserve: int,
    ) -> AssembledContext:
        """
        Keep the longest prefix of passages that fits the remaining budget.

        Args:
            passages: Retrieved passages, best first
            history: Conversation messages, never truncated
            model_window: Model context window in tokens
            response_reserve: Tokens held back for the answer

        Returns:
            AssembledContext: Kept passages (a prefix of `passages`) and the
            original messages
        """
        budget = model_window - response_reserve - message_tokens(history)
        kept: list[str] = []
        used = 0
        for passage in passages if budget > 0 else []:
            cost = estimate_tokens(passage)
            if used + cost > budget:
                break
            kept.append(passage)
            used += cost

        return AssembledContext(
            kept_passages=kept,
            messages=list(history),
            context_budget=max(budget, 0),
            context_tokens=used,
        )
