"""
Grounded answer generation.

Fits retrieved passages into the model window, frames them under the
bot persona as the system message, sends [system] + history + [question]
to the chat model and returns the answer with the passages it saw and
the documents it can cite.

Dependencies: langchain_core, langchain_google_genai, python-dotenv
System role: Final stage of retrieval-augmented chat
"""

import logging
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from backend.core.answering.answer_prompt import build_system_prompt
from backend.core.answering.answer_schema import GeneratedAnswer
from backend.core.citation_builder import CitationBuilder
from backend.core.context_assembler import ContextAssembler, estimate_tokens
from backend.core.exceptions import CompletionError, EmptyContentError
from backend.models.conversation import ConversationMessage
from backend.models.retrieval import RetrievalResult

if TYPE_CHECKING:
    from backend.configs.llm import LLMSettings

logger = logging.getLogger(__name__)
load_dotenv()


def to_langchain_messages(messages: list[ConversationMessage]) -> list[BaseMessage]:
    """Convert conversation turns into LangChain chat messages."""
    converted: list[BaseMessage] = []
    for message in messages:
        if message.role == "system":
            converted.append(SystemMessage(content=message.content))
        elif message.role == "assistant":
            converted.append(AIMessage(content=message.content))
        else:
            converted.append(HumanMessage(content=message.content))
    return converted


def _content_text(content: Any) -> str:
    """Flatten a chat model response content (string or content parts) to text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return ""


class AnswerGenerator:
    """Produce grounded answers from retrieved passages and the conversation."""

    def __init__(
        self,
        chat_model: BaseChatModel,
        model_window: int = 128000,
        response_reserve: int = 1000,
        assembler: ContextAssembler | None = None,
        citation_builder: CitationBuilder | None = None,
    ) -> None:
        """
        Initialize answer generator.

        Args:
            chat_model: LangChain chat model (Gemini in production)
            model_window: Model context window in estimated tokens
            response_reserve: Tokens held back for the answer
            assembler: Token budgeter (default ContextAssembler)
            citation_builder: Source builder (default CitationBuilder)
        """
        self._chat_model = chat_model
        self._model_window = model_window
        self._response_reserve = response_reserve
        self._assembler = assembler or ContextAssembler()
        self._citation_builder = citation_builder or CitationBuilder()

    @classmethod
    def from_settings(cls, settings: "LLMSettings") -> "AnswerGenerator":
        """Build a generator backed by ChatGoogleGenerativeAI."""
        from langchain_google_genai import ChatGoogleGenerativeAI

        model_kwargs: dict[str, Any] = {"model": settings.model_id, "temperature": settings.temperature}
        if settings.max_output_tokens is not None:
            model_kwargs["max_output_tokens"] = settings.max_output_tokens
        return cls(
            chat_model=ChatGoogleGenerativeAI(**model_kwargs),
            model_window=settings.model_window,
            response_reserve=settings.response_reserve,
        )

    async def generate(
        self,
        query: str,
        history: list[ConversationMessage],
        results: list[RetrievalResult],
        system_persona: str,
    ) -> GeneratedAnswer:
        """
        Answer a question from retrieved passages.

        The persona and the question are charged against the window along
        with the history, so the passages only get what is left.

        Args:
            query: User question
            history: Prior turns, oldest first
            results: Retrieved passages, best first
            system_persona: Bot persona placed at the top of the system message

        Returns:
            GeneratedAnswer: Answer, passages used, and document sources

        Raises:
            CompletionError: Chat model call failed
            EmptyContentError: Chat model returned no text
        """
        conversation = list(history) + [ConversationMessage(role="user", content=query)]
        assembled = self._assembler.assemble(
            passages=[result.text for result in results],
            history=conversation,
            model_window=self._model_window,
            response_reserve=self._response_reserve + estimate_tokens(system_persona),
        )

        messages: list[BaseMessage] = [
            SystemMessage(content=build_system_prompt(system_persona, assembled.kept_passages)),
            *to_langchain_messages(assembled.messages),
        ]

        logger.info(
            f"{__name__}:generate - Calling chat model",
            extra={
                "passages_retrieved": len(results),
                "passages_kept": len(assembled.kept_passages),
                "history_length": len(history),
                "context_tokens": assembled.context_tokens,
            },
        )

        try:
            response = await self._chat_model.ainvoke(messages)
        except Exception as e:
            logger.error(f"{__name__}:generate - Chat model failed: {type(e).__name__}: {e}")
            raise CompletionError(f"Chat model call failed: {e}") from e

        content = _content_text(getattr(response, "content", None)).strip()
        if not content:
            logger.warning(f"{__name__}:generate - Chat model returned empty content")
            raise EmptyContentError(details={"passages_kept": len(assembled.kept_passages)})

        return GeneratedAnswer(
            content=content,
            used_context=assembled.kept_passages,
            sources=self._citation_builder.build_citations(results),
        )
