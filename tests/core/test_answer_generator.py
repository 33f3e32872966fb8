"""
Test suite for AnswerGenerator and citation building.

The chat model is mocked; tests inspect the exact messages it receives.

System role: Verification of grounded answer generation
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from backend.core.answering import DEFAULT_CHANNEL_PERSONA, AnswerGenerator
from backend.core.answering.answer_prompt import CONTEXT_HEADER, build_system_prompt
from backend.core.citation_builder import CitationBuilder
from backend.core.exceptions import CompletionError, EmptyContentError, TransientProviderError
from backend.models.conversation import ConversationMessage
from backend.models.retrieval import RetrievalResult


def result(record_id: str, text: str, score: float, **fields) -> RetrievalResult:
    return RetrievalResult(id=record_id, text=text, score=score, type=fields.pop("type", "message"), **fields)


@pytest.fixture
def chat_model() -> MagicMock:
    """Provide a chat model mock answering "Paris"."""
    model = MagicMock()
    model.ainvoke = AsyncMock(return_value=AIMessage(content="Paris"))
    return model


class TestBuildSystemPrompt:
    """Test suite for build_system_prompt()."""

    def test_build_system_prompt_should_frame_passages_under_persona(self) -> None:
        """Test persona, header and passages are joined with blank lines."""
        prompt = build_system_prompt("Persona", ["first", "second"])

        assert prompt == f"Persona\n\n{CONTEXT_HEADER}\n\nfirst\n\nsecond"


class TestGenerate:
    """Test suite for AnswerGenerator.generate()."""

    @pytest.mark.asyncio
    async def test_generate_should_send_system_history_then_question(self, chat_model: MagicMock) -> None:
        """Test message order is [system] + history + [user question]."""
        # Arrange
        generator = AnswerGenerator(chat_model)
        history = [
            ConversationMessage(role="user", content="hi"),
            ConversationMessage(role="assistant", content="hello"),
        ]

        # Act
        answer = await generator.generate(
            "capital?", history, [result("m1", "Paris is the capital", 0.9)], DEFAULT_CHANNEL_PERSONA
        )

        # Assert
        sent = chat_model.ainvoke.await_args.args[0]
        assert isinstance(sent[0], SystemMessage)
        assert sent[0].content.startswith(DEFAULT_CHANNEL_PERSONA)
        assert "Paris is the capital" in sent[0].content
        assert isinstance(sent[1], HumanMessage) and sent[1].content == "hi"
        assert isinstance(sent[2], AIMessage) and sent[2].content == "hello"
        assert isinstance(sent[3], HumanMessage) and sent[3].content == "capital?"
        assert answer.content == "Paris"
        assert answer.used_context == ["Paris is the capital"]

    @pytest.mark.asyncio
    async def test_generate_should_drop_passages_beyond_window(self, chat_model: MagicMock) -> None:
        """Test only the passages that fit the window reach the prompt."""
        generator = AnswerGenerator(chat_model, model_window=200, response_reserve=10)
        results = [result("m1", "a" * 200, 0.9), result("m2", "b" * 2000, 0.8)]

        answer = await generator.generate("q", [], results, "Persona")

        assert answer.used_context == ["a" * 200]
        assert "b" * 2000 not in chat_model.ainvoke.await_args.args[0][0].content

    @pytest.mark.asyncio
    async def test_generate_should_cite_document_chunks_only(self, chat_model: MagicMock) -> None:
        """Test message passages are not cited, document chunks are."""
        results = [
            result("m1", "chat", 0.9),
            result(
                "pdf_chunk_doc-1_2",
                "doc text",
                0.8,
                type="pdf_chunk",
                owner_id="owner-1",
                document_id="doc-1",
                filename="notes.pdf",
                page_number=3,
                chunk_index=2,
            ),
        ]

        answer = await AnswerGenerator(chat_model).generate("q", [], results, "Persona")

        assert len(answer.sources) == 1
        assert answer.sources[0].document_id == "doc-1"
        assert answer.sources[0].filename == "notes.pdf"
        assert answer.sources[0].page_number == 3
        assert answer.sources[0].chunk_index == 2

    @pytest.mark.asyncio
    async def test_generate_should_cite_chunks_dropped_by_budget(self, chat_model: MagicMock) -> None:
        """Test sources cover every retrieved document chunk, kept or not."""
        generator = AnswerGenerator(chat_model, model_window=200, response_reserve=10)
        results = [
            result(
                f"pdf_chunk_doc-{i}_0",
                letter * size,
                score,
                type="pdf_chunk",
                owner_id="owner-1",
                document_id=f"doc-{i}",
                filename=f"doc-{i}.pdf",
                chunk_index=0,
            )
            for i, (letter, size, score) in enumerate([("a", 200, 0.9), ("b", 2000, 0.8), ("c", 2000, 0.7)], 1)
        ]

        answer = await generator.generate("q", [], results, "Persona")

        assert answer.used_context == ["a" * 200]
        assert [source.document_id for source in answer.sources] == ["doc-1", "doc-2", "doc-3"]

    @pytest.mark.asyncio
    async def test_generate_should_accept_content_parts(self, chat_model: MagicMock) -> None:
        """Test list-of-parts content is flattened to text."""
        chat_model.ainvoke.return_value = AIMessage(content=[{"type": "text", "text": "Par"}, "is"])

        answer = await AnswerGenerator(chat_model).generate("q", [], [], "Persona")

        assert answer.content == "Paris"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", []])
    async def test_generate_should_raise_on_empty_content(self, chat_model: MagicMock, content) -> None:
        """Test empty completions are an error, not an empty answer."""
        chat_model.ainvoke.return_value = AIMessage(content=content)

        with pytest.raises(EmptyContentError):
            await AnswerGenerator(chat_model).generate("q", [], [], "Persona")

    @pytest.mark.asyncio
    async def test_generate_should_wrap_provider_failure(self, chat_model: MagicMock) -> None:
        """Test chat model exceptions become CompletionError."""
        chat_model.ainvoke.side_effect = TimeoutError("deadline exceeded")

        with pytest.raises(CompletionError) as exc_info:
            await AnswerGenerator(chat_model).generate("q", [], [], "Persona")

        assert isinstance(exc_info.value, TransientProviderError)


class TestCitationBuilder:
    """Test suite for CitationBuilder."""

    def test_build_citations_should_use_attachment_id_for_channel_pdfs(self) -> None:
        """Test channel PDF chunks cite their attachment."""
        results = [
            result(
                "pdf_chunk_att-1_0",
                "text",
                0.7,
                type="pdf_chunk",
                channel_id="chan-1",
                attachment_id="att-1",
                document_id="att-1",
                filename="runbook.pdf",
                page_number=1,
            )
        ]

        citations = CitationBuilder().build_citations(results)

        assert citations[0].document_id == "att-1"
        assert citations[0].score == 0.7
