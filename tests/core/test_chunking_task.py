"""
Test suite for ChunkingTask.

Covers the recursive message splitter and the fixed sliding window used
for PDFs: chunk counts, overlap, exact reconstruction and validation.

System role: Verification of the chunking stage
"""

import pytest

from backend.core.document_processing.tasks.chunking_task import ChunkingTask


@pytest.fixture
def pdf_chunker() -> ChunkingTask:
    """Provide the PDF window chunker (1000/100)."""
    return ChunkingTask(chunk_size=1000, chunk_overlap=100)


@pytest.fixture
def message_chunker() -> ChunkingTask:
    """Provide the message splitter (1000/200)."""
    return ChunkingTask(chunk_size=1000, chunk_overlap=200)


class TestChunkingTaskValidation:
    """Test suite for constructor validation."""

    @pytest.mark.parametrize("size,overlap", [(100, 100), (100, 150), (100, -1), (0, 0)])
    def test_init_should_reject_invalid_overlap(self, size: int, overlap: int) -> None:
        """Test overlap must be non-negative and smaller than the size."""
        with pytest.raises(ValueError):
            ChunkingTask(chunk_size=size, chunk_overlap=overlap)

    def test_init_should_accept_zero_overlap(self) -> None:
        """Test zero overlap is allowed."""
        chunker = ChunkingTask(chunk_size=10, chunk_overlap=0)
        assert chunker.sliding_window("a" * 25) == ["a" * 10, "a" * 10, "a" * 5]


class TestSlidingWindow:
    """Test suite for the fixed-size sliding window."""

    def test_sliding_window_should_produce_three_chunks_for_2500_chars(
        self, pdf_chunker: ChunkingTask
    ) -> None:
        """Test 2500 characters at 1000/100 give windows at 0, 900 and 1800."""
        # Arrange
        text = "".join(chr(ord("a") + i % 26) for i in range(2500))

        # Act
        spans = pdf_chunker.window_spans(text)
        chunks = pdf_chunker.sliding_window(text)

        # Assert
        assert spans == [(0, 1000), (900, 1900), (1800, 2500)]
        assert [len(chunk) for chunk in chunks] == [1000, 1000, 700]

    def test_sliding_window_should_overlap_consecutive_chunks(self, pdf_chunker: ChunkingTask) -> None:
        """Test each chunk starts with the previous chunk's last 100 characters."""
        text = "".join(chr(ord("a") + i % 26) for i in range(2500))

        chunks = pdf_chunker.sliding_window(text)

        for previous, current in zip(chunks, chunks[1:]):
            assert current[:100] == previous[-100:]

    def test_sliding_window_should_reconstruct_input(self, pdf_chunker: ChunkingTask) -> None:
        """Test dropping the overlap prefix and concatenating gives the input back."""
        text = "The quick brown fox. " * 300

        chunks = pdf_chunker.sliding_window(text)
        rebuilt = chunks[0] + "".join(chunk[100:] for chunk in chunks[1:])

        assert rebuilt == text

    def test_sliding_window_should_return_single_chunk_for_short_text(
        self, pdf_chunker: ChunkingTask
    ) -> None:
        """Test text within the window size is one chunk."""
        assert pdf_chunker.sliding_window("short") == ["short"]

    def test_sliding_window_should_not_emit_overlap_only_tail(self, pdf_chunker: ChunkingTask) -> None:
        """Test exactly 1000 characters gives one chunk, not a trailing overlap."""
        assert len(pdf_chunker.sliding_window("x" * 1000)) == 1

    def test_sliding_window_should_return_empty_for_empty_text(self, pdf_chunker: ChunkingTask) -> None:
        """Test empty input yields no chunks."""
        assert pdf_chunker.sliding_window("") == []


class TestSplitText:
    """Test suite for the recursive message splitter."""

    def test_split_text_should_keep_short_message_whole(self, message_chunker: ChunkingTask) -> None:
        """Test a short message is a single chunk."""
        assert message_chunker.split_text("Deploys happen on Tuesday") == ["Deploys happen on Tuesday"]

    def test_split_text_should_respect_chunk_size(self, message_chunker: ChunkingTask) -> None:
        """Test long messages are split into chunks within the size limit."""
        text = "\n\n".join(f"Paragraph {i} " + "word " * 120 for i in range(6))

        chunks = message_chunker.split_text(text)

        assert len(chunks) > 1
        assert all(len(chunk) <= 1000 for chunk in chunks)
        assert chunks[0].startswith("Paragraph 0")

    @pytest.mark.parametrize("text", ["", "   ", "\n\n"])
    def test_split_text_should_return_empty_for_blank_text(
        self, message_chunker: ChunkingTask, text: str
    ) -> None:
        """Test blank input yields no chunks."""
        assert message_chunker.split_text(text) == []
