"""
Text chunking task.

Two strategies share one chunk size limit:

- split_text: RecursiveCharacterTextSplitter, preferring paragraph, then
  line, then word, then character boundaries. Used for chat messages.
- sliding_window: fixed windows that advance by chunk_size - overlap.
  Used for PDF text, where it keeps every chunk start offset known so
  page numbers can be attached.

Dependencies: langchain_text_splitters
System role: Chunking stage of the ingestion pipeline
"""

from langchain_text_splitters import RecursiveCharacterTextSplitter

SEPARATORS = ["\n\n", "\n", " ", ""]


class ChunkingTask:
    """Split text into overlapping chunks no longer than chunk_size characters."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks

        Raises:
            ValueError: When the overlap is negative or not smaller than chunk_size
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if chunk_overlap < 0 or chunk_overlap >= chunk_size:
            raise ValueError("chunk_overlap must satisfy 0 <= chunk_overlap < chunk_size")

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            separators=SEPARATORS,
            length_function=len,
        )

    def split_text(self, text: str) -> list[str]:
        """
        Split text at the coarsest separator that keeps chunks within size.

        Args:
            text: Cleaned source text

        Returns:
            list[str]: Non-empty chunks in source order, empty for blank input
        """
        if not text or not text.strip():
            return []
        return [chunk for chunk in self._splitter.split_text(text) if chunk]

    def window_spans(self, text: str) -> list[tuple[int, int]]:
        """
        Compute [start, end) offsets of the sliding windows over text.

        Windows advance by chunk_size - chunk_overlap. Once a window
        reaches the end of the text no further window is emitted, so the
        last window is never made only of overlap.

        Args:
            text: Source text

        Returns:
            list[tuple[int, int]]: Window offsets in order
        """
        length = len(text)
        spans: list[tuple[int, int]] = []
        start = 0
        while start < length:
            end = min(start + self.chunk_size, length)
            spans.append((start, end))
            if end >= length:
                break
            start = end - self.chunk_overlap
        return spans

    def sliding_window(self, text: str) -> list[str]:
        """
        Split text into fixed windows overlapping by chunk_overlap characters.

        Dropping the first chunk_overlap characters of every chunk after the
        first and concatenating reconstructs the input exactly.

        Args:
            text: Source text

        Returns:
            list[str]: Chunks in source order, empty for empty input
        """
        return [text[start:end] for start, end in self.window_spans(text)]
