"""
Citation extraction.

Builds document citations from retrieval results. Only passages that
come from a named document (a personal document or a channel PDF)
become citations; chat message passages do not.

Dependencies: backend.models
System role: Citation formatting business logic
"""

from backend.models.citation import SourceCitation
from backend.models.retrieval import RetrievalResult


class CitationBuilder:
    """Citation building business logic."""

    def build_citations(self, results: list[RetrievalResult]) -> list[SourceCitation]:
        """
        Build one citation per document-backed result, in result order.

        Args:
            results: Retrieval results, best first

        Returns:
            list[SourceCitation]: Citations for results with both a filename
            and a document ID
        """
        return [
            SourceCitation(
                filename=result.filename,
                document_id=result.document_id,
                page_number=result.page_number,
                chunk_index=result.chunk_index,
                score=result.score,
            )
            for result in results
            if result.filename and result.document_id
        ]
