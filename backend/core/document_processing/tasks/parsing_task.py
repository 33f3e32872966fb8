"""
PDF parsing task using pypdf.

Extracts text from PDF bytes page by page, keeping the offset at which
each page starts so chunks can be mapped back to a page.

Dependencies: pypdf
System role: Parsing stage of document ingestion
"""

import logging
from io import BytesIO

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from backend.core.exceptions import ParsingError

from ..models import ParsedDocument

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n\n"


class ParsingTask:
    """Parse PDF bytes into text with page offsets."""

    def parse(self, file_bytes: bytes, document_id: str | None = None) -> ParsedDocument:
        """
        Extract text from every page of a PDF.

        Pages without extractable text are skipped. A PDF with no text at
        all yields an empty ParsedDocument rather than an error.

        Args:
            file_bytes: Raw PDF content
            document_id: Source ID, for error context

        Returns:
            ParsedDocument: Joined page text and page start offsets

        Raises:
            ParsingError: When the bytes are not a readable PDF
        """
        if not file_bytes:
            raise ParsingError("PDF content is empty", document_id, file_type="pdf")

        try:
            reader = PdfReader(BytesIO(file_bytes))
            page_texts = [(page.extract_text() or "").strip() for page in reader.pages]
        except (PyPdfError, ValueError, OSError) as e:
            raise ParsingError(f"Failed to parse PDF: {e}", document_id, file_type="pdf") from e

        parts: list[str] = []
        offsets: list[int] = []
        numbers: list[int] = []
        cursor = 0
        for page_number, text in enumerate(page_texts, start=1):
            if not text:
                continue
            if parts:
                cursor += len(PAGE_SEPARATOR)
            offsets.append(cursor)
            numbers.append(page_number)
            parts.append(text)
            cursor += len(text)

        logger.debug(
            f"{__name__}:parse - Extracted {len(parts)}/{len(page_texts)} pages with text",
            extra={"document_id": document_id},
        )
        return ParsedDocument(text=PAGE_SEPARATOR.join(parts), page_offsets=offsets, page_numbers=numbers)
