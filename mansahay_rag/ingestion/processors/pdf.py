"""
Mansahay RAG - PDF Document Processor
"""

from __future__ import annotations

import io
from typing import Any

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from mansahay_rag.core.exceptions import UnsupportedFormatError
from mansahay_rag.ingestion.processors.base import DocumentProcessor, ProcessedDocument


class PDFProcessor(DocumentProcessor):
    """Processor for PDF documents, extracting text page by page."""

    mimetypes = ("application/pdf",)
    extensions = (".pdf",)

    def extract(self, data: bytes, source: str) -> ProcessedDocument:
        """Extract page text, each page prefixed with a ``[Page N]`` marker."""
        try:
            reader = PdfReader(io.BytesIO(data))
            pages = [page.extract_text() for page in reader.pages]
            info = reader.metadata
        except PyPdfError as e:
            raise UnsupportedFormatError(source, f"unreadable PDF ({e})")
        except Exception as e:
            # Malformed files also surface as TypeError, IndexError, KeyError...
            raise UnsupportedFormatError(source, f"unreadable PDF ({type(e).__name__}: {e})")

        text_parts = [
            f"[Page {page_num}]\n{text}"
            for page_num, text in enumerate(pages, start=1)
            if text and text.strip()
        ]

        metadata: dict[str, Any] = {"page_count": len(pages)}
        if info:
            if info.title:
                metadata["pdf_title"] = info.title
            if info.author:
                metadata["pdf_author"] = info.author

        self.logger.debug(
            "Extracted PDF text",
            pages=len(pages),
            pages_with_text=len(text_parts),
        )

        return ProcessedDocument(
            content="\n\n".join(text_parts),
            metadata=metadata,
            title=metadata.get("pdf_title"),
        )
