"""
Mansahay RAG - Plain Text Processor
"""

from mansahay_rag.core.exceptions import UnsupportedFormatError
from mansahay_rag.ingestion.processors.base import DocumentProcessor, ProcessedDocument


class PlainTextProcessor(DocumentProcessor):
    """Fallback for every upload no other processor claims."""

    mimetypes = ("text/plain", "text/markdown", "text/csv")
    extensions = (".txt", ".md", ".csv")

    def extract(self, data: bytes, source: str) -> ProcessedDocument:
        try:
            # utf-8-sig drops a leading BOM
            content = data.decode("utf-8-sig")
        except UnicodeDecodeError:
            raise UnsupportedFormatError(source, "file is not valid UTF-8 text")

        first_line = content.strip().split("\n", 1)[0]
        return ProcessedDocument(content=content, title=first_line[:100] or None)
