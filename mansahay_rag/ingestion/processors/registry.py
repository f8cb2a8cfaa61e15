"""
Mansahay RAG - Document Processor Registry
"""

import asyncio
from pathlib import Path
from typing import Any, Optional, Type, Union

from mansahay_rag.core.exceptions import UnsupportedFormatError
from mansahay_rag.core.logging import LoggerMixin
from mansahay_rag.core.types import Document, utcnow
from mansahay_rag.ingestion.processors.base import DocumentProcessor
from mansahay_rag.ingestion.processors.pdf import PDFProcessor
from mansahay_rag.ingestion.processors.text import PlainTextProcessor


class ProcessorRegistry(LoggerMixin):
    """
    Picks a loader for an uploaded file.

    Processors are tried in registration order; anything no processor
    claims is read as plain text.
    """

    def __init__(self):
        self._processors: list[Type[DocumentProcessor]] = []
        self._fallback: Type[DocumentProcessor] = PlainTextProcessor
        self._register_defaults()

    def _register_defaults(self) -> None:
        self.register(PDFProcessor)

    def register(self, processor_class: Type[DocumentProcessor]) -> None:
        """Register a new processor."""
        self._processors.append(processor_class)
        self.logger.debug(
            "Registered processor",
            processor=processor_class.__name__,
            mimetypes=processor_class.mimetypes,
        )

    def get_processor(
        self,
        extension: str,
        mimetype: Optional[str] = None,
    ) -> DocumentProcessor:
        """Get a processor for the given file type."""
        for processor_class in self._processors:
            if processor_class.handles(extension, mimetype):
                return processor_class()
        return self._fallback()

    async def load(
        self,
        path: Union[str, Path],
        source: Optional[str] = None,
        mimetype: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Document:
        """
        Load a file into a Document.

        Args:
            path: Location of the (temporary) file on disk
            source: Original filename, recorded on every chunk
            mimetype: MIME type reported by the uploader
            metadata: Additional metadata to include

        Returns:
            Document with the extracted text

        Raises:
            UnsupportedFormatError: If the file cannot be read, parsed or holds no text
        """
        path = Path(path)
        source = source or path.name
        extension = Path(source).suffix or path.suffix

        processor = self.get_processor(extension, mimetype)
        self.logger.debug(
            "Loading document",
            processor=processor.__class__.__name__,
            source=source,
            mimetype=mimetype,
        )

        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise UnsupportedFormatError(source, f"file could not be read ({e})")

        processed = await asyncio.to_thread(processor.extract, data, source)

        if not processed.content.strip():
            raise UnsupportedFormatError(source, "no extractable text")

        self.logger.info(
            "Document loaded",
            processor=processor.__class__.__name__,
            source=source,
            content_length=len(processed.content),
        )

        return Document(
            content=processed.content,
            source=source,
            uploaded_at=utcnow(),
            mime_type=mimetype,
            metadata={
                **processed.metadata,
                **(metadata or {}),
                **({"title": processed.title} if processed.title else {}),
            },
        )


# Global registry instance
_registry: Optional[ProcessorRegistry] = None


def get_processor_registry() -> ProcessorRegistry:
    """Get the global processor registry."""
    global _registry
    if _registry is None:
        _registry = ProcessorRegistry()
    return _registry
