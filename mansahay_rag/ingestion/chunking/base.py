"""
Mansahay RAG - Chunking Base Classes
"""

from abc import ABC, abstractmethod
from typing import Optional

from mansahay_rag.core.exceptions import InvalidInputError
from mansahay_rag.core.logging import LoggerMixin
from mansahay_rag.core.types import Chunk, Document


class TextChunker(ABC, LoggerMixin):
    """Abstract base class for text chunkers."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
    ):
        if chunk_size <= 0:
            raise InvalidInputError(
                "chunk_size must be positive",
                details={"chunk_size": chunk_size},
            )
        if chunk_overlap < 0 or chunk_size <= chunk_overlap:
            raise InvalidInputError(
                "chunk_overlap must be non-negative and smaller than chunk_size",
                details={"chunk_size": chunk_size, "chunk_overlap": chunk_overlap},
            )
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    @abstractmethod
    def chunk(
        self,
        document: Document,
        resource_id: Optional[str] = None,
    ) -> list[Chunk]:
        """
        Split a document into chunks.

        Args:
            document: The document to chunk
            resource_id: Optional id shared by every chunk of this upload

        Returns:
            List of Chunk objects in document order
        """
        pass

    def _create_chunk(
        self,
        document: Document,
        position: int,
        start_char: int,
        end_char: int,
        resource_id: Optional[str] = None,
    ) -> Chunk:
        """Create a Chunk carrying the document's metadata."""
        text = document.content
        return Chunk(
            content=text[start_char:end_char],
            source=document.source,
            location_start=start_char,
            location_end=end_char,
            line_from=text.count("\n", 0, start_char) + 1,
            line_to=text.count("\n", 0, max(start_char, end_char - 1)) + 1,
            position=position,
            uploaded_at=document.uploaded_at,
            resource_id=resource_id,
            metadata={
                **document.metadata,
                "chunker": self.__class__.__name__,
            },
        )
