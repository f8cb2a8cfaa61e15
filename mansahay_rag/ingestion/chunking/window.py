"""
Mansahay RAG - Overlapping Window Chunker
"""

from __future__ import annotations

from typing import Optional

from mansahay_rag.core.exceptions import InvalidInputError
from mansahay_rag.core.types import Chunk, Document
from mansahay_rag.ingestion.chunking.base import TextChunker


class OverlappingTextChunker(TextChunker):
    """
    Slides a fixed-size window over the text with a fixed overlap.

    Each window ends on the last natural break (paragraph, line, sentence,
    clause, word) found in its second half, falling back to the hard size
    limit. The next window always starts exactly ``chunk_overlap``
    characters before the previous one ended, so:

    - chunks cover the whole text without gaps
    - consecutive chunks share exactly ``chunk_overlap`` characters
    - no chunk is longer than ``chunk_size``
    - start offsets strictly increase
    """

    DEFAULT_SEPARATORS = [
        "\n\n",       # Paragraph break
        "\n",         # Line break
        ". ",         # Sentence
        "? ",         # Question
        "! ",         # Exclamation
        "; ",         # Semicolon
        ", ",         # Comma
        " ",          # Word
    ]

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        separators: Optional[list[str]] = None,
    ):
        super().__init__(chunk_size, chunk_overlap)
        self.separators = separators if separators is not None else self.DEFAULT_SEPARATORS

    def chunk(
        self,
        document: Document,
        resource_id: Optional[str] = None,
    ) -> list[Chunk]:
        """Split a document into overlapping chunks."""
        text = document.content
        if not text:
            raise InvalidInputError(
                "Document content is empty",
                details={"source": document.source},
            )

        spans = self.spans(text)
        chunks = [
            self._create_chunk(document, i, start, end, resource_id)
            for i, (start, end) in enumerate(spans)
        ]

        self.logger.debug(
            "Chunked document",
            source=document.source,
            input_length=len(text),
            num_chunks=len(chunks),
        )

        return chunks

    def spans(self, text: str) -> list[tuple[int, int]]:
        """Compute ``(start, end)`` character spans for the given text."""
        length = len(text)
        if length <= self.chunk_size:
            return [(0, length)]

        spans = []
        start = 0
        while True:
            hard_end = start + self.chunk_size
            if hard_end >= length:
                spans.append((start, length))
                break

            # Never end at or before start + overlap, the next window must advance
            lowest = max(start + self.chunk_overlap + 1, start + self.chunk_size // 2)
            end = self._find_break(text, lowest, hard_end)

            spans.append((start, end))
            start = end - self.chunk_overlap

        return spans

    def _find_break(self, text: str, lowest: int, highest: int) -> int:
        """Return the end offset of the best separator within [lowest, highest]."""
        for separator in self.separators:
            if not separator:
                continue
            index = text.rfind(separator, max(0, lowest - len(separator)), highest)
            if index != -1 and index + len(separator) >= lowest:
                return index + len(separator)
        return highest


def chunk_document(
    document: Document,
    chunk_size: int = 1000,
    overlap: int = 200,
    resource_id: Optional[str] = None,
) -> list[Chunk]:
    """Chunk a document with the default overlapping window chunker."""
    chunker = OverlappingTextChunker(chunk_size=chunk_size, chunk_overlap=overlap)
    return chunker.chunk(document, resource_id=resource_id)
