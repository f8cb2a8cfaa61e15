"""
Tests for mansahay_rag/ingestion/chunking/
"""

import pytest

from mansahay_rag.core.exceptions import InvalidInputError
from mansahay_rag.core.types import Document


def reconstruct(chunks, overlap):
    """Concatenate the non-overlapping regions of consecutive chunks."""
    text = chunks[0].content
    for chunk in chunks[1:]:
        text += chunk.content[overlap:]
    return text


class TestTextChunker:
    """Tests for the base TextChunker."""

    def test_chunker_base_is_abstract(self):
        from abc import ABC
        from mansahay_rag.ingestion.chunking.base import TextChunker

        assert issubclass(TextChunker, ABC)

    @pytest.mark.parametrize("size,overlap", [(0, 0), (-5, 0), (100, 100), (100, 150), (100, -1)])
    def test_invalid_parameters(self, size, overlap):
        from mansahay_rag.ingestion.chunking import OverlappingTextChunker

        with pytest.raises(InvalidInputError):
            OverlappingTextChunker(chunk_size=size, chunk_overlap=overlap)

    def test_zero_overlap_allowed(self):
        from mansahay_rag.ingestion.chunking import OverlappingTextChunker

        chunker = OverlappingTextChunker(chunk_size=10, chunk_overlap=0)
        assert chunker.chunk_overlap == 0


class TestOverlappingTextChunker:
    """Tests for the boundary-aware sliding window."""

    def test_scenario_sky_and_grass(self):
        """Non-overlap regions rebuild the original sentence exactly."""
        from mansahay_rag.ingestion.chunking import chunk_document

        text = "The sky is blue. Grass is green."
        chunks = chunk_document(Document(content=text, source="s.txt"), chunk_size=20, overlap=5)

        assert [(c.location_start, c.location_end) for c in chunks] == [(0, 17), (12, 32)]
        assert chunks[0].content == "The sky is blue. "
        assert reconstruct(chunks, 5) == text

    def test_short_document_single_chunk(self):
        from mansahay_rag.ingestion.chunking import chunk_document

        text = "Breathe in. Breathe out."
        chunks = chunk_document(Document(content=text, source="a.txt"))

        assert len(chunks) == 1
        assert chunks[0].content == text
        assert (chunks[0].location_start, chunks[0].location_end) == (0, len(text))

    def test_document_exactly_chunk_size(self):
        from mansahay_rag.ingestion.chunking import chunk_document

        chunks = chunk_document(Document(content="x" * 50, source="a.txt"), chunk_size=50, overlap=10)
        assert len(chunks) == 1

    def test_empty_content_rejected(self):
        from mansahay_rag.ingestion.chunking import chunk_document

        with pytest.raises(InvalidInputError):
            chunk_document(Document(content="", source="empty.txt"))

    @pytest.mark.parametrize("size,overlap", [(100, 20), (60, 0), (50, 25), (30, 29)])
    def test_coverage_and_exact_overlap(self, sample_document_content, size, overlap):
        from mansahay_rag.ingestion.chunking import OverlappingTextChunker

        doc = Document(content=sample_document_content, source="coping_guide.txt")
        chunks = OverlappingTextChunker(chunk_size=size, chunk_overlap=overlap).chunk(doc)

        assert chunks[0].location_start == 0
        assert chunks[-1].location_end == len(sample_document_content)
        for prev, nxt in zip(chunks, chunks[1:]):
            assert prev.location_end - nxt.location_start == overlap
        for chunk in chunks:
            assert len(chunk.content) <= size
            assert chunk.content == sample_document_content[chunk.location_start:chunk.location_end]
        assert reconstruct(chunks, overlap) == sample_document_content

    def test_text_without_separators_uses_hard_limit(self):
        from mansahay_rag.ingestion.chunking import OverlappingTextChunker

        text = "a" * 95
        spans = OverlappingTextChunker(chunk_size=40, chunk_overlap=10).spans(text)

        assert spans == [(0, 40), (30, 70), (60, 95)]

    def test_prefers_paragraph_break(self):
        from mansahay_rag.ingestion.chunking import OverlappingTextChunker

        text = "First paragraph here.\n\nSecond one, with words. And more words follow."
        chunker = OverlappingTextChunker(chunk_size=30, chunk_overlap=5)
        start, end = chunker.spans(text)[0]

        assert text[start:end] == "First paragraph here.\n\n"

    def test_identity_uniqueness(self, sample_document):
        from mansahay_rag.ingestion.chunking import OverlappingTextChunker

        chunks = OverlappingTextChunker(chunk_size=80, chunk_overlap=30).chunk(sample_document)
        identities = [c.identity for c in chunks]

        assert len(identities) == len(set(identities))
        assert [c.location_start for c in chunks] == sorted(c.location_start for c in chunks)

    def test_metadata_propagated(self, sample_document):
        from mansahay_rag.ingestion.chunking import OverlappingTextChunker

        chunks = OverlappingTextChunker(chunk_size=100, chunk_overlap=20).chunk(
            sample_document, resource_id="res-1"
        )

        for i, chunk in enumerate(chunks):
            assert chunk.source == "coping_guide.txt"
            assert chunk.uploaded_at == sample_document.uploaded_at
            assert chunk.resource_id == "res-1"
            assert chunk.position == i
            assert chunk.metadata["chunker"] == "OverlappingTextChunker"

    def test_line_numbers(self):
        from mansahay_rag.ingestion.chunking import OverlappingTextChunker

        text = "line one\nline two\nline three\nline four"
        chunks = OverlappingTextChunker(chunk_size=20, chunk_overlap=2).chunk(
            Document(content=text, source="l.txt")
        )

        assert chunks[0].line_from == 1
        assert chunks[-1].line_to == 4
        for chunk in chunks:
            assert chunk.line_from <= chunk.line_to
