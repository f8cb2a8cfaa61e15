"""
Tests for mansahay_rag/ingestion/processors/
"""

from unittest.mock import MagicMock, PropertyMock, patch

import pytest

from mansahay_rag.core.exceptions import UnsupportedFormatError


class TestProcessorSelection:
    """PDF by MIME type or extension, plain text for everything else."""

    def test_pdf_by_mimetype(self):
        from mansahay_rag.ingestion.processors import PDFProcessor, ProcessorRegistry

        processor = ProcessorRegistry().get_processor("", "application/pdf")
        assert isinstance(processor, PDFProcessor)

    def test_pdf_by_extension(self):
        from mansahay_rag.ingestion.processors import PDFProcessor, ProcessorRegistry

        processor = ProcessorRegistry().get_processor(".PDF", "application/octet-stream")
        assert isinstance(processor, PDFProcessor)

    @pytest.mark.parametrize("extension,mimetype", [
        (".txt", "text/plain"),
        (".md", None),
        (".docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
        ("", None),
    ])
    def test_fallback_is_plain_text(self, extension, mimetype):
        from mansahay_rag.ingestion.processors import PlainTextProcessor, ProcessorRegistry

        processor = ProcessorRegistry().get_processor(extension, mimetype)
        assert isinstance(processor, PlainTextProcessor)

    def test_global_registry_singleton(self):
        from mansahay_rag.ingestion.processors import get_processor_registry

        assert get_processor_registry() is get_processor_registry()


class TestPlainTextLoading:

    @pytest.mark.asyncio
    async def test_load_text_file(self, tmp_path):
        from mansahay_rag.ingestion.processors import ProcessorRegistry

        path = tmp_path / "upload-123"
        path.write_text("Sleep Hygiene\n\nKeep a regular bedtime.", encoding="utf-8")

        document = await ProcessorRegistry().load(path, source="sleep.txt", mimetype="text/plain")

        assert document.source == "sleep.txt"
        assert document.content.startswith("Sleep Hygiene")
        assert document.mime_type == "text/plain"
        assert document.metadata["title"] == "Sleep Hygiene"

    @pytest.mark.asyncio
    async def test_bom_is_stripped(self, tmp_path):
        from mansahay_rag.ingestion.processors import ProcessorRegistry

        path = tmp_path / "bom.txt"
        path.write_bytes(b"\xef\xbb\xbfHello")

        document = await ProcessorRegistry().load(path)
        assert document.content == "Hello"
        assert document.source == "bom.txt"

    @pytest.mark.asyncio
    async def test_zero_byte_file_rejected(self, tmp_path):
        """An empty upload is never reported as a successful zero-chunk ingest."""
        from mansahay_rag.ingestion.processors import ProcessorRegistry

        path = tmp_path / "empty.txt"
        path.write_bytes(b"")

        with pytest.raises(UnsupportedFormatError) as exc_info:
            await ProcessorRegistry().load(path, source="empty.txt", mimetype="text/plain")

        assert exc_info.value.details["reason"] == "no extractable text"

    @pytest.mark.asyncio
    async def test_whitespace_only_rejected(self, tmp_path):
        from mansahay_rag.ingestion.processors import ProcessorRegistry

        path = tmp_path / "blank.txt"
        path.write_text("   \n\n\t  ")

        with pytest.raises(UnsupportedFormatError):
            await ProcessorRegistry().load(path)

    @pytest.mark.asyncio
    async def test_binary_file_rejected(self, tmp_path):
        from mansahay_rag.ingestion.processors import ProcessorRegistry

        path = tmp_path / "photo.jpg"
        path.write_bytes(b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01")

        with pytest.raises(UnsupportedFormatError) as exc_info:
            await ProcessorRegistry().load(path, source="photo.jpg", mimetype="image/jpeg")

        assert "UTF-8" in exc_info.value.details["reason"]

    @pytest.mark.asyncio
    async def test_missing_file_rejected(self, tmp_path):
        from mansahay_rag.ingestion.processors import ProcessorRegistry

        with pytest.raises(UnsupportedFormatError):
            await ProcessorRegistry().load(tmp_path / "gone.txt")


class TestPDFLoading:

    @pytest.mark.asyncio
    async def test_corrupt_pdf_rejected(self, tmp_path):
        from mansahay_rag.ingestion.processors import ProcessorRegistry

        path = tmp_path / "report.pdf"
        path.write_bytes(b"this is not a pdf document at all")

        with pytest.raises(UnsupportedFormatError):
            await ProcessorRegistry().load(path, source="report.pdf", mimetype="application/pdf")

    @pytest.mark.asyncio
    async def test_empty_pdf_rejected(self, tmp_path):
        from mansahay_rag.ingestion.processors import ProcessorRegistry

        path = tmp_path / "empty.pdf"
        path.write_bytes(b"")

        with pytest.raises(UnsupportedFormatError):
            await ProcessorRegistry().load(path, mimetype="application/pdf")

    @pytest.mark.asyncio
    async def test_pdf_without_text_rejected(self, tmp_path):
        from pypdf import PdfWriter
        from mansahay_rag.ingestion.processors import ProcessorRegistry

        writer = PdfWriter()
        writer.add_blank_page(width=200, height=200)
        path = tmp_path / "blank.pdf"
        with open(path, "wb") as f:
            writer.write(f)

        with pytest.raises(UnsupportedFormatError) as exc_info:
            await ProcessorRegistry().load(path, mimetype="application/pdf")

        assert exc_info.value.details["reason"] == "no extractable text"

    @pytest.mark.asyncio
    async def test_encrypted_pdf_rejected(self, tmp_path):
        from pypdf.errors import DependencyError
        from mansahay_rag.ingestion.processors import ProcessorRegistry

        path = tmp_path / "locked.pdf"
        path.write_bytes(b"%PDF-1.7 encrypted")

        with patch(
            "mansahay_rag.ingestion.processors.pdf.PdfReader",
            side_effect=DependencyError("cryptography>=3.1 is required for AES algorithm"),
        ):
            with pytest.raises(UnsupportedFormatError) as exc_info:
                await ProcessorRegistry().load(path, mimetype="application/pdf")

        assert "AES" in exc_info.value.details["reason"]

    @pytest.mark.parametrize("error", [
        TypeError("'NullObject' object is not subscriptable"),
        IndexError("list index out of range"),
    ])
    @pytest.mark.asyncio
    async def test_malformed_pdf_internals_rejected(self, tmp_path, error):
        from mansahay_rag.ingestion.processors import ProcessorRegistry

        path = tmp_path / "broken.pdf"
        path.write_bytes(b"%PDF-1.4 truncated")
        reader = MagicMock()
        type(reader).pages = PropertyMock(side_effect=error)

        with patch("mansahay_rag.ingestion.processors.pdf.PdfReader", return_value=reader):
            with pytest.raises(UnsupportedFormatError) as exc_info:
                await ProcessorRegistry().load(path, source="broken.pdf", mimetype="application/pdf")

        assert type(error).__name__ in exc_info.value.details["reason"]
