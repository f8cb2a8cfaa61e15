"""
Mansahay RAG - Document Processors Module
"""

from __future__ import annotations

from mansahay_rag.ingestion.processors.base import (
    DocumentProcessor,
    ProcessedDocument,
)
from mansahay_rag.ingestion.processors.text import PlainTextProcessor
from mansahay_rag.ingestion.processors.pdf import PDFProcessor
from mansahay_rag.ingestion.processors.registry import (
    ProcessorRegistry,
    get_processor_registry,
)

__all__ = [
    # Base
    "DocumentProcessor",
    "ProcessedDocument",
    # Processors
    "PlainTextProcessor",
    "PDFProcessor",
    # Registry
    "ProcessorRegistry",
    "get_processor_registry",
]
