"""
Mansahay RAG - Document Processor Base Classes
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from mansahay_rag.core.logging import LoggerMixin


@dataclass
class ProcessedDocument:
    """Text extracted from one upload."""
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    title: Optional[str] = None


class DocumentProcessor(ABC, LoggerMixin):
    """
    Extracts text from the raw bytes of one family of upload formats.

    ``mimetypes`` and ``extensions`` drive routing in ProcessorRegistry:
    the uploader's MIME type wins, the filename extension is the fallback.
    """

    mimetypes: tuple[str, ...] = ()
    extensions: tuple[str, ...] = ()

    @classmethod
    def handles(cls, extension: str, mimetype: Optional[str] = None) -> bool:
        if mimetype and mimetype.lower() in cls.mimetypes:
            return True
        return extension.lower() in cls.extensions

    @abstractmethod
    def extract(self, data: bytes, source: str) -> ProcessedDocument:
        """
        Extract text from file contents.

        Runs in a worker thread, so implementations may block.

        Raises:
            UnsupportedFormatError: If the bytes are not a readable document
        """
        pass
