"""
Mansahay RAG - Core Module

This module provides functionality used throughout the service:
- Configuration management
- Logging
- Custom exceptions
- Shared type definitions
"""

from mansahay_rag.core.config import Settings, get_settings, settings
from mansahay_rag.core.exceptions import (
    RAGException,
    IngestionError,
    UnsupportedFormatError,
    InvalidInputError,
    EmbeddingError,
    RetrievalError,
    VectorStoreError,
    SearchError,
    GenerationError,
    LLMError,
    ExpansionError,
    ValidationError,
    ConfigurationError,
)
from mansahay_rag.core.logging import get_logger, setup_logging, LoggerMixin
from mansahay_rag.core.types import (
    Document,
    Chunk,
    SearchResult,
    FusedResult,
    FusionSearchResult,
    IngestionResult,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "settings",
    # Logging
    "get_logger",
    "setup_logging",
    "LoggerMixin",
    # Exceptions
    "RAGException",
    "IngestionError",
    "UnsupportedFormatError",
    "InvalidInputError",
    "EmbeddingError",
    "RetrievalError",
    "VectorStoreError",
    "SearchError",
    "GenerationError",
    "LLMError",
    "ExpansionError",
    "ValidationError",
    "ConfigurationError",
    # Types
    "Document",
    "Chunk",
    "SearchResult",
    "FusedResult",
    "FusionSearchResult",
    "IngestionResult",
]
