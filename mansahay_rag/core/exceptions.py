"""
Mansahay RAG - Custom Exceptions
"""

from typing import Any, Optional


class RAGException(Exception):
    """Base exception for all RAG service errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "RAG_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Ingestion Exceptions
# =============================================================================

class IngestionError(RAGException):
    """Base exception for ingestion errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, code="INGESTION_ERROR", details=details)


class UnsupportedFormatError(IngestionError):
    """Raised when an uploaded file cannot be loaded as text."""

    status_code = 415

    def __init__(self, source: str, reason: str):
        super().__init__(
            message=f"Could not load {source}: {reason}",
            details={"source": source, "reason": reason},
        )
        self.code = "UNSUPPORTED_FORMAT"


class InvalidInputError(IngestionError):
    """Raised when chunking parameters or chunker input are invalid."""

    status_code = 400

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, details=details)
        self.code = "INVALID_INPUT"


class EmbeddingError(IngestionError):
    """Raised when embedding generation fails."""

    status_code = 502

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, details=details)
        self.code = "EMBEDDING_ERROR"


# =============================================================================
# Retrieval Exceptions
# =============================================================================

class RetrievalError(RAGException):
    """Base exception for retrieval errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, code="RETRIEVAL_ERROR", details=details)


class VectorStoreError(RetrievalError):
    """Raised when vector store operations fail."""

    status_code = 502

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, details=details)
        self.code = "VECTOR_STORE_ERROR"


class SearchError(RetrievalError):
    """Raised when a similarity search cannot be completed."""

    status_code = 502


# =============================================================================
# Generation Exceptions
# =============================================================================

class GenerationError(RAGException):
    """Base exception for generation errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, code="GENERATION_ERROR", details=details)


class LLMError(GenerationError):
    """Raised when LLM operations fail."""

    status_code = 502

    def __init__(self, provider: str, message: str):
        super().__init__(
            message=f"LLM error ({provider}): {message}",
            details={"provider": provider}
        )


class LLMRateLimitError(LLMError):
    """Raised when LLM rate limit is exceeded."""

    def __init__(self, provider: str, retry_after: Optional[int] = None):
        super().__init__(
            provider=provider,
            message="Rate limit exceeded"
        )
        self.retry_after = retry_after


class ExpansionError(GenerationError):
    """Raised when query expansion fails or yields nothing usable."""

    def __init__(self, query: str, reason: str):
        super().__init__(
            message=f"Query expansion failed: {reason}",
            details={"query_length": len(query), "reason": reason},
        )
        self.code = "EXPANSION_ERROR"


# =============================================================================
# Validation Exceptions
# =============================================================================

class ValidationError(RAGException):
    """Raised when request input is malformed or missing."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field": field} if field else {}
        )


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigurationError(RAGException):
    """Raised when configuration is invalid."""

    def __init__(self, message: str):
        super().__init__(message, code="CONFIGURATION_ERROR")
