"""
Tests for mansahay_rag/core/exceptions.py
"""

import pytest

from mansahay_rag.core.exceptions import (
    EmbeddingError,
    ExpansionError,
    IngestionError,
    InvalidInputError,
    LLMError,
    LLMRateLimitError,
    RAGException,
    RetrievalError,
    UnsupportedFormatError,
    ValidationError,
    VectorStoreError,
)


class TestExceptionHierarchy:
    """All service errors share one root."""

    @pytest.mark.parametrize("exc", [
        ValidationError("bad"),
        UnsupportedFormatError("a.bin", "binary"),
        InvalidInputError("bad params"),
        EmbeddingError("down"),
        VectorStoreError("down"),
        ExpansionError("q", "empty"),
        LLMError("openai", "boom"),
    ])
    def test_is_rag_exception(self, exc):
        assert isinstance(exc, RAGException)

    def test_ingestion_errors(self):
        assert issubclass(UnsupportedFormatError, IngestionError)
        assert issubclass(InvalidInputError, IngestionError)
        assert issubclass(EmbeddingError, IngestionError)

    def test_vector_store_error_is_retrieval_error(self):
        assert issubclass(VectorStoreError, RetrievalError)

    def test_rate_limit_is_llm_error(self):
        err = LLMRateLimitError("anthropic", retry_after=5)
        assert isinstance(err, LLMError)
        assert err.retry_after == 5


class TestStatusCodes:
    """Each error carries the HTTP status it maps to."""

    def test_client_errors(self):
        assert ValidationError("x").status_code == 400
        assert InvalidInputError("x").status_code == 400
        assert UnsupportedFormatError("a", "b").status_code == 415

    def test_upstream_errors(self):
        assert EmbeddingError("x").status_code == 502
        assert VectorStoreError("x").status_code == 502

    def test_default_is_internal(self):
        assert RAGException("x").status_code == 500


class TestExceptionPayloads:

    def test_unsupported_format_details(self):
        err = UnsupportedFormatError("notes.bin", "file is not valid UTF-8 text")
        assert err.code == "UNSUPPORTED_FORMAT"
        assert err.details == {"source": "notes.bin", "reason": "file is not valid UTF-8 text"}
        assert "notes.bin" in err.message

    def test_validation_error_field(self):
        err = ValidationError("Query required", field="query")
        assert err.code == "VALIDATION_ERROR"
        assert err.details == {"field": "query"}

    def test_validation_error_without_field(self):
        assert ValidationError("bad").details == {}

    def test_expansion_error_does_not_leak_query(self):
        err = ExpansionError("I feel hopeless", "timed out")
        assert err.code == "EXPANSION_ERROR"
        assert "hopeless" not in str(err.details)
        assert err.details["query_length"] == len("I feel hopeless")
