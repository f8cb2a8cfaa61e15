"""
Mansahay RAG - Configuration Management
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and the .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------
    RAG_ENV: str = Field(default="development", description="Environment name")
    DEBUG: bool = Field(default=False, description="Debug mode")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------
    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=3001, description="Server port")
    WORKERS: int = Field(default=1, description="Number of workers")
    CORS_ORIGINS: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    # -------------------------------------------------------------------------
    # Vector Store
    # -------------------------------------------------------------------------
    QDRANT_URL: str = Field(
        default="http://localhost:6333",
        description="Qdrant server URL"
    )
    QDRANT_API_KEY: Optional[str] = Field(default=None, description="Qdrant API key")
    QDRANT_COLLECTION_NAME: str = Field(
        default="mansahay_knowledge_base",
        description="Default collection shared by ingestion and search"
    )

    # -------------------------------------------------------------------------
    # LLM Providers
    # -------------------------------------------------------------------------
    OPENAI_API_KEY: Optional[str] = Field(default=None, description="OpenAI API key")
    ANTHROPIC_API_KEY: Optional[str] = Field(default=None, description="Anthropic API key")

    DEFAULT_LLM_PROVIDER: str = Field(default="openai", description="Provider used for query expansion")
    DEFAULT_LLM_MODEL: Optional[str] = Field(default=None, description="Override the provider's default model")

    # -------------------------------------------------------------------------
    # Embeddings
    # -------------------------------------------------------------------------
    EMBEDDING_MODEL: str = Field(default="text-embedding-3-small", description="Embedding model")
    EMBEDDING_DIMENSIONS: int = Field(default=1536, description="Embedding dimensions")
    EMBEDDING_BATCH_SIZE: int = Field(default=100, description="Texts per embedding request")

    # -------------------------------------------------------------------------
    # Document Processing
    # -------------------------------------------------------------------------
    CHUNK_SIZE: int = Field(default=1000, description="Target chunk size in characters")
    CHUNK_OVERLAP: int = Field(default=200, description="Overlap between consecutive chunks")
    UPLOAD_DIR: str = Field(default="uploads", description="Temporary upload directory")
    MAX_FILE_SIZE_MB: int = Field(default=50, description="Max file size in MB")

    # -------------------------------------------------------------------------
    # Retrieval
    # -------------------------------------------------------------------------
    QUERY_EXPANSIONS: int = Field(default=3, description="LLM paraphrases per search")
    PER_VARIANT_TOP_K: int = Field(default=5, description="Results fetched per query variant")
    SEARCH_TOP_K: int = Field(default=6, description="Fused results returned")
    RRF_K: int = Field(default=60, description="Reciprocal Rank Fusion smoothing constant")
    EXPOSE_FUSION_SCORES: bool = Field(
        default=False,
        description="Return raw RRF scores instead of the constant placeholder"
    )

    # -------------------------------------------------------------------------
    # External calls
    # -------------------------------------------------------------------------
    EXTERNAL_CALL_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="Upper bound for every LLM, embedding and vector store call"
    )

    @property
    def upload_path(self) -> Path:
        """Get the upload directory as a Path."""
        return Path(self.UPLOAD_DIR)

    @property
    def max_file_size_bytes(self) -> int:
        return self.MAX_FILE_SIZE_MB * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
