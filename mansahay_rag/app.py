"""
Mansahay RAG - Application Factory
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from mansahay_rag.core.config import settings
from mansahay_rag.core.logging import get_logger, setup_logging
from mansahay_rag.api.routes import health, ingest, resources, search
from mansahay_rag.api.middleware import (
    error_handler_middleware,
    logging_middleware,
    validation_exception_handler,
)
from mansahay_rag.storage import init_vector_store, close_vector_store

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan handler for startup and shutdown events."""
    setup_logging()
    logger.info("Starting Mansahay RAG server", env=settings.RAG_ENV, port=settings.PORT)

    # The store reconnects on first use if Qdrant comes up later
    try:
        await init_vector_store()
        logger.info("Vector store initialized", collection=settings.QDRANT_COLLECTION_NAME)
    except Exception as e:
        logger.error("Failed to initialize vector store", error=str(e))

    yield

    logger.info("Shutting down Mansahay RAG server")
    await close_vector_store()
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Mansahay RAG",
        description="Knowledge base ingestion and multi-query fusion search",
        version="0.1.0",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )

    # Last added runs first: logging -> error_handler
    app.middleware("http")(error_handler_middleware)
    app.middleware("http")(logging_middleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(health.router, tags=["Health"])
    app.include_router(ingest.router, tags=["Ingestion"])
    app.include_router(search.router, tags=["Search"])
    app.include_router(resources.router, tags=["Resources"])

    return app
