"""
Mansahay RAG - API Routes
"""

from __future__ import annotations

from mansahay_rag.api.routes import health, ingest, resources, search

__all__ = ["health", "ingest", "resources", "search"]
