"""
Mansahay RAG - Resource Routes
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from mansahay_rag.core.config import settings
from mansahay_rag.core.logging import get_logger
from mansahay_rag.storage import QdrantVectorStore, get_vector_store


router = APIRouter()
logger = get_logger(__name__)


class DeleteResourceResponse(BaseModel):
    success: bool = True
    deleted: int


@router.delete("/resource/{filename}", response_model=DeleteResourceResponse)
async def delete_resource(
    filename: str,
    collection: Optional[str] = Query(None),
    vector_store: QdrantVectorStore = Depends(get_vector_store),
):
    """Remove every indexed chunk that came from the given file."""
    collection = collection or settings.QDRANT_COLLECTION_NAME
    deleted = await vector_store.delete_by_source(collection, filename)

    logger.info("Resource deleted", filename=filename, collection=collection, chunks=deleted)
    return DeleteResourceResponse(deleted=deleted)
