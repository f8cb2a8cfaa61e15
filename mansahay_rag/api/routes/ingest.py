"""
Mansahay RAG - Ingestion Routes
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel

from mansahay_rag.core.config import settings
from mansahay_rag.core.exceptions import ValidationError
from mansahay_rag.core.logging import get_logger
from mansahay_rag.ingestion.pipeline import IngestionPipeline, get_ingestion_pipeline


router = APIRouter()
logger = get_logger(__name__)


class IngestResponse(BaseModel):
    """Response schema for a successful ingestion."""
    success: bool = True
    message: str
    chunks: int
    fileId: str


def _store_upload(upload: UploadFile) -> Path:
    """Stream the upload into the temporary upload directory. Blocking."""
    upload_dir = settings.upload_path
    upload_dir.mkdir(parents=True, exist_ok=True)
    path = upload_dir / f"{uuid4().hex}-{Path(upload.filename).name}"
    with path.open("wb") as out:
        shutil.copyfileobj(upload.file, out)
    return path


def _too_large() -> ValidationError:
    return ValidationError(f"File exceeds {settings.MAX_FILE_SIZE_MB} MB limit", field="file")


@router.post("/ingest", response_model=IngestResponse)
async def ingest_file(
    file: Optional[UploadFile] = File(None),
    collection: Optional[str] = Form(None),
    pipeline: IngestionPipeline = Depends(get_ingestion_pipeline),
):
    """Upload a file, chunk it, and index it into the knowledge base."""
    if file is None or not file.filename:
        raise ValidationError("No file uploaded", field="file")

    limit = settings.max_file_size_bytes
    if file.size is not None and file.size > limit:
        raise _too_large()

    path = await asyncio.to_thread(_store_upload, file)
    size = path.stat().st_size
    # Size is unknown up front for some clients
    if size > limit:
        path.unlink(missing_ok=True)
        raise _too_large()

    logger.info("Processing upload", filename=file.filename, size=size)

    result = await pipeline.ingest_file(
        path,
        filename=file.filename,
        mimetype=file.content_type,
        collection=collection,
    )

    return IngestResponse(
        message="Ingested successfully",
        chunks=result.chunk_count,
        fileId=result.resource_id,
    )
