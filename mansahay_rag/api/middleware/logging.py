"""
Mansahay RAG - Logging Middleware
"""

import time
from uuid import uuid4

from fastapi import Request, Response

from mansahay_rag.core.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)


async def logging_middleware(request: Request, call_next) -> Response:
    """Request/response logging middleware."""
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    start_time = time.perf_counter()

    request.state.request_id = request_id
    # Every log line emitted while handling this request carries the id
    bind_request_context(request_id=request_id)

    logger.info(
        "Request started",
        method=request.method,
        path=request.url.path,
    )

    try:
        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        return response
    finally:
        clear_request_context()
