"""
Mansahay RAG - Error Handler Middleware
"""

from __future__ import annotations

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from mansahay_rag.core.exceptions import RAGException
from mansahay_rag.core.logging import get_logger

logger = get_logger(__name__)


async def error_handler_middleware(request: Request, call_next) -> Response:
    """Global error handler middleware."""
    try:
        return await call_next(request)
    except RAGException as e:
        log = logger.warning if e.status_code < 500 else logger.error
        log(
            "RAG exception",
            code=e.code,
            message=e.message,
            details=e.details,
            status_code=e.status_code,
        )
        return JSONResponse(
            status_code=e.status_code,
            content={
                "error": e.message,
                "code": e.code,
                "details": e.details,
            }
        )
    except Exception as e:
        logger.exception("Unhandled exception", error=str(e))
        return JSONResponse(
            status_code=500,
            content={
                "error": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            }
        )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed request bodies as 400 with a readable message."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if location:
        message = f"{location}: {message}"

    logger.warning("Request validation failed", path=request.url.path, error=message)
    return JSONResponse(
        status_code=400,
        content={"error": message, "code": "VALIDATION_ERROR"},
    )
