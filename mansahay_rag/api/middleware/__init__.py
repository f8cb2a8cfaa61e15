from __future__ import annotations

from mansahay_rag.api.middleware.error_handler import (
    error_handler_middleware,
    validation_exception_handler,
)
from mansahay_rag.api.middleware.logging import logging_middleware

__all__ = [
    "error_handler_middleware",
    "validation_exception_handler",
    "logging_middleware",
]
