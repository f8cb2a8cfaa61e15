"""
Mansahay RAG - Main Entry Point
"""

import uvicorn

from mansahay_rag.app import create_app
from mansahay_rag.core.config import settings

app = create_app()


def run() -> None:
    uvicorn.run(
        "mansahay_rag.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=1 if settings.DEBUG else settings.WORKERS,
    )


if __name__ == "__main__":
    run()
