"""FastAPI application setup."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docqa.api.controller import chat_router, document_router
from docqa.api.errors import docqa_error_handler
from docqa.exceptions import DocQAError


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="DocQA API",
        description="Upload a PDF, get a summary and ask questions about it",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production: specify the frontend origin
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DocQAError, docqa_error_handler)

    # Include routers
    app.include_router(document_router)
    app.include_router(chat_router)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
