"""API controllers."""

from docqa.api.controller.chat_controller import router as chat_router
from docqa.api.controller.document_controller import router as document_router

__all__ = ["chat_router", "document_router"]
