"""Client modules for external services."""

from docqa.clients.document_assistant_client import (
    Answerer,
    DocumentAssistantClient,
    DocumentAssistantError,
    Summarizer,
    create_document_assistant_client,
)

__all__ = [
    "Answerer",
    "DocumentAssistantClient",
    "DocumentAssistantError",
    "Summarizer",
    "create_document_assistant_client",
]
