"""FastAPI dependencies shared by the controllers."""

from typing import Optional

from docqa.clients.document_assistant_client import create_document_assistant_client
from docqa.config.configuration import UploadConfig, configure_logging, get_config
from docqa.services.document_session import DocumentSession

# Single user, single document: one session per process.
_session: Optional[DocumentSession] = None


def get_document_session() -> DocumentSession:
    """Get or create the process-wide document session."""
    global _session
    if _session is None:
        configure_logging(get_config().logging)
        client = create_document_assistant_client()
        _session = DocumentSession(summarizer=client, answerer=client)
    return _session


def get_upload_config() -> UploadConfig:
    return get_config().upload
