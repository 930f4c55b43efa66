"""Service modules."""

from docqa.services.document_session import DocumentSession, SessionObserver

__all__ = ["DocumentSession", "SessionObserver"]
