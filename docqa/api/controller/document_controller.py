"""REST controller for uploading and resetting the session's document."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel

from docqa.api.dependencies import get_document_session, get_upload_config
from docqa.config.configuration import UploadConfig
from docqa.exceptions import SourceReadError
from docqa.models.document import SourceFile
from docqa.models.session import SessionState, SessionStatus
from docqa.services.document_session import DocumentSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])

DEFAULT_UPLOAD_NAME = "upload.pdf"


class SessionResponse(BaseModel):
    """Current session state as seen by the client."""

    status: SessionStatus
    file_name: Optional[str] = None
    summary: Optional[str] = None
    page_count: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def from_state(cls, state: SessionState) -> "SessionResponse":
        return cls(
            status=state.status,
            file_name=state.file_name,
            summary=state.summary,
            page_count=state.document.page_count if state.document else None,
            error=state.error_message,
        )


@router.post("", response_model=SessionResponse)
async def upload_document(
    file: UploadFile = File(...),
    session: DocumentSession = Depends(get_document_session),
    upload_config: UploadConfig = Depends(get_upload_config),
) -> SessionResponse:
    """
    Upload a PDF, extract its text and summarize it.

    Responds once the session is READY. Failures are reported with the
    error's user message (see docqa.api.errors for status codes).
    """
    try:
        content = await file.read()
    except OSError as e:
        raise SourceReadError(f"Failed to read upload {file.filename}: {e}") from e

    if len(content) > upload_config.max_file_size_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File is larger than {upload_config.max_file_size_mb} MB.",
        )

    source_file = SourceFile.from_bytes(
        name=file.filename or DEFAULT_UPLOAD_NAME,
        mime_type=file.content_type,
        content=content,
    )
    logger.info(f"Received upload {source_file.name} ({len(content)} bytes)")

    state = await session.submit_file(source_file)
    return SessionResponse.from_state(state)


@router.get("/current", response_model=SessionResponse)
async def get_current_document(
    session: DocumentSession = Depends(get_document_session),
) -> SessionResponse:
    return SessionResponse.from_state(session.state)


@router.delete("/current", response_model=SessionResponse)
async def reset_document(
    session: DocumentSession = Depends(get_document_session),
) -> SessionResponse:
    """Discard the document, summary and conversation."""
    return SessionResponse.from_state(session.reset())
