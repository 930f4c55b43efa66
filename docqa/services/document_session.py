"""Document session controller.

Drives one uploaded PDF through EMPTY → PROCESSING → READY | FAILED:
- Text extraction and data-URI encoding run concurrently
- The data URI is summarized by the hosted model
- Questions are only accepted once the session is READY

Every submit and reset starts a new generation. Results that arrive for an
older generation are discarded instead of being applied to the session.
"""

import asyncio
import logging
from typing import Callable, List, Optional

from docqa.chat.conversation import Conversation
from docqa.chat.question_answering import QuestionAnsweringOrchestrator
from docqa.clients.document_assistant_client import Answerer, Summarizer
from docqa.exceptions import (
    DocQAError,
    EmptyExtractionError,
    SessionBusyError,
    SessionNotReadyError,
    SummarizationFailedError,
    UnsupportedFileTypeError,
)
from docqa.ingestion.data_uri import file_to_data_uri
from docqa.ingestion.pdf_extraction import PAGE_SEPARATOR, extract_text_from_pdf
from docqa.models.assistant import SummarizeDocumentInput
from docqa.models.conversation import Message, Turn
from docqa.models.document import Document, SourceFile
from docqa.models.session import SessionState, SessionStatus

logger = logging.getLogger(__name__)

SessionObserver = Callable[[SessionState], None]


class DocumentSession:
    """Holds the active document, its summary and its conversation."""

    def __init__(self, summarizer: Summarizer, answerer: Answerer):
        """Initialize an empty session.

        Args:
            summarizer: Collaborator that summarizes a PDF data URI.
            answerer: Collaborator that answers questions about document text.
        """
        self._summarizer = summarizer
        self._orchestrator = QuestionAnsweringOrchestrator(answerer)
        self._observers: List[SessionObserver] = []
        self._generation = 0
        self._state = SessionState(status=SessionStatus.EMPTY, generation=0)
        self._conversation: Optional[Conversation] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def conversation(self) -> Optional[Conversation]:
        return self._conversation

    @property
    def messages(self) -> List[Message]:
        return self._conversation.messages if self._conversation is not None else []

    def transcript(self) -> List[Turn]:
        return self._conversation.transcript() if self._conversation is not None else []

    def subscribe(self, observer: SessionObserver) -> None:
        """Register a callback invoked with the new state on every transition."""
        self._observers.append(observer)

    def unsubscribe(self, observer: SessionObserver) -> None:
        self._observers.remove(observer)

    async def submit_file(self, source_file: SourceFile) -> SessionState:
        """
        Extract, encode and summarize an uploaded PDF.

        Args:
            source_file: The uploaded file.

        Returns:
            The READY state, or the current state if the upload was superseded
            by a reset while it was processing.

        Raises:
            UnsupportedFileTypeError: If the file is not a PDF. No transition happens.
            SessionBusyError: If a document is loaded or being processed.
            SourceReadError, MalformedDocumentError, EmptyExtractionError,
            SummarizationFailedError: After the session has moved to FAILED.
        """
        if not source_file.is_pdf:
            raise UnsupportedFileTypeError(
                f"Rejected {source_file.name}: unsupported type {source_file.mime_type!r}"
            )
        if self._state.status in (SessionStatus.PROCESSING, SessionStatus.READY):
            raise SessionBusyError(
                f"Cannot accept {source_file.name} while session is {self._state.status.value}"
            )

        self._generation += 1
        generation = self._generation
        self._transition(
            SessionState(
                status=SessionStatus.PROCESSING,
                generation=generation,
                file_name=source_file.name,
            )
        )
        logger.info(f"Processing upload: {source_file.name}")

        try:
            document = await self._load_document(source_file)
            if self._is_stale(generation):
                logger.info(f"Discarding superseded extraction of {source_file.name}")
                return self._state
            summary = await self._summarize(document)
        except DocQAError as e:
            if self._is_stale(generation):
                logger.info(f"Discarding failure of superseded upload {source_file.name}: {e}")
                return self._state
            logger.warning(f"Upload of {source_file.name} failed: {e}")
            self._transition(
                SessionState(
                    status=SessionStatus.FAILED,
                    generation=generation,
                    file_name=source_file.name,
                    error=e,
                )
            )
            raise

        if self._is_stale(generation):
            logger.info(f"Discarding superseded summary of {source_file.name}")
            return self._state

        self._conversation = Conversation(document.text, summary, self._orchestrator)
        self._transition(
            SessionState(
                status=SessionStatus.READY,
                generation=generation,
                file_name=source_file.name,
                document=document,
                summary=summary,
            )
        )
        logger.info(f"Session ready: {source_file.name} ({document.page_count} pages)")
        return self._state

    def reset(self) -> SessionState:
        """Drop the document, summary and conversation and return to EMPTY."""
        if self._state.status is SessionStatus.EMPTY:
            return self._state

        self._generation += 1
        self._conversation = None
        self._transition(SessionState(status=SessionStatus.EMPTY, generation=self._generation))
        logger.info("Session reset")
        return self._state

    async def ask(self, question: str) -> str:
        """
        Ask a question about the loaded document.

        Raises:
            SessionNotReadyError: If no document is ready.
            EmptyQuestionError, QuestionInFlightError, AnswerUnavailableError:
                Propagated from the conversation.
        """
        conversation = self._conversation
        if not self._state.is_ready or conversation is None:
            raise SessionNotReadyError(f"Session is {self._state.status.value}")

        generation = self._generation
        answer = await conversation.ask(question)
        if self._is_stale(generation):
            logger.info("Answer arrived after the session was reset; conversation discarded")
        return answer

    async def _load_document(self, source_file: SourceFile) -> Document:
        """Run extraction and data-URI encoding concurrently and build the Document."""
        text, data_uri = await asyncio.gather(
            self._extract_text(source_file),
            file_to_data_uri(source_file),
        )

        if not text.strip():
            raise EmptyExtractionError(f"No text extracted from {source_file.name}")

        return Document(
            file_name=source_file.name,
            text=text,
            data_uri=data_uri,
            page_count=text.count(PAGE_SEPARATOR),
        )

    async def _extract_text(self, source_file: SourceFile) -> str:
        content = await source_file.read()
        return await asyncio.to_thread(extract_text_from_pdf, content, source_file.name)

    async def _summarize(self, document: Document) -> str:
        try:
            result = await self._summarizer.summarize_document(
                SummarizeDocumentInput(document_data_uri=document.data_uri)
            )
        except Exception as e:
            raise SummarizationFailedError(
                f"Failed to summarize {document.file_name}: {e}"
            ) from e

        summary = result.summary.strip() if result is not None else ""
        if not summary:
            raise SummarizationFailedError(f"Empty summary for {document.file_name}")
        return summary

    def _is_stale(self, generation: int) -> bool:
        return generation != self._generation

    def _transition(self, state: SessionState) -> None:
        self._state = state
        for observer in list(self._observers):
            observer(state)
