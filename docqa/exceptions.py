"""Error taxonomy for the document Q&A pipeline.

Every error carries a human-readable ``user_message`` that is safe to show to
the person using the app. ``str(error)`` holds the technical detail for logs.
"""

from typing import Optional


class DocQAError(Exception):
    """Base class for all pipeline errors."""

    user_message = "An unknown error occurred."

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.user_message)


class UnsupportedFileTypeError(DocQAError):
    """Raised before any processing when the upload is not a PDF."""

    user_message = "Invalid file type. Please upload a PDF."


class SourceReadError(DocQAError):
    """Raised when the uploaded file's bytes cannot be read."""

    user_message = "Could not read the uploaded file."


class MalformedDocumentError(DocQAError):
    """Raised when the bytes cannot be parsed as a PDF."""

    user_message = "Could not read the PDF. The file may be damaged or not a real PDF."


class EmptyExtractionError(DocQAError):
    """Raised when a PDF parses but contains no extractable text."""

    user_message = (
        "Could not extract text from the PDF. "
        "The document might be empty or a scanned image."
    )


class SummarizationFailedError(DocQAError):
    """Raised when the summarization collaborator fails or returns nothing."""

    user_message = "Failed to summarize document."


class AnswerUnavailableError(DocQAError):
    """Raised when the answering collaborator fails or returns nothing."""

    user_message = "Failed to get an answer."


class SessionBusyError(DocQAError):
    """Raised when a file is submitted while another is processed or loaded."""

    user_message = "A document is already loaded or being processed. Reset the session first."


class SessionNotReadyError(DocQAError):
    """Raised when a question is asked before a document is ready."""

    user_message = "Please upload a PDF before asking questions."


class EmptyQuestionError(DocQAError):
    user_message = "Please type a question."


class QuestionInFlightError(DocQAError):
    """Raised when a question arrives while the previous one is unanswered."""

    user_message = "Please wait for the current answer before asking another question."
