"""Data models module."""

from docqa.models.assistant import (
    AnswerQuestionsInput,
    AnswerQuestionsOutput,
    ConversationTurn,
    SummarizeDocumentInput,
    SummarizeDocumentOutput,
)
from docqa.models.conversation import (
    ExchangeStatus,
    Message,
    MessageType,
    QuestionExchange,
    Turn,
)
from docqa.models.document import PDF_MIME_TYPE, Document, SourceFile
from docqa.models.session import SessionState, SessionStatus

__all__ = [
    "AnswerQuestionsInput",
    "AnswerQuestionsOutput",
    "ConversationTurn",
    "Document",
    "ExchangeStatus",
    "Message",
    "MessageType",
    "PDF_MIME_TYPE",
    "QuestionExchange",
    "SessionState",
    "SessionStatus",
    "SourceFile",
    "SummarizeDocumentInput",
    "SummarizeDocumentOutput",
    "Turn",
]
