"""Chat module for document question answering."""

from docqa.chat.conversation import Conversation
from docqa.chat.question_answering import QuestionAnsweringOrchestrator
from docqa.chat.transcript import build_transcript

__all__ = [
    "Conversation",
    "QuestionAnsweringOrchestrator",
    "build_transcript",
]
