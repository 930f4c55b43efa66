"""Conversation models: messages, resolved turns and question exchanges."""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class MessageType(str, Enum):
    """Kinds of entries in a conversation's message history."""

    SUMMARY = "summary"
    USER = "user"
    ASSISTANT = "assistant"
    PENDING = "pending"


def _new_message_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Message:
    """One entry of the message history shown to the user."""

    type: MessageType
    content: str
    id: str = field(default_factory=_new_message_id)


@dataclass(frozen=True)
class Turn:
    """A resolved question/answer pair.

    Only built once both sides exist; an unanswered question is never a Turn.
    """

    question: str
    answer: str


class ExchangeStatus(str, Enum):
    PENDING = "pending"
    ANSWERED = "answered"
    FAILED = "failed"


@dataclass
class QuestionExchange:
    """Lifecycle of a single question: PENDING → ANSWERED | FAILED.

    Tracks the ids of the user message and the pending marker so that the
    marker can be replaced or removed by id instead of by list position.
    """

    question: str
    user_message_id: str
    pending_message_id: str
    status: ExchangeStatus = ExchangeStatus.PENDING
    answer: Optional[str] = None
    error: Optional[Exception] = None

    def resolve(self, answer: str) -> None:
        if self.status is not ExchangeStatus.PENDING:
            raise RuntimeError(f"Cannot answer an exchange that is already {self.status.value}")
        self.status = ExchangeStatus.ANSWERED
        self.answer = answer

    def fail(self, error: Exception) -> None:
        if self.status is not ExchangeStatus.PENDING:
            raise RuntimeError(f"Cannot fail an exchange that is already {self.status.value}")
        self.status = ExchangeStatus.FAILED
        self.error = error
