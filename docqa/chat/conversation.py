"""Message history and question lifecycle for a loaded document."""

import logging
from typing import List, Optional

from docqa.chat.question_answering import QuestionAnsweringOrchestrator
from docqa.chat.transcript import build_transcript
from docqa.exceptions import EmptyQuestionError, QuestionInFlightError
from docqa.models.conversation import (
    ExchangeStatus,
    Message,
    MessageType,
    QuestionExchange,
    Turn,
)

logger = logging.getLogger(__name__)

SUMMARY_INTRO = "Here's a quick summary of your document:\n\n"


class Conversation:
    """Question/answer conversation about one document.

    The message history is the source of truth; the transcript sent with each
    question is rebuilt from it. At most one question is in flight: a second
    question while one is pending is rejected, not queued.
    """

    def __init__(
        self,
        document_text: str,
        summary: str,
        orchestrator: QuestionAnsweringOrchestrator,
    ):
        self._document_text = document_text
        self._orchestrator = orchestrator
        self._messages: List[Message] = [
            Message(type=MessageType.SUMMARY, content=f"{SUMMARY_INTRO}{summary}")
        ]
        self._current: Optional[QuestionExchange] = None

    @property
    def messages(self) -> List[Message]:
        return list(self._messages)

    @property
    def is_busy(self) -> bool:
        return self._current is not None and self._current.status is ExchangeStatus.PENDING

    def transcript(self) -> List[Turn]:
        return build_transcript(self._messages)

    async def ask(self, question: str) -> str:
        """
        Ask a question and record the answer in the history.

        Args:
            question: The user's question; surrounding whitespace is ignored.

        Returns:
            The answer text.

        Raises:
            EmptyQuestionError: If the question is blank.
            QuestionInFlightError: If a previous question is still unanswered.
            AnswerUnavailableError: If no answer could be produced. The
                pending marker is removed and the question stays unanswered.
        """
        question = question.strip()
        if not question:
            raise EmptyQuestionError()
        if self.is_busy:
            raise QuestionInFlightError()

        # Built before the new question is appended so it never includes it.
        transcript = self.transcript()
        exchange = self._start_exchange(question)

        try:
            answer = await self._orchestrator.answer(self._document_text, question, transcript)
        except Exception as e:
            self._fail_exchange(exchange, e)
            raise

        self._resolve_exchange(exchange, answer)
        return answer

    def _start_exchange(self, question: str) -> QuestionExchange:
        user_message = Message(type=MessageType.USER, content=question)
        pending_message = Message(type=MessageType.PENDING, content="")
        self._messages.extend([user_message, pending_message])

        exchange = QuestionExchange(
            question=question,
            user_message_id=user_message.id,
            pending_message_id=pending_message.id,
        )
        self._current = exchange
        return exchange

    def _resolve_exchange(self, exchange: QuestionExchange, answer: str) -> None:
        exchange.resolve(answer)
        index = self._index_of(exchange.pending_message_id)
        self._messages[index] = Message(type=MessageType.ASSISTANT, content=answer)
        logger.debug(f"Answered question: {exchange.question[:50]}")

    def _fail_exchange(self, exchange: QuestionExchange, error: Exception) -> None:
        exchange.fail(error)
        del self._messages[self._index_of(exchange.pending_message_id)]
        logger.warning(f"Question failed, pending marker removed: {error}")

    def _index_of(self, message_id: str) -> int:
        for index, message in enumerate(self._messages):
            if message.id == message_id:
                return index
        raise LookupError(f"Message {message_id} is not in the history")
