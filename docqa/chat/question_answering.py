"""Question answering over a document's full text."""

import logging
from typing import Sequence

from docqa.clients.document_assistant_client import Answerer
from docqa.exceptions import AnswerUnavailableError
from docqa.models.assistant import AnswerQuestionsInput, ConversationTurn
from docqa.models.conversation import Turn

logger = logging.getLogger(__name__)


class QuestionAnsweringOrchestrator:
    """Sends document text, transcript and question to the answering collaborator.

    Keeps no state between calls: the caller owns and threads the transcript.
    """

    def __init__(self, answerer: Answerer):
        self._answerer = answerer

    async def answer(
        self,
        document_text: str,
        question: str,
        transcript: Sequence[Turn],
    ) -> str:
        """
        Answer a question about the document.

        Args:
            document_text: Full extracted text of the document.
            question: Trimmed, non-empty question.
            transcript: Resolved turns before this question, oldest first.

        Returns:
            The answer text.

        Raises:
            AnswerUnavailableError: If the collaborator fails or returns a blank answer.
        """
        request = AnswerQuestionsInput(
            document_text=document_text,
            question=question,
            conversation_history=[
                ConversationTurn(question=turn.question, answer=turn.answer)
                for turn in transcript
            ],
        )

        try:
            result = await self._answerer.answer_questions(request)
        except Exception as e:
            raise AnswerUnavailableError(f"Answering collaborator failed: {e}") from e

        answer = result.answer.strip() if result is not None else ""
        if not answer:
            raise AnswerUnavailableError("The AI could not find an answer.")

        return answer
