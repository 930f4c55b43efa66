"""Tests for the conversation and question-answering orchestrator."""

import asyncio

import pytest

from docqa.chat.conversation import SUMMARY_INTRO, Conversation
from docqa.chat.question_answering import QuestionAnsweringOrchestrator
from docqa.clients.document_assistant_client import DocumentAssistantError
from docqa.exceptions import AnswerUnavailableError, EmptyQuestionError, QuestionInFlightError
from docqa.models.assistant import ConversationTurn
from docqa.models.conversation import MessageType, Turn

DOCUMENT_TEXT = "Hello\nWorld\n!\n"


@pytest.fixture
def conversation(fake_assistant):
    orchestrator = QuestionAnsweringOrchestrator(fake_assistant)
    return Conversation(DOCUMENT_TEXT, "Greets the world.", orchestrator)


class TestQuestionAnsweringOrchestrator:
    """Test the stateless orchestrator."""

    @pytest.mark.asyncio
    async def test_request_carries_text_question_and_history(self, fake_assistant):
        orchestrator = QuestionAnsweringOrchestrator(fake_assistant)
        fake_assistant.answers = ["Forty-two"]

        answer = await orchestrator.answer(DOCUMENT_TEXT, "What?", [Turn("Q0", "A0")])

        assert answer == "Forty-two"
        request = fake_assistant.answer_requests[0]
        assert request.document_text == DOCUMENT_TEXT
        assert request.question == "What?"
        assert request.conversation_history == [ConversationTurn(question="Q0", answer="A0")]

    @pytest.mark.asyncio
    async def test_collaborator_error_becomes_answer_unavailable(self, fake_assistant):
        orchestrator = QuestionAnsweringOrchestrator(fake_assistant)
        fake_assistant.answer_errors["What?"] = DocumentAssistantError("rate limited")

        with pytest.raises(AnswerUnavailableError) as exc_info:
            await orchestrator.answer(DOCUMENT_TEXT, "What?", [])

        assert isinstance(exc_info.value.__cause__, DocumentAssistantError)

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_answer_unavailable(self, fake_assistant):
        orchestrator = QuestionAnsweringOrchestrator(fake_assistant)
        fake_assistant.answer_errors["What?"] = TimeoutError("read timed out")

        with pytest.raises(AnswerUnavailableError) as exc_info:
            await orchestrator.answer(DOCUMENT_TEXT, "What?", [])

        assert isinstance(exc_info.value.__cause__, TimeoutError)

    @pytest.mark.asyncio
    async def test_blank_answer_is_unavailable(self, fake_assistant):
        orchestrator = QuestionAnsweringOrchestrator(fake_assistant)
        fake_assistant.answers = ["   "]

        with pytest.raises(AnswerUnavailableError):
            await orchestrator.answer(DOCUMENT_TEXT, "What?", [])


class TestConversation:
    """Test message history and question lifecycle."""

    def test_starts_with_summary_notice(self, conversation):
        messages = conversation.messages

        assert len(messages) == 1
        assert messages[0].type is MessageType.SUMMARY
        assert messages[0].content == f"{SUMMARY_INTRO}Greets the world."
        assert conversation.transcript() == []

    @pytest.mark.asyncio
    async def test_answer_is_recorded(self, conversation, fake_assistant):
        fake_assistant.answers = ["A1"]

        answer = await conversation.ask("  Q1  ")

        assert answer == "A1"
        types = [message.type for message in conversation.messages]
        assert types == [MessageType.SUMMARY, MessageType.USER, MessageType.ASSISTANT]
        assert conversation.transcript() == [Turn("Q1", "A1")]
        assert not conversation.is_busy

    @pytest.mark.asyncio
    async def test_second_question_sends_first_turn_as_history(self, conversation, fake_assistant):
        """Q1/A1 then Q2: the Q2 request carries exactly [Q1/A1]."""
        fake_assistant.answers = ["A1", "A2"]

        await conversation.ask("Q1")
        await conversation.ask("Q2")

        first, second = fake_assistant.answer_requests
        assert first.conversation_history == []
        assert second.conversation_history == [ConversationTurn(question="Q1", answer="A1")]
        assert conversation.transcript() == [Turn("Q1", "A1"), Turn("Q2", "A2")]

    @pytest.mark.asyncio
    async def test_failed_answer_leaves_transcript_unchanged(self, conversation, fake_assistant):
        """A failing Q2 produces no turn and removes its pending marker."""
        fake_assistant.answers = ["A1"]
        fake_assistant.answer_errors["Q2"] = DocumentAssistantError("upstream 500")

        await conversation.ask("Q1")
        with pytest.raises(AnswerUnavailableError):
            await conversation.ask("Q2")

        assert conversation.transcript() == [Turn("Q1", "A1")]
        types = [message.type for message in conversation.messages]
        assert MessageType.PENDING not in types
        assert types[-1] is MessageType.USER
        assert not conversation.is_busy

    @pytest.mark.asyncio
    async def test_retry_after_failure(self, conversation, fake_assistant):
        fake_assistant.answer_errors["Q1"] = DocumentAssistantError("timeout")
        with pytest.raises(AnswerUnavailableError):
            await conversation.ask("Q1")

        del fake_assistant.answer_errors["Q1"]
        fake_assistant.answers = ["A1"]
        await conversation.ask("Q1")

        assert conversation.transcript() == [Turn("Q1", "A1")]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("question", ["", "   ", "\n\t"])
    async def test_blank_question_rejected(self, conversation, fake_assistant, question):
        with pytest.raises(EmptyQuestionError):
            await conversation.ask(question)

        assert fake_assistant.answer_requests == []
        assert len(conversation.messages) == 1

    @pytest.mark.asyncio
    async def test_question_while_in_flight_rejected(self, conversation, fake_assistant):
        fake_assistant.answer_gate = asyncio.Event()

        first = asyncio.create_task(conversation.ask("Q1"))
        await asyncio.sleep(0)

        assert conversation.is_busy
        assert conversation.messages[-1].type is MessageType.PENDING
        with pytest.raises(QuestionInFlightError):
            await conversation.ask("Q2")

        fake_assistant.answer_gate.set()
        assert await first == "Answer to: Q1"
        assert len(fake_assistant.answer_requests) == 1
        assert conversation.messages[-1].type is MessageType.ASSISTANT
