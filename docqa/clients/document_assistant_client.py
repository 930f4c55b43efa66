"""OpenAI client for document summarization and question answering."""

import logging
import mimetypes
from typing import Any, Dict, List, Optional, Protocol, Type, TypeVar

from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel, ValidationError

from docqa.config.configuration import get_config
from docqa.ingestion.data_uri import decode_data_uri
from docqa.models.assistant import (
    AnswerQuestionsInput,
    AnswerQuestionsOutput,
    SummarizeDocumentInput,
    SummarizeDocumentOutput,
)

logger = logging.getLogger(__name__)

OutputModel = TypeVar("OutputModel", bound=BaseModel)


class DocumentAssistantError(Exception):
    """Custom exception for summarization and answering failures."""

    pass


class Summarizer(Protocol):
    async def summarize_document(self, request: SummarizeDocumentInput) -> SummarizeDocumentOutput:
        ...


class Answerer(Protocol):
    async def answer_questions(self, request: AnswerQuestionsInput) -> AnswerQuestionsOutput:
        ...


SUMMARIZE_SYSTEM_MESSAGE = """You are an expert at reading documents and summarizing them.
Write a clear, concise summary of the attached document.
Cover the main topic, the key points and any conclusions.
DO NOT add information that is not in the document.

Respond with a JSON object of the form {"summary": "<the summary>"}."""

SUMMARIZE_USER_MESSAGE = "Please summarize the attached document."

ANSWER_SYSTEM_MESSAGE = """You are an AI assistant that answers questions about a document.
Answer ONLY from the document text and the conversation history.
If the document does not contain the answer, say that you don't know.

Respond with a JSON object of the form {"answer": "<the answer>"}."""

ANSWER_QUESTIONS_PROMPT = """Document Text: {document_text}

Conversation History:
{conversation_history}

Question: {question}
Answer:"""


def render_conversation_history(request: AnswerQuestionsInput) -> str:
    """Render prior turns oldest first, one Question/Answer block per turn."""
    if not request.conversation_history:
        return "<no conversation history>"
    return "\n".join(
        f"Question: {turn.question}\nAnswer: {turn.answer}"
        for turn in request.conversation_history
    )


def build_answer_prompt(request: AnswerQuestionsInput) -> str:
    return ANSWER_QUESTIONS_PROMPT.format(
        document_text=request.document_text,
        conversation_history=render_conversation_history(request),
        question=request.question,
    )


def _file_name_for(mime_type: str) -> str:
    extension = mimetypes.guess_extension(mime_type) or ".bin"
    return f"document{extension}"


class DocumentAssistantClient:
    """Hosted language-model collaborator for summaries and answers.

    Both operations are single JSON-mode chat completions whose payload is
    validated against the output model before it is returned.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        temperature: float = 0,
        max_tokens: Optional[int] = None,
    ):
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def summarize_document(self, request: SummarizeDocumentInput) -> SummarizeDocumentOutput:
        """
        Summarize a PDF passed inline as a data URI.

        Args:
            request: The document as a base64 data URI.

        Returns:
            The validated summary.

        Raises:
            DocumentAssistantError: If the request fails or the response is invalid.
        """
        try:
            mime_type, _ = decode_data_uri(request.document_data_uri)
        except ValueError as e:
            raise DocumentAssistantError(f"Invalid document data URI: {e}") from e

        messages = [
            {"role": "system", "content": SUMMARIZE_SYSTEM_MESSAGE},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": SUMMARIZE_USER_MESSAGE},
                    {
                        "type": "file",
                        "file": {
                            "filename": _file_name_for(mime_type),
                            "file_data": request.document_data_uri,
                        },
                    },
                ],
            },
        ]
        logger.info(f"Requesting summary from {self._model}")
        return await self._complete_json(messages, SummarizeDocumentOutput)

    async def answer_questions(self, request: AnswerQuestionsInput) -> AnswerQuestionsOutput:
        """
        Answer a question about the document text, given prior turns.

        Args:
            request: Document text, question and conversation history.

        Returns:
            The validated answer.

        Raises:
            DocumentAssistantError: If the request fails or the response is invalid.
        """
        messages = [
            {"role": "system", "content": ANSWER_SYSTEM_MESSAGE},
            {"role": "user", "content": build_answer_prompt(request)},
        ]
        history_length = len(request.conversation_history or [])
        logger.info(
            f"Requesting answer from {self._model} "
            f"({history_length} prior turns): {request.question[:50]}..."
        )
        return await self._complete_json(messages, AnswerQuestionsOutput)

    async def _complete_json(
        self,
        messages: List[Dict[str, Any]],
        output_model: Type[OutputModel],
    ) -> OutputModel:
        """Run one JSON-mode completion and validate it against output_model."""
        options: Dict[str, Any] = {}
        if self._max_tokens is not None:
            options["max_completion_tokens"] = self._max_tokens

        try:
            completion = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=self._temperature,
                response_format={"type": "json_object"},
                **options,
            )
        except OpenAIError as e:
            raise DocumentAssistantError(f"OpenAI request failed: {e}") from e

        if not completion.choices:
            raise DocumentAssistantError("OpenAI returned no choices")

        content = completion.choices[0].message.content
        if not content or not content.strip():
            raise DocumentAssistantError("OpenAI returned an empty response")

        try:
            return output_model.model_validate_json(content)
        except ValidationError as e:
            raise DocumentAssistantError(
                f"Response did not match {output_model.__name__}: {e}"
            ) from e


def _create_async_openai_client() -> AsyncOpenAI:
    """Create async OpenAI client using configuration."""
    config = get_config()
    return AsyncOpenAI(api_key=config.openai.api_key, base_url=config.openai.base_url)


def create_document_assistant_client() -> DocumentAssistantClient:
    """Create a DocumentAssistantClient from the application configuration."""
    config = get_config()
    return DocumentAssistantClient(
        client=_create_async_openai_client(),
        model=config.openai.model,
        temperature=config.openai.temperature,
        max_tokens=config.openai.max_tokens,
    )
