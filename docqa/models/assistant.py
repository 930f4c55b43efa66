"""Request and response models for the hosted document assistant.

Field names are snake_case in Python and camelCase on the wire.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _AssistantModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ConversationTurn(_AssistantModel):
    """Wire representation of a resolved question/answer pair."""

    question: str = Field(description="The question that was asked.")
    answer: str = Field(description="The answer that was given.")


class SummarizeDocumentInput(_AssistantModel):
    document_data_uri: str = Field(
        description="The PDF as a data URI: data:<mime>;base64,<payload>."
    )


class SummarizeDocumentOutput(_AssistantModel):
    summary: str = Field(min_length=1, description="A summary of the document.")


class AnswerQuestionsInput(_AssistantModel):
    document_text: str = Field(description="The text content of the document.")
    question: str = Field(description="The question to be answered.")
    conversation_history: Optional[List[ConversationTurn]] = Field(
        default=None, description="The history of the conversation, oldest first."
    )


class AnswerQuestionsOutput(_AssistantModel):
    answer: str = Field(min_length=1, description="The answer to the question.")
