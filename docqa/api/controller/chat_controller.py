"""REST and WebSocket controller for questions about the loaded document."""

import logging
from typing import List

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, ValidationError

from docqa.api.dependencies import get_document_session
from docqa.exceptions import DocQAError
from docqa.models.conversation import MessageType
from docqa.services.document_session import DocumentSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


class ChatMessage(BaseModel):
    """Incoming question from client."""

    question: str


class ChatResponse(BaseModel):
    """Outgoing WebSocket frame."""

    type: str  # "answer", "error"
    content: str


class AnswerResponse(BaseModel):
    answer: str


class MessageResponse(BaseModel):
    id: str
    type: MessageType
    content: str


@router.get("/messages", response_model=List[MessageResponse])
async def list_messages(
    session: DocumentSession = Depends(get_document_session),
) -> List[MessageResponse]:
    """Message history of the current conversation, oldest first."""
    return [
        MessageResponse(id=message.id, type=message.type, content=message.content)
        for message in session.messages
    ]


@router.post("/questions", response_model=AnswerResponse)
async def ask_question(
    message: ChatMessage,
    session: DocumentSession = Depends(get_document_session),
) -> AnswerResponse:
    logger.info(f"Processing question: {message.question[:50]}...")
    answer = await session.ask(message.question)
    return AnswerResponse(answer=answer)


@router.websocket("/ws")
async def websocket_chat(
    websocket: WebSocket,
    session: DocumentSession = Depends(get_document_session),
) -> None:
    """
    WebSocket endpoint for document Q&A.

    Protocol:
    1. Client connects to /chat/ws
    2. Client sends JSON: {"question": "..."}
    3. Server replies: {"type": "answer", "content": "..."}
    4. On error: {"type": "error", "content": "error message"}

    Client can send multiple questions on same connection.
    """
    await websocket.accept()
    logger.info("WebSocket connection accepted")

    try:
        while True:
            raw_message = await websocket.receive_text()

            try:
                message = ChatMessage.model_validate_json(raw_message)
            except ValidationError as e:
                await websocket.send_json(
                    ChatResponse(type="error", content=f"Invalid message format: {e}").model_dump()
                )
                continue

            logger.info(f"Processing question: {message.question[:50]}...")

            try:
                answer = await session.ask(message.question)
                await websocket.send_json(
                    ChatResponse(type="answer", content=answer).model_dump()
                )
            except DocQAError as e:
                logger.warning(f"Question failed: {e}")
                await websocket.send_json(
                    ChatResponse(type="error", content=e.user_message).model_dump()
                )
            except Exception as e:
                logger.exception(f"Error processing question: {e}")
                await websocket.send_json(
                    ChatResponse(type="error", content=DocQAError.user_message).model_dump()
                )

    except WebSocketDisconnect:
        logger.info("WebSocket connection closed by client")
    except Exception as e:
        logger.exception(f"WebSocket error: {e}")
