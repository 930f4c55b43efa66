"""Mapping of pipeline errors to HTTP responses."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from docqa.exceptions import (
    AnswerUnavailableError,
    DocQAError,
    EmptyExtractionError,
    EmptyQuestionError,
    MalformedDocumentError,
    QuestionInFlightError,
    SessionBusyError,
    SessionNotReadyError,
    SourceReadError,
    SummarizationFailedError,
    UnsupportedFileTypeError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    UnsupportedFileTypeError: 415,
    SourceReadError: 400,
    MalformedDocumentError: 422,
    EmptyExtractionError: 422,
    SummarizationFailedError: 502,
    AnswerUnavailableError: 502,
    SessionBusyError: 409,
    SessionNotReadyError: 409,
    QuestionInFlightError: 409,
    EmptyQuestionError: 400,
}


def status_code_for(error: DocQAError) -> int:
    return ERROR_STATUS_CODES.get(type(error), 500)


async def docqa_error_handler(request: Request, exc: DocQAError) -> JSONResponse:
    """Return the error's user message as the response detail."""
    status_code = status_code_for(exc)
    logger.warning(f"{request.method} {request.url.path} failed ({status_code}): {exc}")
    return JSONResponse(status_code=status_code, content={"detail": exc.user_message})
