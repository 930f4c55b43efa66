"""Shared fixtures: generated PDFs and an in-memory document assistant."""

import asyncio
from typing import Dict, List, Optional

import pytest

from docqa.models.assistant import (
    AnswerQuestionsInput,
    AnswerQuestionsOutput,
    SummarizeDocumentInput,
    SummarizeDocumentOutput,
)
from docqa.models.document import SourceFile
from docqa.services.document_session import DocumentSession


def _escape_pdf_string(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: List[List[str]]) -> bytes:
    """Build a minimal PDF with one Helvetica text object per fragment.

    Each inner list holds the fragments of one page; an empty list produces a
    page with no text layer, like a scanned image.
    """
    objects: List[bytes] = []
    kids = " ".join(f"{4 + 2 * index} 0 R" for index in range(len(pages)))

    objects.append(b"<< /Type /Catalog /Pages 2 0 R >>")
    objects.append(f"<< /Type /Pages /Kids [{kids}] /Count {len(pages)} >>".encode("ascii"))
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")

    for index, fragments in enumerate(pages):
        content_id = 5 + 2 * index
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                "/Resources << /Font << /F1 3 0 R >> >> "
                f"/Contents {content_id} 0 R >>"
            ).encode("ascii")
        )
        stream = "\n".join(
            f"BT /F1 12 Tf 72 {720 - 20 * line} Td ({_escape_pdf_string(fragment)}) Tj ET"
            for line, fragment in enumerate(fragments)
        ).encode("latin-1")
        objects.append(
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
        )

    output = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(output))
        output += f"{number} 0 obj\n".encode("ascii") + body + b"\nendobj\n"

    xref_offset = len(output)
    output += f"xref\n0 {len(objects) + 1}\n".encode("ascii")
    output += b"0000000000 65535 f \n"
    for offset in offsets:
        output += f"{offset:010d} 00000 n \n".encode("ascii")
    output += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode("ascii")
    return bytes(output)


class FakeDocumentAssistant:
    """In-memory summarizer and answerer that records every request."""

    def __init__(self, summary: str = "A short summary of the document."):
        self.summary = summary
        self.answers: List[str] = []
        self.summarize_error: Optional[Exception] = None
        self.answer_errors: Dict[str, Exception] = {}
        self.summarize_requests: List[SummarizeDocumentInput] = []
        self.answer_requests: List[AnswerQuestionsInput] = []
        # When set, calls wait on it before returning
        self.summarize_gate: Optional[asyncio.Event] = None
        self.answer_gate: Optional[asyncio.Event] = None

    async def summarize_document(self, request: SummarizeDocumentInput) -> SummarizeDocumentOutput:
        self.summarize_requests.append(request)
        if self.summarize_gate is not None:
            await self.summarize_gate.wait()
        if self.summarize_error is not None:
            raise self.summarize_error
        return SummarizeDocumentOutput.model_construct(summary=self.summary)

    async def answer_questions(self, request: AnswerQuestionsInput) -> AnswerQuestionsOutput:
        self.answer_requests.append(request)
        if self.answer_gate is not None:
            await self.answer_gate.wait()
        error = self.answer_errors.get(request.question)
        if error is not None:
            raise error
        answer = self.answers.pop(0) if self.answers else f"Answer to: {request.question}"
        return AnswerQuestionsOutput.model_construct(answer=answer)


@pytest.fixture
def make_pdf():
    """Return the PDF builder."""
    return build_pdf


@pytest.fixture
def fake_assistant():
    return FakeDocumentAssistant()


@pytest.fixture
def session(fake_assistant):
    return DocumentSession(summarizer=fake_assistant, answerer=fake_assistant)


@pytest.fixture
def pdf_file(make_pdf):
    """A three-page text PDF as an uploaded file."""
    return SourceFile.from_bytes(
        name="report.pdf",
        mime_type="application/pdf",
        content=make_pdf([["Hello"], ["World"], ["!"]]),
    )
