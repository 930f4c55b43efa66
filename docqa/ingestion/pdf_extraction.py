"""PDF text extraction with pypdf."""

import io
import logging
from typing import List

from pypdf import PageObject, PasswordType, PdfReader

from docqa.exceptions import MalformedDocumentError

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n"
FRAGMENT_SEPARATOR = " "


def _open_reader(pdf_bytes: bytes) -> PdfReader:
    """Open a reader over in-memory bytes, unlocking owner-only encryption."""
    reader = PdfReader(io.BytesIO(pdf_bytes))
    if reader.is_encrypted and reader.decrypt("") == PasswordType.NOT_DECRYPTED:
        raise MalformedDocumentError("PDF is password protected")
    return reader


def _extract_page_fragments(page: PageObject) -> List[str]:
    """
    Collect the text fragments of one page in content-stream order.

    Whitespace inside a fragment is collapsed to single spaces and
    whitespace-only fragments are dropped, so a page never spans lines.

    Args:
        page: pypdf page object.

    Returns:
        Non-empty text fragments of the page.
    """
    fragments: List[str] = []

    def _collect(text, cm, tm, font_dict, font_size) -> None:
        fragment = FRAGMENT_SEPARATOR.join(text.split())
        if fragment:
            fragments.append(fragment)

    page.extract_text(visitor_text=_collect)
    return fragments


def extract_text_from_pdf(pdf_bytes: bytes, document_name: str = "<upload>") -> str:
    """
    Extract the plain text of every page of a PDF, in page order.

    Each page's fragments are joined with single spaces and every page is
    terminated by a newline, so "Hello", "World", "!" on three pages becomes
    "Hello\\nWorld\\n!\\n". Pages without text still contribute their newline.
    A result that is only whitespace is returned as-is; deciding that a
    document is empty is up to the caller.

    Args:
        pdf_bytes: Raw PDF file bytes.
        document_name: Name used in log messages.

    Returns:
        The concatenated text of all pages.

    Raises:
        MalformedDocumentError: If the bytes cannot be parsed as a PDF.
    """
    try:
        reader = _open_reader(pdf_bytes)
        page_texts: List[str] = []

        for page_number, page in enumerate(reader.pages, start=1):
            page_text = FRAGMENT_SEPARATOR.join(_extract_page_fragments(page))
            if not page_text:
                logger.debug(f"No text on page {page_number} of {document_name}")
            page_texts.append(page_text + PAGE_SEPARATOR)

    except MalformedDocumentError:
        raise
    except Exception as e:
        raise MalformedDocumentError(f"Failed to parse {document_name} as PDF: {e}") from e

    full_text = "".join(page_texts)
    logger.info(
        f"Extracted {len(full_text.strip())} characters from {document_name} "
        f"(total pages: {len(page_texts)})"
    )
    return full_text


def count_pdf_pages(pdf_bytes: bytes) -> int:
    """Return the number of pages of a PDF without extracting its text."""
    try:
        return len(_open_reader(pdf_bytes).pages)
    except MalformedDocumentError:
        raise
    except Exception as e:
        raise MalformedDocumentError(f"Failed to parse PDF: {e}") from e
