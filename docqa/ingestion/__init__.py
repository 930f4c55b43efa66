"""Document ingestion: PDF text extraction and data-URI encoding."""

from docqa.ingestion.data_uri import decode_data_uri, encode_data_uri, file_to_data_uri
from docqa.ingestion.pdf_extraction import (
    PAGE_SEPARATOR,
    count_pdf_pages,
    extract_text_from_pdf,
)

__all__ = [
    "PAGE_SEPARATOR",
    "count_pdf_pages",
    "decode_data_uri",
    "encode_data_uri",
    "extract_text_from_pdf",
    "file_to_data_uri",
]
