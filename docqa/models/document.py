"""Document models for uploaded files and extracted content."""

import asyncio
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from docqa.exceptions import SourceReadError

PDF_MIME_TYPE = "application/pdf"
DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class SourceFile:
    """A single file submitted for processing.

    Holds either the raw bytes (uploads) or a path on disk (CLI). The MIME
    type is taken as declared by the caller and is never sniffed from content.
    """

    name: str
    mime_type: str
    content: Optional[bytes] = None
    path: Optional[Path] = None

    @classmethod
    def from_bytes(cls, name: str, mime_type: Optional[str], content: bytes) -> "SourceFile":
        return cls(name=name, mime_type=mime_type or DEFAULT_MIME_TYPE, content=content)

    @classmethod
    def from_path(cls, path: Union[str, Path], mime_type: Optional[str] = None) -> "SourceFile":
        path = Path(path)
        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, mime_type=mime_type or DEFAULT_MIME_TYPE, path=path)

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == PDF_MIME_TYPE

    async def read(self) -> bytes:
        """
        Return the file's bytes.

        Returns:
            The raw file content.

        Raises:
            SourceReadError: If the file has no content or cannot be read.
        """
        if self.content is not None:
            return self.content
        if self.path is None:
            raise SourceReadError(f"Source file {self.name} has neither content nor path")
        try:
            return await asyncio.to_thread(self.path.read_bytes)
        except OSError as e:
            raise SourceReadError(f"Failed to read {self.path}: {e}") from e


@dataclass(frozen=True)
class Document:
    """An uploaded PDF after extraction.

    Created once per upload and discarded entirely on reset.
    """

    file_name: str
    text: str  # Full extracted text, one line per page
    data_uri: str  # data:application/pdf;base64,...
    page_count: int
