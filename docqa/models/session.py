"""Session state models for the document session controller."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from docqa.exceptions import DocQAError
from docqa.models.document import Document


class SessionStatus(str, Enum):
    EMPTY = "empty"
    PROCESSING = "processing"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of a session, handed to observers on every transition."""

    status: SessionStatus
    generation: int
    file_name: Optional[str] = None  # Set while processing and once ready
    document: Optional[Document] = None  # Only set when READY
    summary: Optional[str] = None  # Only set when READY
    error: Optional[DocQAError] = None  # Only set when FAILED

    @property
    def error_message(self) -> Optional[str]:
        return self.error.user_message if self.error is not None else None

    @property
    def is_ready(self) -> bool:
        return self.status is SessionStatus.READY
