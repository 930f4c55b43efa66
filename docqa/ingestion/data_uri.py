"""Base64 data-URI encoding for inline file transmission."""

import base64
import binascii
import re
from typing import Tuple

from docqa.models.document import SourceFile

_DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>[^;,]+);base64,(?P<payload>[A-Za-z0-9+/=]*)$")


def encode_data_uri(content: bytes, mime_type: str) -> str:
    """
    Encode bytes as ``data:<mime>;base64,<payload>``.

    Deterministic and defined for every byte sequence, including empty input.
    """
    payload = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def decode_data_uri(data_uri: str) -> Tuple[str, bytes]:
    """
    Split a base64 data URI into its MIME type and decoded bytes.

    Raises:
        ValueError: If the string is not a base64 data URI.
    """
    match = _DATA_URI_PATTERN.match(data_uri)
    if match is None:
        raise ValueError("Not a base64 data URI")
    try:
        content = base64.b64decode(match.group("payload"), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e
    return match.group("mime"), content


async def file_to_data_uri(source_file: SourceFile) -> str:
    """
    Read a source file and encode it as a data URI using its declared MIME type.

    Raises:
        SourceReadError: If the file cannot be read.
    """
    content = await source_file.read()
    return encode_data_uri(content, source_file.mime_type)
