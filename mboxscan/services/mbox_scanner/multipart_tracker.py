"""Keep separator look-alikes inside multipart bodies from splitting a message."""

import re
from email.message import Message
from typing import Optional

_MULTIPART_DECLARATION = re.compile(rb"^Content-Type:[ \t]*multipart/", re.IGNORECASE | re.MULTILINE)


def terminator_for(headers: Optional[Message]) -> Optional[bytes]:
    """
    Compute the closing delimiter a message body must contain.

    Args:
        headers: Decoded header block of the message

    Returns:
        b"--<boundary>--" for multipart content with a boundary, otherwise None
    """
    if headers is None or headers.get("Content-Type") is None:
        return None
    if headers.get_content_maintype() != "multipart":
        return None

    boundary = headers.get_boundary()
    if not boundary:
        return None
    return b"--" + boundary.encode("utf-8", "surrogateescape") + b"--"


def find_terminator(data: bytes, terminator: bytes, start: int, limit: Optional[int] = None) -> int:
    """
    Find a line consisting of the multipart terminator.

    Args:
        data: Buffer window
        terminator: Closing delimiter from terminator_for()
        start: Offset to search from
        limit: Do not look past this offset (default: end of data)

    Returns:
        Offset of the terminator line, or -1
    """
    pattern = re.compile(rb"^" + re.escape(terminator) + rb"[ \t]*\r?$", re.MULTILINE)
    mo = pattern.search(data, start, len(data) if limit is None else limit)
    return mo.start() if mo else -1


def find_multipart_declaration(data: bytes, start: int) -> int:
    """Return the offset of the next "Content-Type: multipart/..." line at or after start, or -1."""
    mo = _MULTIPART_DECLARATION.search(data, start)
    return mo.start() if mo else -1
