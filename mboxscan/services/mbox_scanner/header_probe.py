"""Header block decoding and validation of candidate separators."""

from dataclasses import dataclass
from email import errors
from email.message import EmailMessage, Message
from email.parser import BytesParser
from email.policy import compat32, default
from enum import Enum
from typing import Optional

from .base import HeaderDecodeError

# Header lines keep their raw form; only structural defects are fatal.
STRICT_POLICY = compat32.clone(raise_on_defect=True)

# Minimum number of distinct fields behind a candidate separator.
MIN_HEADER_FIELDS = 2

_BLANK_LINES = (b"\n\n", b"\r\n\r\n")


class ProbeVerdict(Enum):
    """Outcome of probing the bytes behind a separator candidate."""

    GENUINE = "genuine"
    FALSE_POSITIVE = "false_positive"
    UNDECIDED = "undecided"


@dataclass
class ProbeResult:
    """Result of a header probe."""

    verdict: ProbeVerdict
    headers: Optional[Message] = None


def find_header_end(data: bytes, start: int, limit: Optional[int] = None) -> Optional[int]:
    """
    Find the end of the header block starting at start.

    Args:
        data: Buffer window
        start: Offset of the first header line
        limit: Do not look past this offset (default: end of data)

    Returns:
        Offset just past the blank line closing the block, or None
    """
    if limit is None:
        limit = len(data)
    # A block may be empty: the body starts right away.
    if data.startswith(b"\n", start):
        return start + 1
    if data.startswith(b"\r\n", start):
        return start + 2

    ends = []
    for blank in _BLANK_LINES:
        pos = data.find(blank, start, limit)
        if pos != -1:
            ends.append(pos + len(blank))
    return min(ends) if ends else None


def decode_headers(data: bytes) -> Message:
    """
    Decode a header block strictly.

    Args:
        data: Bytes starting with the first header line

    Returns:
        email.message.Message holding the header fields

    Raises:
        HeaderDecodeError: If a line is neither a header field nor a continuation
    """
    try:
        return BytesParser(policy=STRICT_POLICY).parsebytes(bytes(data), headersonly=True)
    except (errors.MessageDefect, errors.MessageError) as e:
        raise HeaderDecodeError(f"Malformed header block: {e.__class__.__name__}", bytes(data)) from e


def probe_headers(data: bytes, start: int, limit: int, at_eof: bool) -> ProbeResult:
    """
    Decide whether the bytes behind a separator candidate form a header block.

    Args:
        data: Buffer window
        start: Offset right after the candidate's line
        limit: Offset where the next candidate starts (or end of data)
        at_eof: Whether no more bytes will be appended

    Returns:
        ProbeResult; UNDECIDED when the block runs into the end of a
        non-final buffer
    """
    end = find_header_end(data, start, limit)
    if end is None:
        if limit >= len(data) and not at_eof:
            return ProbeResult(ProbeVerdict.UNDECIDED)
        end = limit

    try:
        headers = decode_headers(data[start:end])
    except HeaderDecodeError:
        return ProbeResult(ProbeVerdict.FALSE_POSITIVE)

    if len({key.lower() for key in headers.keys()}) < MIN_HEADER_FIELDS:
        return ProbeResult(ProbeVerdict.FALSE_POSITIVE)

    return ProbeResult(ProbeVerdict.GENUINE, headers)


def parse_message(token: bytes, headers_only: bool = False) -> EmailMessage:
    """
    Turn a scanned token into a message object.

    Args:
        token: Raw message (or header block) bytes
        headers_only: Skip body parsing

    Returns:
        email.message.EmailMessage parsed with policy=default

    Raises:
        HeaderDecodeError: If the header block is malformed
    """
    end = find_header_end(token, 0)
    decode_headers(token[:end] if end is not None else token)
    return BytesParser(policy=default).parsebytes(bytes(token), headersonly=headers_only)
