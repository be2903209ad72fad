"""Header value decoding utilities."""

from datetime import datetime
from email.header import decode_header
from email.utils import parseaddr, parsedate_to_datetime
from typing import Optional, Tuple


def decode_header_value(header_value: Optional[str]) -> str:
    """
    Decode an RFC 2047 encoded header value to a Unicode string.

    Args:
        header_value: Raw header value (may contain encoded words)

    Returns:
        Decoded string; undecodable bytes are replaced

    Examples:
        >>> decode_header_value("=?UTF-8?B?5Lit5paH?=")
        '中文'
    """
    if not header_value:
        return ""

    decoded_parts = []
    for content, encoding in decode_header(str(header_value)):
        if isinstance(content, str):
            decoded_parts.append(content)
            continue
        try:
            decoded_parts.append(content.decode(encoding or "ascii"))
        except (UnicodeDecodeError, LookupError):
            decoded_parts.append(content.decode("utf-8", errors="replace"))

    return "".join(decoded_parts)


def split_sender(header_value: Optional[str]) -> Tuple[str, str]:
    """
    Split a From header into (display name, address).

    The mbox convention "user at host (Name)" yields the raw text as address
    when no "@" form can be found.
    """
    if not header_value:
        return "", ""
    name, address = parseaddr(str(header_value))
    return decode_header_value(name), address or str(header_value).strip()


def parse_date(header_value: Optional[str]) -> Optional[datetime]:
    """Parse a Date header, returning None when it is missing or unparseable."""
    if not header_value:
        return None
    try:
        return parsedate_to_datetime(str(header_value))
    except (TypeError, ValueError, IndexError):
        return None


def truncate_subject(subject: Optional[str], max_length: int = 50) -> str:
    """
    Truncate subject to max_length characters, ending in '...' if cut.

    Examples:
        >>> truncate_subject("Short subject")
        'Short subject'
        >>> truncate_subject("This is a very long subject that exceeds the maximum length", 30)
        'This is a very long subject...'
    """
    if not subject:
        return ""

    subject = " ".join(str(subject).split())
    if len(subject) <= max_length:
        return subject

    return subject[: max_length - 3].rstrip() + "..."
