"""Business logic services"""

from .mbox_scanner import (
    HeaderDecodeError,
    InvalidFormatError,
    MboxScanError,
    MboxScanner,
    ResourceExceededError,
    scan_headers,
    scan_messages,
)
from .reporting import MetadataFormatter

__all__ = [
    "HeaderDecodeError",
    "InvalidFormatError",
    "MboxScanError",
    "MboxScanner",
    "ResourceExceededError",
    "scan_headers",
    "scan_messages",
    "MetadataFormatter",
]
