"""Incremental mbox message-boundary scanning."""

from .base import HeaderDecodeError, InvalidFormatError, MboxScanError, ResourceExceededError
from .scanner import MboxScanner, scan_headers, scan_messages
from .separator_finder import Separator, SeparatorFinder, find_separator
from .split_engine import ScanState, split, split_headers, split_message

__all__ = [
    "HeaderDecodeError",
    "InvalidFormatError",
    "MboxScanError",
    "ResourceExceededError",
    "MboxScanner",
    "scan_headers",
    "scan_messages",
    "Separator",
    "SeparatorFinder",
    "find_separator",
    "ScanState",
    "split",
    "split_headers",
    "split_message",
]
