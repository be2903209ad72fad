"""Data models for mbox scanning"""

from .scan_result import NEED_MORE_DATA, MultipartPolicy, Outcome, Span, SplitResult

__all__ = [
    "NEED_MORE_DATA",
    "MultipartPolicy",
    "Outcome",
    "Span",
    "SplitResult",
]
