"""Scan result data model."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MultipartPolicy(str, Enum):
    """What to do when a multipart body is never closed by its terminator."""

    TRUNCATE = "truncate"
    STRICT = "strict"


class Outcome(Enum):
    """Decision taken by one split function call."""

    NEED_MORE_DATA = "need_more_data"
    EMIT = "emit"
    MALFORMED = "malformed"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class Span:
    """Half-open byte range [start, end) within a buffer window."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class SplitResult:
    """
    Result of one split function call.

    Attributes:
        outcome: What the caller should do next
        consumed: Number of leading bytes the caller must drop
        token: Byte range of the emitted message (EMIT only)
        error: Exception describing the malformation (MALFORMED only)
    """

    outcome: Outcome
    consumed: int = 0
    token: Optional[Span] = None
    error: Optional[Exception] = None

    def __post_init__(self):
        """Validate fields after initialization."""
        if self.outcome == Outcome.EMIT and self.token is None:
            raise ValueError("token is required for EMIT")
        if self.outcome == Outcome.MALFORMED and self.error is None:
            raise ValueError("error is required for MALFORMED")
        if self.token is not None and self.token.end > self.consumed:
            raise ValueError("token must lie within the consumed bytes")

    def token_bytes(self, data: bytes) -> Optional[bytes]:
        """Return the token's bytes from the window it was computed on."""
        if self.token is None:
            return None
        return bytes(data[self.token.start : self.token.end])


NEED_MORE_DATA = SplitResult(Outcome.NEED_MORE_DATA)
