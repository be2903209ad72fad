"""Locate candidate "From " separator lines in a byte window."""

from dataclasses import dataclass
from typing import List, Optional

SEPARATOR_PREFIX = b"From "
_LINE_PREFIX = b"\n" + SEPARATOR_PREFIX
_DIGITS = b"0123456789"


@dataclass(frozen=True)
class Separator:
    """
    A line that looks like an mbox message separator.

    Attributes:
        start: Offset of the "F" of "From "
        end: Offset of the line feed terminating the line
    """

    start: int
    end: int

    def shifted(self, delta: int) -> "Separator":
        return Separator(self.start - delta, self.end - delta)


def has_year_suffix(data: bytes, start: int, end: int) -> bool:
    """
    Check whether the line data[start:end] ends in a 4-digit year (1000-2999).

    A carriage return right before end is ignored.
    """
    if end > start and data[end - 1] == 0x0D:
        end -= 1
    if end - start < len(SEPARATOR_PREFIX) + 4:
        return False
    suffix = data[end - 4 : end]
    return suffix[0] in b"12" and all(c in _DIGITS for c in suffix[1:])


def next_line_start(data: bytes, pos: int) -> int:
    """Return the offset of the next line starting "From " at or after line start pos, or -1."""
    if data.startswith(SEPARATOR_PREFIX, pos):
        return pos
    found = data.find(_LINE_PREFIX, pos)
    return found + 1 if found != -1 else -1


def find_separator(data: bytes, pos: int = 0) -> Optional[Separator]:
    """
    Find the next separator candidate whose line starts at or after pos.

    Args:
        data: Buffer window
        pos: Offset of a line start to search from

    Returns:
        Separator, or None if no complete candidate line exists
    """
    while True:
        start = next_line_start(data, pos)
        if start == -1:
            return None
        end = data.find(b"\n", start)
        if end == -1:
            return None
        if has_year_suffix(data, start, end):
            return Separator(start, end)
        pos = end + 1


class SeparatorFinder:
    """
    Resumable separator search over a growing buffer window.

    Complete lines are examined once; accepted candidates are kept in order,
    and the resume offset always points at a line start that has not been
    conclusively examined yet. Offsets are relative to the current window, so
    callers must rebase() after dropping consumed bytes.
    """

    def __init__(self):
        self.candidates: List[Separator] = []
        self.resume = 0

    def scan(self, data: bytes) -> List[Separator]:
        """
        Extend the candidate list with separators found in data.

        Args:
            data: Current buffer window (a superset of the previous window)

        Returns:
            All known candidates, in stream order
        """
        pos = self.resume
        while True:
            start = next_line_start(data, pos)
            if start == -1:
                # The trailing partial line may still become "From ..."
                last_break = data.rfind(b"\n", pos)
                self.resume = max(pos, last_break + 1)
                break
            end = data.find(b"\n", start)
            if end == -1:
                self.resume = start
                break
            if has_year_suffix(data, start, end):
                self.candidates.append(Separator(start, end))
            pos = end + 1
        return self.candidates

    def discard(self, separator: Separator) -> None:
        """Forget a candidate that turned out to be a false positive."""
        self.candidates.remove(separator)

    def rebase(self, consumed: int) -> None:
        """Shift offsets after the first consumed bytes were dropped."""
        self.candidates = [c.shifted(consumed) for c in self.candidates if c.start >= consumed]
        self.resume = max(self.resume - consumed, 0)
