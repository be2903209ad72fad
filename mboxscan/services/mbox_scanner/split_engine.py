"""
Incremental split functions for mbox archives.

A split function looks at the unconsumed window of a byte stream and decides
whether it holds a complete token (a message, or a header block in
header-only mode), whether more bytes are needed, or whether the input is
malformed. Anything that must survive between calls lives in ScanState,
which the caller owns and passes back in with the next, larger window.
"""

from typing import Optional, Set, Tuple

import structlog

from mboxscan.config.scanner_config import ScannerConfig
from mboxscan.models.scan_result import NEED_MORE_DATA, MultipartPolicy, Outcome, Span, SplitResult
from .base import HeaderDecodeError, InvalidFormatError
from .header_probe import ProbeVerdict, decode_headers, find_header_end, probe_headers
from .multipart_tracker import find_multipart_declaration, find_terminator, terminator_for
from .separator_finder import SEPARATOR_PREFIX, Separator, SeparatorFinder

logger = structlog.get_logger()

HEADER_BLOCK_ENDS = (b"\n\n\n", b"\r\n\r\n\r\n")
_LINE_BREAKS = b"\r\n"


class ScanState:
    """
    Scan progress carried from one split call to the next.

    Attributes:
        finder: Resumable separator search over the window
        genuine: Starts of candidates whose header probe succeeded
        header_resume: Where the header-only search continues
    """

    def __init__(self):
        self.finder = SeparatorFinder()
        self.genuine: Set[int] = set()
        self.header_resume = 0

    def consume(self, consumed: int) -> None:
        """Rebase all offsets after the caller drops the first consumed bytes."""
        if consumed <= 0:
            return
        self.finder.rebase(consumed)
        self.genuine = {start - consumed for start in self.genuine if start >= consumed}
        self.header_resume = 0


def split(data: bytes, at_eof: bool, state: ScanState, config: Optional[ScannerConfig] = None) -> SplitResult:
    """Dispatch to the message or header-only split function."""
    config = config or ScannerConfig()
    if config.headers_only:
        return split_headers(data, at_eof, state)
    return split_message(data, at_eof, state, config)


def split_headers(data: bytes, at_eof: bool, state: ScanState) -> SplitResult:
    """
    Split off the next header block.

    A block ends with two blank lines and is returned including them. At end
    of stream whatever remains is returned as a final best-effort block.
    """
    if not data:
        return SplitResult(Outcome.EXHAUSTED) if at_eof else NEED_MORE_DATA

    ends = []
    for marker in HEADER_BLOCK_ENDS:
        pos = data.find(marker, state.header_resume)
        if pos != -1:
            ends.append(pos + len(marker))

    if ends:
        end = min(ends)
    elif at_eof:
        end = len(data)
    else:
        longest = max(len(marker) for marker in HEADER_BLOCK_ENDS)
        state.header_resume = max(len(data) - longest + 1, 0)
        return NEED_MORE_DATA

    state.consume(end)
    return SplitResult(Outcome.EMIT, consumed=end, token=Span(0, end))


def split_message(
    data: bytes,
    at_eof: bool,
    state: ScanState,
    config: Optional[ScannerConfig] = None,
) -> SplitResult:
    """
    Split off the next message.

    Args:
        data: Unconsumed window of the stream; must start where the previous
            call's consumed bytes ended
        at_eof: Whether no more bytes will ever be appended
        state: Scan state owned by the caller
        config: Scanner configuration (multipart policy)

    Returns:
        SplitResult. For EMIT, the token is the message without its
        separator line, and consumed stops right before the next separator.
    """
    config = config or ScannerConfig()

    if not data:
        return SplitResult(Outcome.EXHAUSTED) if at_eof else NEED_MORE_DATA

    if at_eof and not data.endswith(b"\n"):
        return _malformed(InvalidFormatError("Final line is not terminated by a line break"))

    lead = _skip_line_breaks(data)
    if lead == len(data):
        if not at_eof:
            return NEED_MORE_DATA
        state.consume(lead)
        return SplitResult(Outcome.EXHAUSTED, consumed=lead)

    if not data.startswith(SEPARATOR_PREFIX, lead):
        pending = bytes(data[lead:])
        if not at_eof and len(pending) < len(SEPARATOR_PREFIX) and SEPARATOR_PREFIX.startswith(pending):
            return NEED_MORE_DATA
        return _malformed(InvalidFormatError(f"Expected a 'From ' separator line at offset {lead}"))

    candidates = state.finder.scan(data)
    if not candidates:
        if not at_eof:
            return NEED_MORE_DATA
        logger.warning("mbox_trailing_data_discarded", size=len(data))
        state.consume(len(data))
        return SplitResult(Outcome.EXHAUSTED, consumed=len(data))

    first = candidates[0]
    if first.start > lead:
        logger.debug("mbox_leading_data_skipped", size=first.start)
    header_start = first.end + 1

    if len(candidates) == 1:
        if not at_eof:
            return NEED_MORE_DATA
        return _emit(data, state, header_start, len(data))

    header_end = find_header_end(data, header_start, candidates[1].start)
    body_start = header_end if header_end is not None else candidates[1].start
    try:
        headers = decode_headers(data[header_start:body_start])
    except HeaderDecodeError as e:
        return _malformed(e)

    following, undecided = _next_genuine(data, at_eof, state, first.start)
    if undecided or (following is None and not at_eof):
        return NEED_MORE_DATA

    terminator = terminator_for(headers)
    if terminator is None:
        if following is None:
            return _emit(data, state, header_start, len(data))
        return _emit(data, state, header_start, following.start)

    return _split_multipart(data, at_eof, state, config, header_start, body_start, following, terminator)


def _split_multipart(
    data: bytes,
    at_eof: bool,
    state: ScanState,
    config: ScannerConfig,
    header_start: int,
    body_start: int,
    following: Optional[Separator],
    terminator: bytes,
) -> SplitResult:
    """Find the real end of a multipart message whose body may hide separator look-alikes."""
    found = find_terminator(data, terminator, body_start)
    if found != -1:
        end, undecided = _next_genuine(data, at_eof, state, found)
        if undecided or (end is None and not at_eof):
            return NEED_MORE_DATA
        return _emit(data, state, header_start, end.start if end is not None else len(data))

    if config.multipart_policy == MultipartPolicy.STRICT:
        if not at_eof:
            return NEED_MORE_DATA
        return _malformed(InvalidFormatError(f"Multipart terminator {terminator!r} not found before end of stream"))

    if following is None:
        if not at_eof:
            return NEED_MORE_DATA
        return _emit(data, state, header_start, len(data))

    # A multipart message starting past the next separator means the terminator was lost.
    if not at_eof and find_multipart_declaration(data, following.start) == -1:
        return NEED_MORE_DATA

    logger.warning(
        "mbox_multipart_unterminated",
        terminator=terminator.decode("ascii", "replace"),
        truncated_at=following.start,
    )
    return _emit(data, state, header_start, following.start)


def _next_genuine(data: bytes, at_eof: bool, state: ScanState, after: int) -> Tuple[Optional[Separator], bool]:
    """
    Find the first candidate starting after offset after that survives the header probe.

    Refuted candidates are dropped from the finder so they are never probed again.

    Returns:
        (separator or None, undecided flag)
    """
    candidates = list(state.finder.candidates)
    for index, candidate in enumerate(candidates):
        if candidate.start <= after:
            continue
        if candidate.start in state.genuine:
            return candidate, False

        limit = candidates[index + 1].start if index + 1 < len(candidates) else len(data)
        verdict = probe_headers(data, candidate.end + 1, limit, at_eof).verdict
        if verdict == ProbeVerdict.UNDECIDED:
            return None, True
        if verdict == ProbeVerdict.GENUINE:
            state.genuine.add(candidate.start)
            return candidate, False

        logger.debug("mbox_separator_rejected", offset=candidate.start)
        state.finder.discard(candidate)

    return None, False


def _emit(data: bytes, state: ScanState, start: int, end: int) -> SplitResult:
    """Emit data[start:end] minus the blank line preceding the next separator, consuming up to end."""
    token_end = end
    if data.endswith(b"\r\n\r\n", start, end):
        token_end -= 2
    elif data.endswith(b"\n\n", start, end):
        token_end -= 1

    state.consume(end)
    return SplitResult(Outcome.EMIT, consumed=end, token=Span(start, token_end))


def _malformed(error: Exception) -> SplitResult:
    return SplitResult(Outcome.MALFORMED, error=error)


def _skip_line_breaks(data: bytes) -> int:
    """Return the offset of the first byte that is not a line break."""
    pos = 0
    while pos < len(data) and data[pos] in _LINE_BREAKS:
        pos += 1
    return pos
