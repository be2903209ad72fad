"""Pull-based iteration over the messages of an mbox stream."""

from contextlib import contextmanager
from email.message import EmailMessage
from pathlib import Path
from typing import BinaryIO, Iterator, Optional

import structlog

from mboxscan.config.scanner_config import ScannerConfig
from mboxscan.models.scan_result import Outcome
from .base import HeaderDecodeError, InvalidFormatError, MboxScanError, ResourceExceededError
from .header_probe import parse_message
from .split_engine import ScanState, split

logger = structlog.get_logger()


class MboxScanner:
    """
    Read a sequence of messages from an mbox stream.

    Calling advance() steps through the messages; the current one is then
    available as the message property. advance() returns False once the
    stream is exhausted or an error occurred; check the error property to
    tell the two apart. Errors are sticky: after the first one, advance()
    keeps returning False and error keeps returning the same exception.

    Example:
        >>> scanner = MboxScanner(stream)
        >>> while scanner.advance():
        ...     print(scanner.message["From"])
        >>> if scanner.error:
        ...     raise scanner.error
    """

    def __init__(
        self,
        stream: BinaryIO,
        headers_only: Optional[bool] = None,
        config: Optional[ScannerConfig] = None,
    ):
        """
        Initialize scanner.

        Args:
            stream: Binary file-like object providing read(n)
            headers_only: Yield header blocks instead of whole messages
                (overrides config.headers_only when given)
            config: Scanner configuration (defaults to ScannerConfig())
        """
        config = config or ScannerConfig()
        if headers_only is not None and headers_only != config.headers_only:
            config = config.model_copy(update={"headers_only": headers_only})

        self.config = config
        self._stream = stream
        self._state = ScanState()
        self._buf = bytearray()
        self._capacity = config.initial_buffer_size
        self._max_size = config.max_buffer_size
        self._at_eof = False
        self._started = False
        self._exhausted = False
        self._position = 0
        self._message: Optional[EmailMessage] = None
        self._token: Optional[bytes] = None
        self._error: Optional[Exception] = None

    @classmethod
    @contextmanager
    def open(
        cls,
        path: Path,
        headers_only: Optional[bool] = None,
        config: Optional[ScannerConfig] = None,
    ) -> Iterator["MboxScanner"]:
        """
        Open an mbox file and scan it; the file is closed on exit.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Mbox file not found: {path}")

        with open(path, "rb") as f:
            yield cls(f, headers_only=headers_only, config=config)

    @property
    def error(self) -> Optional[Exception]:
        """The first error encountered while advancing, if any."""
        return self._error

    @property
    def message(self) -> Optional[EmailMessage]:
        """The current message; None before the first advance(), after the last one, or after an error."""
        if self._error is not None:
            return None
        return self._message

    @property
    def token(self) -> Optional[bytes]:
        """Raw bytes of the current message (without its separator line)."""
        if self._error is not None:
            return None
        return self._token

    @property
    def position(self) -> int:
        """Number of stream bytes consumed so far."""
        return self._position

    def set_buffer(self, initial: int, maximum: int) -> None:
        """
        Set the initial buffer capacity and the maximum it may grow to.

        Raises:
            RuntimeError: If scanning has already started
            ValueError: If the sizes are not positive or initial exceeds maximum
        """
        if self._started:
            raise RuntimeError("set_buffer called after scanning started")
        if initial < 1 or maximum < initial:
            raise ValueError(f"Invalid buffer sizes: initial={initial}, maximum={maximum}")
        self._capacity = initial
        self._max_size = maximum

    def advance(self) -> bool:
        """
        Step to the next message.

        Returns:
            True if a message is available, False when exhausted or failed
        """
        self._message = None
        self._token = None
        if self._error is not None or self._exhausted:
            return False
        self._started = True

        while True:
            result = split(self._buf, self._at_eof, self._state, self.config)

            if result.outcome == Outcome.EMIT:
                token = result.token_bytes(self._buf)
                self._consume(result.consumed)
                try:
                    self._message = parse_message(token, headers_only=self.config.headers_only)
                except HeaderDecodeError as e:
                    return self._fail(e)
                self._token = token
                return True

            if result.outcome == Outcome.MALFORMED:
                return self._fail(result.error)

            if result.outcome == Outcome.EXHAUSTED:
                self._consume(result.consumed)
                self._exhausted = True
                return False

            if self._at_eof:
                return self._fail(InvalidFormatError("Incomplete message at end of stream"))
            try:
                self._fill()
            except (MboxScanError, OSError) as e:
                return self._fail(e)

    def __iter__(self) -> Iterator[EmailMessage]:
        """
        Yield messages until the stream is exhausted.

        Raises:
            MboxScanError: The sticky error, once iteration stops because of it
            OSError: If reading from the stream failed
        """
        while self.advance():
            yield self._message
        if self._error is not None:
            raise self._error

    def _consume(self, consumed: int) -> None:
        del self._buf[:consumed]
        self._position += consumed

    def _fill(self) -> None:
        """Read more bytes, growing the buffer when it is full."""
        if len(self._buf) >= self._capacity:
            if self._capacity >= self._max_size:
                raise ResourceExceededError(
                    f"Token exceeds maximum buffer size of {self._max_size} bytes at offset {self._position}"
                )
            self._capacity = min(self._capacity * 2, self._max_size)
            logger.debug("mbox_buffer_grown", capacity=self._capacity, position=self._position)

        chunk = self._stream.read(self._capacity - len(self._buf))
        if not chunk:
            self._at_eof = True
        else:
            self._buf += chunk

    def _fail(self, error: Exception) -> bool:
        self._error = error
        self._message = None
        self._token = None
        logger.warning(
            "mbox_scan_failed",
            error=str(error),
            error_type=error.__class__.__name__,
            position=self._position,
        )
        return False


def scan_messages(stream: BinaryIO, config: Optional[ScannerConfig] = None) -> Iterator[EmailMessage]:
    """Yield every message of an mbox stream; raises the scan error, if any, at the end."""
    yield from MboxScanner(stream, headers_only=False, config=config)


def scan_headers(stream: BinaryIO, config: Optional[ScannerConfig] = None) -> Iterator[EmailMessage]:
    """Yield the header block of every message; see scan_messages()."""
    yield from MboxScanner(stream, headers_only=True, config=config)
