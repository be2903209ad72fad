"""Exceptions raised while scanning mbox archives."""


class MboxScanError(Exception):
    """Base exception for mbox scanning errors."""

    pass


class InvalidFormatError(MboxScanError):
    """Raised when the archive is malformed in a way that prevents extracting a message."""

    pass


class HeaderDecodeError(MboxScanError):
    """
    Raised when the header block following a confirmed separator does not parse.

    Attributes:
        data: The bytes handed to the header decoder
    """

    def __init__(self, message: str, data: bytes = b""):
        super().__init__(message)
        self.data = data


class ResourceExceededError(MboxScanError):
    """Raised when a single token does not fit into the maximum buffer size."""

    pass
