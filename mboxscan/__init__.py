"""Incremental message-boundary scanner for mbox archives."""

__version__ = "0.1.0"
