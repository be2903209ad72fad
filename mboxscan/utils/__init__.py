"""Utility functions"""

from .header_utils import decode_header_value, parse_date, split_sender, truncate_subject
from .logging_utils import setup_logging

__all__ = ["decode_header_value", "parse_date", "split_sender", "truncate_subject", "setup_logging"]
