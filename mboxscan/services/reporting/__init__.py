"""Scan report formatting"""

from .metadata_formatter import MetadataFormatter

__all__ = ["MetadataFormatter"]
