"""Shared fixtures for mboxscan tests."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    """Directory holding the sample archives."""
    return FIXTURES_DIR


@pytest.fixture
def load_fixture():
    """Return a loader reading a sample archive as bytes."""

    def _load(name: str) -> bytes:
        return (FIXTURES_DIR / name).read_bytes()

    return _load
