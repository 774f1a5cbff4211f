"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest
from aqdef.parser import AqdefParser
from aqdef.writer import AqdefWriter

MINIMAL_DFQ = "K0100 1\nK1001/1 P1\nK2001/1 C1\nK0001/1 1.5\nK0001/1 2.5\n"


@pytest.fixture
def parser() -> AqdefParser:
    """Return a parser with default options."""
    return AqdefParser()


@pytest.fixture
def writer() -> AqdefWriter:
    """Return a writer using the shared registry."""
    return AqdefWriter()


@pytest.fixture
def minimal_dfq() -> str:
    """Return DFQ content with one part, one characteristic and two values."""
    return MINIMAL_DFQ


@pytest.fixture
def minimal_dfq_file(tmp_path: Path) -> Path:
    """Write the minimal DFQ content to a file with CRLF line endings."""
    path = tmp_path / "minimal.dfq"
    path.write_bytes(MINIMAL_DFQ.replace("\n", "\r\n").encode("utf-8"))
    return path
