"""
pytest configuration and fixtures.
"""

from datetime import timedelta
from pathlib import Path

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httpetag import ETagCodec, FileInfo
from httpetag.core.entity import EPOCH


@pytest.fixture
def codec() -> ETagCodec:
    """Codec with the default configuration."""
    return ETagCodec()


@pytest.fixture
def file_info() -> FileInfo:
    """Metadata record: 20 bytes, mtime 0x18a2f3 ms after the epoch."""
    return FileInfo(
        size=20,
        mtime=EPOCH + timedelta(milliseconds=0x18A2F3),
        ino=42,
    )


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """A small file on disk."""
    path = tmp_path / "index.html"
    path.write_bytes(b"<h1>hello</h1>")
    return path
