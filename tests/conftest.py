import sys
from pathlib import Path

import pytest

# Add src directory to Python path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from iobuf.binary.iobuffer import IOBuffer


@pytest.fixture()
def buf16() -> IOBuffer:
    """Fresh zeroed 16-byte root buffer."""
    return IOBuffer.allocate(16)


@pytest.fixture()
def sample_file(tmp_path: Path) -> Path:
    """Small binary file: b"IOBF", u32be 0x0A0B0C0D, u16le 513, b"hi"."""
    p = tmp_path / "sample.bin"
    p.write_bytes(b"IOBF" + bytes([0x0A, 0x0B, 0x0C, 0x0D]) + bytes([0x01, 0x02]) + b"hi")
    return p
