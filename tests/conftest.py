"""Shared test fixtures and marker registration."""

from __future__ import annotations

import io
import random
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


def pytest_configure(config: object) -> None:
    """Register custom markers."""
    if isinstance(config, pytest.Config):
        config.addinivalue_line("markers", "slow: moves megabyte-sized payloads through the filesystem")


@pytest.fixture
def spill_dir(tmp_path: Path) -> str:
    """Directory for the temporary files created under test."""
    directory = tmp_path / "spill"
    directory.mkdir()
    return str(directory)


@pytest.fixture
def payload() -> Callable[[int], bytes]:
    """Factory for reproducible pseudo-random byte strings."""
    rng = random.Random(1234)

    def make(size: int) -> bytes:
        return bytes(rng.getrandbits(8) for _ in range(size))

    return make


class NonSeekableStream(io.RawIOBase):
    """Readable stream that refuses to seek."""

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return False

    def readinto(self, buffer: bytearray) -> int:  # type: ignore[override]
        return 0


@pytest.fixture
def non_seekable() -> NonSeekableStream:
    stream = NonSeekableStream()
    yield stream  # type: ignore[misc]
    stream.close()
