"""Backing stores: the memory and temporary-file media behind a stream."""

from __future__ import annotations

import dataclasses
import enum
import io
import logging
import os
import tempfile
from typing import TYPE_CHECKING, BinaryIO, Optional

if TYPE_CHECKING:
    from spill_stream._types import Buffer

log = logging.getLogger(__name__)

_TEMP_PREFIX = "spill-"


class BackingKind(enum.Enum):
    """The medium currently holding a stream's bytes."""

    MEMORY = "memory"
    FILE = "file"


@dataclasses.dataclass(frozen=True)
class BackingStore:
    """One active backing store, tagged with its kind.

    :param kind: Which medium ``stream`` lives on.
    :param stream: The seekable, readable binary stream holding the content.
    """

    kind: BackingKind
    stream: BinaryIO

    @property
    def length(self) -> int:
        """Length of the content in bytes, measured without moving the position."""
        current = self.stream.tell()
        end = self.stream.seek(0, os.SEEK_END)
        self.stream.seek(current)
        return end

    def close(self) -> None:
        self.stream.close()


def memory_store(expected_length: int = 0) -> BackingStore:
    """Create an empty in-memory store.

    ``io.BytesIO`` grows on demand and cannot be pre-sized, so
    ``expected_length`` is only a hint.
    """
    log.debug("Creating memory store (expected_length=%d)", expected_length)
    return BackingStore(BackingKind.MEMORY, io.BytesIO())


def temp_file_store(directory: Optional[str] = None, buffer_size: int = -1) -> BackingStore:
    """Create an empty store backed by a fresh temporary file.

    The file is opened read/write, owned exclusively by the returned store,
    not inherited by child processes, and removed by the OS once closed.

    :param directory: Where to create the file (``None`` uses the system default).
    :param buffer_size: I/O buffer size of the file object.
    """
    stream = tempfile.TemporaryFile(mode="w+b", buffering=buffer_size, prefix=_TEMP_PREFIX, dir=directory)
    log.debug("Created temporary file store (dir=%r, buffer_size=%d)", directory or tempfile.gettempdir(), buffer_size)
    return BackingStore(BackingKind.FILE, stream)  # type: ignore[arg-type]


def wrap_store(stream: BinaryIO) -> BackingStore:
    """Tag a caller-supplied stream with its backing kind.

    ``io.BytesIO`` is memory; any stream with a working ``fileno()`` is a
    file; everything else is treated as memory.
    """
    if isinstance(stream, io.BytesIO):
        return BackingStore(BackingKind.MEMORY, stream)
    try:
        stream.fileno()
    except (AttributeError, OSError):
        return BackingStore(BackingKind.MEMORY, stream)
    return BackingStore(BackingKind.FILE, stream)


def copy_stream(source: BinaryIO, target: BinaryIO, chunk_size: int) -> int:
    """Copy ``source`` from its current position to EOF into ``target``.

    :returns: Number of bytes copied.
    """
    total = 0
    while True:
        chunk: Buffer = source.read(chunk_size)
        if not chunk:
            break
        target.write(chunk)
        total += len(chunk)
    return total
