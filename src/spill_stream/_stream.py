"""SwitchingStream: a stream that moves itself from memory to disk."""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING, BinaryIO, Optional

from spill_stream._backing import BackingKind, copy_stream, memory_store, temp_file_store, wrap_store
from spill_stream._capabilities import Capability, CapabilitySet, probe_capabilities
from spill_stream._config import DEFAULT_BUFFER_SIZE, DEFAULT_THRESHOLD_LENGTH, SpillConfig
from spill_stream._errors import InvalidStreamState, ValueOutOfRange

if TYPE_CHECKING:
    from spill_stream._backing import BackingStore
    from spill_stream._types import Buffer

log = logging.getLogger(__name__)

_CAPABILITIES = CapabilitySet({Capability.READ, Capability.SEEK})


class SwitchingStream(io.IOBase):
    """A binary stream decorator that moves its content from memory to a
    temporary file once the content reaches a threshold length.

    Without a ``stream`` a fresh store is created: in memory when switching
    is disabled or ``expected_length < threshold_length``, otherwise directly
    on disk (and switching is then disabled for good). A supplied stream must
    be seekable and readable; it becomes the active store, and is moved to a
    temporary file right away when ``expected_length >= threshold_length``,
    even when it is a real file.
    Moving a store to disk closes it, including a caller-supplied one.

    :param stream: Optional existing stream to wrap.
    :param expected_length: The expected length of the content in bytes.
    :param threshold_length: The content length that moves the stream out of memory.
    :param disable_switching: If ``True``, the stream is never moved to disk.
    :param temp_dir: Directory for the temporary file.
    :param buffer_size: I/O buffer size of the temporary file and copy chunk size.
    :raises InvalidStreamState: If ``stream`` is closed, cannot seek or cannot read.
    :raises ValueOutOfRange: If a length is negative or ``buffer_size`` is not positive.
    """

    def __init__(
        self,
        stream: Optional[BinaryIO] = None,
        expected_length: int = 0,
        threshold_length: int = DEFAULT_THRESHOLD_LENGTH,
        disable_switching: bool = False,
        *,
        temp_dir: Optional[str] = None,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        super().__init__()
        if stream is not None:
            if getattr(stream, "closed", False):
                raise InvalidStreamState("The stream must not be closed", operation="__init__")
            caps = probe_capabilities(stream)
            if Capability.SEEK not in caps:
                raise InvalidStreamState("The stream must support seeking", operation="__init__")
            if Capability.READ not in caps:
                raise InvalidStreamState("The stream must support reading", operation="__init__")

        config = SpillConfig(
            expected_length=expected_length,
            threshold_length=threshold_length,
            disable_switching=disable_switching,
            temp_dir=temp_dir,
            buffer_size=buffer_size,
        )
        config.validate()
        self._config = config
        self._switching_disabled = config.disable_switching

        if stream is not None:
            self._store = wrap_store(stream)
        elif config.starts_on_disk:
            self._switching_disabled = True
            self._store = temp_file_store(config.temp_dir, config.buffer_size)
        else:
            self._store = memory_store(config.expected_length)

        self._store.stream.seek(0)

        if stream is not None and config.expected_length >= config.threshold_length:
            try:
                self._migrate()
            except BaseException:
                # the caller's stream must survive close() from __del__
                del self._store
                raise

    @classmethod
    def from_config(cls, config: SpillConfig, stream: Optional[BinaryIO] = None) -> SwitchingStream:
        """Create a stream whose policy comes from ``config``."""
        return cls(
            stream,
            config.expected_length,
            config.threshold_length,
            config.disable_switching,
            temp_dir=config.temp_dir,
            buffer_size=config.buffer_size,
        )

    def __repr__(self) -> str:
        kind = self._store.kind.value
        return (
            f"SwitchingStream(kind={kind!r}, threshold_length={self._config.threshold_length}, "
            f"switching_disabled={self._switching_disabled}, closed={self.closed})"
        )

    # region: capabilities
    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def writable(self) -> bool:
        """Always ``False``; content is still accepted through :meth:`write`."""
        return False

    @property
    def can_timeout(self) -> bool:
        return _CAPABILITIES.supports(Capability.TIMEOUT)

    @property
    def capabilities(self) -> CapabilitySet:
        return _CAPABILITIES

    # endregion

    # region: state queries
    @property
    def config(self) -> SpillConfig:
        """The policy this stream was constructed with."""
        return self._config

    @property
    def switching_disabled(self) -> bool:
        """Whether the stream can no longer move to disk by itself.

        ``True`` when configured so, and also when the stream was created
        directly on disk.
        """
        return self._switching_disabled

    @property
    def backing_kind(self) -> BackingKind:
        return self._store.kind

    @property
    def is_in_memory(self) -> bool:
        """``True`` while the content is held in memory."""
        return self._store.kind is BackingKind.MEMORY

    @property
    def length(self) -> int:
        return self._store.length

    @property
    def position(self) -> int:
        return self._store.stream.tell()

    @position.setter
    def position(self, value: int) -> None:
        if value < 0:
            raise InvalidStreamState(
                "The position of the stream cannot be set to less than zero",
                operation="position",
                value=value,
            )
        if value > self.length:
            raise InvalidStreamState(
                "The position of the stream cannot exceed the length of the stream",
                operation="position",
                value=value,
            )
        self._store.stream.seek(value)

    # endregion

    # region: delegation
    def read(self, size: int = -1) -> bytes:
        return self._store.stream.read(size)

    def readinto(self, buffer: Buffer) -> Optional[int]:
        """Read into ``buffer``, falling back to ``read`` for stores without ``readinto``."""
        stream = self._store.stream
        if hasattr(stream, "readinto"):
            return stream.readinto(buffer)  # type: ignore[attr-defined]
        view = memoryview(buffer).cast("B")
        data = stream.read(len(view))
        view[: len(data)] = data
        return len(data)

    def read_byte(self) -> int:
        """Read one byte and return it as an int, or ``-1`` at the end of the stream."""
        data = self._store.stream.read(1)
        return data[0] if data else -1

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return self._store.stream.seek(offset, whence)

    def tell(self) -> int:
        return self._store.stream.tell()

    def flush(self) -> None:
        self._store.stream.flush()

    def close(self) -> None:
        """Close the stream and its active backing store. Idempotent."""
        # __del__ also runs for instances whose __init__ failed before a store existed
        if self.closed or not hasattr(self, "_store"):
            return
        try:
            super().close()
        finally:
            self._store.close()

    # endregion

    # region: writing
    def write(self, data: Buffer, offset: int = 0, count: Optional[int] = None) -> int:  # type: ignore[override]
        """Write ``data[offset:offset + count]`` to the stream.

        Moves the content to a temporary file once its length reaches the
        threshold, unless switching is disabled.

        :returns: The number of bytes written.
        :raises ValueOutOfRange: If ``offset`` or ``count`` falls outside ``data``.
        """
        view = memoryview(data)
        if not view.c_contiguous:
            view = memoryview(view.tobytes())
        view = view.cast("B")
        if offset < 0 or offset > len(view):
            raise ValueOutOfRange(
                "The offset must lie within the buffer",
                operation="write",
                parameter="offset",
                value=offset,
            )
        if count is None:
            count = len(view) - offset
        elif count < 0 or offset + count > len(view):
            raise ValueOutOfRange(
                "The count must not reach past the end of the buffer",
                operation="write",
                parameter="count",
                value=count,
            )

        written = self._store.stream.write(view[offset : offset + count])

        if self._switching_disabled:
            return written
        if self._store.kind is BackingKind.MEMORY and self._store.length >= self._config.threshold_length:
            self._migrate()
        return written

    def truncate(self, size: Optional[int] = None) -> int:
        """Not supported; see :meth:`set_length`."""
        _CAPABILITIES.require(Capability.RESIZE, operation="truncate")
        return self.length  # pragma: no cover

    def set_length(self, value: int) -> None:
        """Not supported; the length only grows through :meth:`write`.

        :raises OperationNotSupported: Always.
        """
        _CAPABILITIES.require(Capability.RESIZE, operation="set_length")

    def copy_to(self, destination: BinaryIO, chunk_size: Optional[int] = None) -> int:
        """Copy the content from the current position to the end into ``destination``.

        :param chunk_size: Bytes per read (defaults to the configured buffer size).
        :returns: Number of bytes copied.
        """
        return copy_stream(self._store.stream, destination, chunk_size or self._config.buffer_size)

    # endregion

    # region: migration
    def _migrate(self) -> None:
        """Move the content of the active store into a new temporary file.

        The logical position is kept. The previous store is closed before
        the file store becomes active.
        """
        if self._switching_disabled:
            return

        source: BackingStore = self._store
        target = temp_file_store(self._config.temp_dir, self._config.buffer_size)
        try:
            position = source.stream.tell()
            length = source.length
            if length:
                source.stream.seek(0)
                copy_stream(source.stream, target.stream, self._config.buffer_size)
                source.stream.flush()
                target.stream.seek(position)
        except BaseException:
            target.close()
            raise

        source.close()
        self._store = target
        log.debug(
            "Moved %d bytes to temporary file (threshold_length=%d)",
            length,
            self._config.threshold_length,
        )

    # endregion
