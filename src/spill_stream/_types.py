"""Type aliases used throughout spill_stream."""

from __future__ import annotations

from typing import Union

Buffer = Union[bytes, bytearray, memoryview]  # noqa: UP007
