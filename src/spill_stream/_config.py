"""Configuration model — the immutable spill policy of a stream."""

from __future__ import annotations

import dataclasses
from typing import Optional

from spill_stream._errors import ValueOutOfRange

DEFAULT_THRESHOLD_LENGTH = 81920
DEFAULT_BUFFER_SIZE = 8192


@dataclasses.dataclass(frozen=True)
class SpillConfig:
    """Describes when and where a stream spills to disk.

    :param expected_length: Anticipated total size of the content in bytes.
    :param threshold_length: Content length that moves the stream out of memory.
    :param disable_switching: If ``True``, the stream never moves to disk.
    :param temp_dir: Directory for temporary files (``None`` uses the system default).
    :param buffer_size: I/O buffer size of the temporary file, also used as copy chunk size.
    """

    expected_length: int = 0
    threshold_length: int = DEFAULT_THRESHOLD_LENGTH
    disable_switching: bool = False
    temp_dir: Optional[str] = None
    buffer_size: int = DEFAULT_BUFFER_SIZE

    @property
    def starts_on_disk(self) -> bool:
        """Whether a fresh stream under this policy skips the memory stage."""
        return not self.disable_switching and self.expected_length >= self.threshold_length

    def validate(self) -> None:
        """Check that all lengths are in range.

        :raises ValueOutOfRange: If a length is negative or the buffer size is not positive.
        """
        if self.expected_length < 0:
            raise ValueOutOfRange(
                "The expected length cannot be less than zero",
                parameter="expected_length",
                value=self.expected_length,
            )
        if self.threshold_length < 0:
            raise ValueOutOfRange(
                "The threshold length cannot be less than zero",
                parameter="threshold_length",
                value=self.threshold_length,
            )
        if self.buffer_size <= 0:
            raise ValueOutOfRange(
                "The buffer size must be greater than zero",
                parameter="buffer_size",
                value=self.buffer_size,
            )

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> SpillConfig:
        """Construct from a plain dict (e.g. parsed TOML/JSON).

        :param data: Dict whose keys are a subset of the field names.
        :raises TypeError: If ``data`` is not a dict.
        :raises ValueError: If ``data`` holds unknown keys.
        """
        if not isinstance(data, dict):
            msg = "Expected spill config to be a dict"
            raise TypeError(msg)

        allowed = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - allowed
        if unknown:
            raise ValueError(f"Unknown spill config keys {sorted(unknown)}. Allowed keys: {sorted(allowed)}")

        kwargs: dict[str, object] = {}
        for name in ("expected_length", "threshold_length", "buffer_size"):
            if name in data:
                kwargs[name] = int(data[name])  # type: ignore[call-overload]
        if "disable_switching" in data:
            kwargs["disable_switching"] = bool(data["disable_switching"])
        if data.get("temp_dir") is not None:
            kwargs["temp_dir"] = str(data["temp_dir"])
        return cls(**kwargs)  # type: ignore[arg-type]
