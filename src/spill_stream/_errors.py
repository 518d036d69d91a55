"""Error hierarchy for spill_stream."""

from __future__ import annotations

from typing import Optional


class SpillStreamError(Exception):
    """Base class for all spill_stream errors.

    :param message: Human-readable error description.
    :param operation: The stream operation that failed, if any.
    :param value: The offending value, if any.
    """

    def __init__(self, message: str = "", *, operation: Optional[str] = None, value: object = None) -> None:
        self.operation = operation
        self.value = value
        super().__init__(message)

    def _context(self) -> list[str]:
        parts = []
        if self.operation is not None:
            parts.append(f"operation={self.operation!r}")
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        return parts

    def __str__(self) -> str:
        parts = [super().__str__(), *self._context()]
        return " | ".join(p for p in parts if p)

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(self.args[0] if self.args else ""), *self._context()]
        return f"{cls}({', '.join(args)})"


class ValueOutOfRange(SpillStreamError):
    """Raised when a numeric argument lies outside its allowed range.

    :param parameter: The name of the offending parameter.
    """

    def __init__(
        self,
        message: str = "",
        *,
        operation: Optional[str] = None,
        value: object = None,
        parameter: str = "",
    ) -> None:
        self.parameter = parameter
        super().__init__(message, operation=operation, value=value)

    def _context(self) -> list[str]:
        parts = super()._context()
        if self.parameter:
            parts.insert(0, f"parameter={self.parameter!r}")
        return parts


class InvalidStreamState(SpillStreamError):
    """Raised when a stream cannot serve the request in its current state."""


class OperationNotSupported(SpillStreamError):
    """Raised when an operation requires a capability the stream lacks.

    :param capability: The name of the unsupported capability.
    """

    def __init__(
        self,
        message: str = "",
        *,
        operation: Optional[str] = None,
        value: object = None,
        capability: str = "",
    ) -> None:
        self.capability = capability
        super().__init__(message, operation=operation, value=value)

    def _context(self) -> list[str]:
        parts = super()._context()
        if self.capability:
            parts.append(f"capability={self.capability!r}")
        return parts
