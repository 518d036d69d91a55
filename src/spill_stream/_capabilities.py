"""Capability enum and CapabilitySet."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from spill_stream._errors import OperationNotSupported

if TYPE_CHECKING:
    from collections.abc import Iterator


class Capability(enum.Enum):
    """Operations a stream may support."""

    READ = "read"
    WRITE = "write"
    SEEK = "seek"
    TIMEOUT = "timeout"
    RESIZE = "resize"


class CapabilitySet:
    """Immutable set of capabilities declared by a stream.

    :param capabilities: The set of supported capabilities.
    """

    __slots__ = ("_caps",)
    _caps: frozenset[Capability]

    def __init__(self, capabilities: set[Capability]) -> None:
        object.__setattr__(self, "_caps", frozenset(capabilities))

    def supports(self, cap: Capability) -> bool:
        """Check whether a capability is supported."""
        return cap in self._caps

    def require(self, cap: Capability, *, operation: str = "") -> None:
        """Raise if a capability is not supported.

        :raises OperationNotSupported: If the capability is missing.
        """
        if cap not in self._caps:
            raise OperationNotSupported(
                f"Capability '{cap.value}' is not supported",
                capability=cap.value,
                operation=operation or None,
            )

    def __contains__(self, cap: object) -> bool:
        return cap in self._caps

    def __iter__(self) -> Iterator[Capability]:
        return iter(self._caps)

    def __len__(self) -> int:
        return len(self._caps)

    def __repr__(self) -> str:
        names = sorted(c.name for c in self._caps)
        return f"CapabilitySet({{{', '.join(names)}}})"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("CapabilitySet is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("CapabilitySet is immutable")


_PROBES = (
    (Capability.READ, "readable"),
    (Capability.WRITE, "writable"),
    (Capability.SEEK, "seekable"),
)


def probe_capabilities(stream: object) -> CapabilitySet:
    """Derive the capabilities of an arbitrary stream object.

    Asks the stream's ``readable()``, ``writable()`` and ``seekable()``
    methods. A missing method, or one that fails because the stream is
    closed, counts as unsupported.
    """
    caps = set()
    for cap, method in _PROBES:
        probe = getattr(stream, method, None)
        if probe is None:
            continue
        try:
            supported = probe()
        except ValueError:
            continue
        if supported:
            caps.add(cap)
    return CapabilitySet(caps)
