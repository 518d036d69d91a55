"""Byte streams that spill from memory to a temporary file past a size threshold."""

from spill_stream._backing import BackingKind, BackingStore
from spill_stream._capabilities import Capability, CapabilitySet, probe_capabilities
from spill_stream._config import DEFAULT_BUFFER_SIZE, DEFAULT_THRESHOLD_LENGTH, SpillConfig
from spill_stream._errors import (
    InvalidStreamState,
    OperationNotSupported,
    SpillStreamError,
    ValueOutOfRange,
)
from spill_stream._stream import SwitchingStream

__version__ = "0.1.0"

__all__ = [
    # Core
    "SwitchingStream",
    "BackingKind",
    "BackingStore",
    # Capabilities
    "Capability",
    "CapabilitySet",
    "probe_capabilities",
    # Config
    "SpillConfig",
    "DEFAULT_THRESHOLD_LENGTH",
    "DEFAULT_BUFFER_SIZE",
    # Errors
    "SpillStreamError",
    "ValueOutOfRange",
    "InvalidStreamState",
    "OperationNotSupported",
    # Version
    "__version__",
]
