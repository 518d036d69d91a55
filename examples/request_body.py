"""Buffering request bodies — small bodies in memory, large ones on disk.

Demonstrates how a SwitchingStream spills to a temporary file once the
written content reaches the threshold, and how the expected length skips
the memory stage entirely.
"""

from __future__ import annotations

import io
import logging

from spill_stream import OperationNotSupported, SpillConfig, SwitchingStream

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    config = SpillConfig(threshold_length=16 * 1024)

    # --- Small body stays in memory ---
    with SwitchingStream.from_config(config) as body:
        body.write(b'{"name": "small"}')
        print(f"Small body: {body.length} bytes, in memory: {body.is_in_memory}")

    # --- Body written in chunks spills once the threshold is reached ---
    with SwitchingStream.from_config(config) as body:
        chunk = b"X" * 4096
        for i in range(6):
            body.write(chunk)
            print(f"  after chunk {i + 1}: {body.length:>6} bytes, in memory: {body.is_in_memory}")

        body.position = 0
        total = 0
        while True:
            data = body.read(8192)
            if not data:
                break
            total += len(data)
        print(f"Read back {total} bytes from disk.")

    # --- A declared Content-Length above the threshold goes straight to disk ---
    with SwitchingStream(expected_length=1_000_000, threshold_length=config.threshold_length) as body:
        print(f"\nLarge declared body, in memory before any write: {body.is_in_memory}")

    # --- Wrapping an existing buffer ---
    existing = io.BytesIO(b"already received")
    with SwitchingStream(existing, expected_length=16, threshold_length=1024) as body:
        print(f"\nWrapped buffer: {body.read()!r}")
        try:
            body.set_length(0)
        except OperationNotSupported as exc:
            print(f"set_length refused: {exc}")

    print("\nDone!")
