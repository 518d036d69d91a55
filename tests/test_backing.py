"""Tests for backing stores."""

from __future__ import annotations

import dataclasses
import io

import pytest

from spill_stream._backing import (
    BackingKind,
    BackingStore,
    copy_stream,
    memory_store,
    temp_file_store,
    wrap_store,
)


class TestMemoryStore:
    def test_kind_and_empty(self) -> None:
        store = memory_store(1024)
        assert store.kind is BackingKind.MEMORY
        assert isinstance(store.stream, io.BytesIO)
        assert store.length == 0


class TestTempFileStore:
    def test_kind_and_modes(self, spill_dir: str) -> None:
        store = temp_file_store(spill_dir, 8192)
        try:
            assert store.kind is BackingKind.FILE
            assert store.stream.readable()
            assert store.stream.writable()
            assert store.stream.seekable()
        finally:
            store.close()
        assert store.stream.closed

    def test_each_store_gets_its_own_file(self, spill_dir: str) -> None:
        first = temp_file_store(spill_dir, 8192)
        second = temp_file_store(spill_dir, 8192)
        try:
            first.stream.write(b"first")
            assert second.length == 0
        finally:
            first.close()
            second.close()


class TestLength:
    def test_length_keeps_position(self) -> None:
        store = BackingStore(BackingKind.MEMORY, io.BytesIO(b"0123456789"))
        store.stream.seek(3)
        assert store.length == 10
        assert store.stream.tell() == 3

    def test_length_sees_buffered_writes(self, spill_dir: str) -> None:
        store = temp_file_store(spill_dir, 8192)
        try:
            store.stream.write(b"x" * 100)
            assert store.length == 100
            assert store.stream.tell() == 100
        finally:
            store.close()

    def test_frozen(self) -> None:
        store = memory_store()
        with pytest.raises(dataclasses.FrozenInstanceError):
            store.kind = BackingKind.FILE  # type: ignore[misc]


class TestWrapStore:
    def test_bytes_io_is_memory(self) -> None:
        assert wrap_store(io.BytesIO()).kind is BackingKind.MEMORY

    def test_real_file_is_file(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        with open(tmp_path / "body.bin", "w+b") as fh:
            assert wrap_store(fh).kind is BackingKind.FILE

    def test_stream_without_descriptor_is_memory(self) -> None:
        stream = io.BufferedRandom(io.BytesIO())
        assert wrap_store(stream).kind is BackingKind.MEMORY  # type: ignore[arg-type]


class TestCopyStream:
    def test_copies_from_current_position(self) -> None:
        source = io.BytesIO(b"header:body")
        source.seek(7)
        target = io.BytesIO()
        assert copy_stream(source, target, 2) == 4
        assert target.getvalue() == b"body"

    def test_empty_source(self) -> None:
        target = io.BytesIO()
        assert copy_stream(io.BytesIO(), target, 8192) == 0
        assert target.getvalue() == b""
