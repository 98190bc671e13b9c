# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Shared fixtures and helpers."""

import pytest

from dlhn.header import BOOLEAN, STRING, UINT8, Header


class ChunkedSource:
    """
    Byte source that hands out data in fixed chunks.

    An empty chunk in the list behaves like a read timeout on a live
    port: that read returns b"" and the next read carries on.
    """

    def __init__(self, chunks):
        self.chunks = list(chunks)
        self.reads = 0

    def read(self, size: int) -> bytes:
        self.reads += 1
        if not self.chunks:
            return b""
        chunk = self.chunks[0]
        if len(chunk) <= size:
            self.chunks.pop(0)
            return chunk
        self.chunks[0] = chunk[size:]
        return chunk[:size]


@pytest.fixture
def chunked_source():
    """Factory for ChunkedSource instances."""
    return ChunkedSource


@pytest.fixture
def record_header():
    """Tuple[Boolean, UInt8, String], the header used across examples."""
    return Header.tuple(BOOLEAN, UINT8, STRING)
