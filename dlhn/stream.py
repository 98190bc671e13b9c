# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Header-then-bodies streams.

A stream is one serialized header followed by any number of bodies of
that shape, back to back, with no delimiters:

    with open("samples.dlhn", "wb") as f:
        writer = StreamWriter(Header.tuple(BOOLEAN, UINT8), f)
        writer.write_header()
        writer.write((True, 7))
        writer.write((False, 9))

    with open("samples.dlhn", "rb") as f:
        for value in StreamReader(f):
            print(value)
"""

import logging
from enum import IntEnum
from typing import Any, Iterator

from .body import encode_body, read_body
from .errors import ReadError
from .header import Header, encode_header, read_header, resolve_header
from .reader import Reader

logger = logging.getLogger(__name__)


class HeaderState(IntEnum):
    """Whether a StreamWriter has emitted its header."""
    NOT_WRITTEN = 0
    WRITTEN = 1
    DO_NOT_WRITE = 2

    def __str__(self) -> str:
        return self.name


class StreamWriter:
    """
    Writes a header once, then bodies, to a sink with a write() method.

    The header is optional: writing a body first commits the stream to
    being headerless, and write_header() is refused afterwards.
    """

    def __init__(self, header, sink):
        self._header = resolve_header(header)
        self._sink = sink
        self._state = HeaderState.NOT_WRITTEN

    @property
    def header(self) -> Header:
        return self._header

    @property
    def header_state(self) -> HeaderState:
        return self._state

    @property
    def sink(self):
        return self._sink

    def write_header(self) -> int:
        """
        Write the serialized header.

        Returns:
            Number of bytes written

        Raises:
            RuntimeError: If the header was already written or a body came first
        """
        if self._state != HeaderState.NOT_WRITTEN:
            raise RuntimeError(f"Cannot write header in state {self._state!s}")
        data = encode_header(self._header)
        self._sink.write(data)
        self._state = HeaderState.WRITTEN
        logger.debug("Wrote header %s (%d bytes)", self._header, len(data))
        return len(data)

    def write(self, value) -> int:
        """
        Encode and write one body.

        The value is fully encoded before anything reaches the sink, so
        an encoding error leaves the stream unchanged.

        Returns:
            Number of bytes written
        """
        data = encode_body(self._header, value)
        self._sink.write(data)
        if self._state == HeaderState.NOT_WRITTEN:
            self._state = HeaderState.DO_NOT_WRITE
        return len(data)

    def flush(self) -> None:
        flush = getattr(self._sink, "flush", None)
        if flush is not None:
            flush()


class StreamReader:
    """
    Reads the header of a stream, then its bodies one at a time.

    For live sources, read() raising ReadError means the next body is not
    complete yet; the bytes already pulled are kept and the same call can
    be retried once more data is available.
    """

    def __init__(self, source):
        self._reader = source if isinstance(source, Reader) else Reader(source)
        self._reader.mark()
        try:
            self._header = read_header(self._reader)
        except ReadError:
            self._reader.reset()
            raise
        logger.debug("Read header %s", self._header)

    @property
    def header(self) -> Header:
        return self._header

    @property
    def position(self) -> int:
        """Bytes consumed so far, header included."""
        return self._reader.position

    def read(self) -> Any:
        """
        Read the next body.

        Raises:
            ReadError: If the body is incomplete; position is left at its start
        """
        self._reader.mark()
        try:
            return read_body(self._reader, self._header)
        except ReadError:
            self._reader.reset()
            raise

    def __iter__(self) -> Iterator[Any]:
        """Yield bodies until the source is exhausted at a body boundary."""
        while not self._reader.at_end():
            yield self.read()
