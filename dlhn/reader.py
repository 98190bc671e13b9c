# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Sequential byte source used by the decoders.

A Reader wraps either an in-memory buffer or any object with a
``read(size) -> bytes`` method (files, sockets made into files, serial
ports). Bytes pulled from the underlying source are kept until the next
mark(), so a value that failed with ReadError halfway through can be
re-read from its first byte once more data has arrived.
"""

from typing import Union

from .errors import ReadError

# Drop consumed bytes from the buffer once this many have piled up.
_COMPACT_THRESHOLD = 64 * 1024

# Largest single read() issued to the underlying source.
_CHUNK_SIZE = 64 * 1024


class Reader:
    """
    Exact-size reads over a buffer or a stream.

    Example:
        reader = Reader(b"\\x01\\x00")
        reader.read(1)   # b"\\x01"
        reader.position  # 1
    """

    def __init__(self, source: Union[bytes, bytearray, memoryview, object]):
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._buf = bytearray(source)
            self._source = None
        else:
            if not hasattr(source, "read"):
                raise TypeError(
                    f"Reader source must be bytes-like or have read(), got {type(source).__name__}"
                )
            self._buf = bytearray()
            self._source = source
        self._pos = 0
        self._base = 0  # absolute offset of _buf[0]
        self._mark = None

    @property
    def position(self) -> int:
        """Number of bytes consumed since the reader was created."""
        return self._base + self._pos

    def _available(self) -> int:
        return len(self._buf) - self._pos

    def _fill(self, size: int) -> bool:
        """Pull from the source until ``size`` bytes are buffered."""
        while self._available() < size:
            if self._source is None:
                return False
            chunk = self._source.read(min(size - self._available(), _CHUNK_SIZE))
            if not chunk:
                return False
            self._buf += chunk
        return True

    def read(self, size: int) -> bytes:
        """
        Read exactly ``size`` bytes.

        Raises:
            ReadError: If the source ends first. Nothing is consumed.
        """
        if size < 0:
            raise ValueError("Read size must be non-negative")
        if not self._fill(size):
            raise ReadError(
                f"Unexpected end of data: needed {size} bytes, {self._available()} available"
            )
        start = self._pos
        self._pos += size
        return bytes(self._buf[start:self._pos])

    def read_byte(self) -> int:
        """Read a single byte as an int."""
        if not self._fill(1):
            raise ReadError("Unexpected end of data")
        byte = self._buf[self._pos]
        self._pos += 1
        return byte

    def at_end(self) -> bool:
        """True if no further byte can be read right now."""
        return not self._fill(1)

    def mark(self) -> None:
        """Remember the current position for a later reset()."""
        if self._pos >= _COMPACT_THRESHOLD:
            del self._buf[:self._pos]
            self._base += self._pos
            self._pos = 0
        self._mark = self._pos

    def reset(self) -> None:
        """Rewind to the last mark()."""
        if self._mark is None:
            raise RuntimeError("reset() called without mark()")
        self._pos = self._mark
