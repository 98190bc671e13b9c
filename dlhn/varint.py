# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Varint encoding/decoding (unsigned LEB128) and the ZigZag transform.

Signed integers are ZigZag-mapped first so that small negative values
stay short: 0 -> 0, -1 -> 1, 1 -> 2, -2 -> 3, ...
"""

from typing import Tuple

from .errors import ValueOverflowError
from .reader import Reader


def encode_varuint(value: int) -> bytes:
    """
    Encode an unsigned integer as a varint.

    Args:
        value: Non-negative integer to encode

    Returns:
        Varint-encoded bytes (minimal length)

    Raises:
        ValueOverflowError: If value is negative
    """
    if value < 0:
        raise ValueOverflowError("Cannot encode negative value as varint")

    result = []
    while value >= 0x80:
        result.append((value & 0x7F) | 0x80)
        value >>= 7
    result.append(value)
    return bytes(result)


def read_varuint(reader: Reader, bits: int = 64) -> int:
    """
    Read a varint from a reader.

    Non-minimal encodings (redundant trailing zero groups) are accepted as
    long as the value fits in ``bits``.

    Raises:
        ReadError: If the source ends before the terminating byte
        ValueOverflowError: If the value does not fit in ``bits`` bits
    """
    value = 0
    shift = 0
    max_shift = 7 * ((bits + 6) // 7)

    while True:
        byte = reader.read_byte()
        value |= (byte & 0x7F) << shift

        if not (byte & 0x80):
            break

        shift += 7
        if shift >= max_shift:
            raise ValueOverflowError(f"Varint decode: value too large for {bits} bits")

    if value >> bits:
        raise ValueOverflowError(f"Varint decode: value too large for {bits} bits")
    return value


def decode_varuint(data: bytes, offset: int = 0, bits: int = 64) -> Tuple[int, int]:
    """
    Decode a varint from bytes.

    Args:
        data: Bytes containing the varint
        offset: Starting offset in data
        bits: Width of the target integer

    Returns:
        Tuple of (decoded value, new offset after varint)
    """
    reader = Reader(memoryview(data)[offset:])
    value = read_varuint(reader, bits)
    return value, offset + reader.position


def zigzag_encode(value: int) -> int:
    """Map a signed integer onto the unsigned integers."""
    if value >= 0:
        return value << 1
    return (-value << 1) - 1


def zigzag_decode(value: int) -> int:
    """Inverse of zigzag_encode()."""
    if value & 1:
        return -((value + 1) >> 1)
    return value >> 1


def encode_varint(value: int) -> bytes:
    """Encode a signed integer as a ZigZag varint."""
    return encode_varuint(zigzag_encode(value))


def read_varint(reader: Reader, bits: int = 64) -> int:
    """Read a ZigZag varint holding a signed ``bits``-wide integer."""
    return zigzag_decode(read_varuint(reader, bits))


def decode_varint(data: bytes, offset: int = 0, bits: int = 64) -> Tuple[int, int]:
    """Decode a ZigZag varint from bytes; returns (value, new offset)."""
    value, offset = decode_varuint(data, offset, bits)
    return zigzag_decode(value), offset
