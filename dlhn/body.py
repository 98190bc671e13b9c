# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Body (value) serialization.

A body carries no kind codes: the caller supplies the header the value
was written with, and the same header drives decoding. Values map to
Python types as follows:

    Unit                None
    Boolean             bool
    UInt*/Int*          int
    Float32/Float64     float
    String              str
    Binary              bytes
    Optional            None when absent, else the inner value
    Array               list
    Tuple               tuple
    Map                 dict (Array and Map keys decode as tuples)
    Enum                Variant(index, value)
    BigUInt/BigInt      int
    BigDecimal          decimal.Decimal
    Date                datetime.date
    DateTime            datetime.datetime (UTC)
"""

import struct
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from . import formats
from .errors import InvalidUtf8Error, ReadError, UnknownCodeError, ValueOverflowError
from .header import Header, Kind, resolve_header
from .reader import Reader
from .varint import encode_varint, encode_varuint, read_varint, read_varuint

_UINT_BITS = {
    Kind.UINT16: 16,
    Kind.UINT32: 32,
    Kind.UINT64: 64,
    Kind.UINT128: 128,
}

_INT_BITS = {
    Kind.INT8: 8,
    Kind.INT16: 16,
    Kind.INT32: 32,
    Kind.INT64: 64,
    Kind.INT128: 128,
}

_FLOAT_FORMATS = {
    Kind.FLOAT32: struct.Struct("<f"),
    Kind.FLOAT64: struct.Struct("<d"),
}

_ENUM_INDEX_BITS = 32

# Most elements accepted in an array or map whose entries encode to no bytes.
MAX_EMPTY_ELEMENTS = 1 << 20


@dataclass(frozen=True)
class Variant:
    """Value of an Enum header: the variant index and its payload."""
    index: int
    value: Any = None


def encode_body(header, value) -> bytes:
    """
    Serialize ``value`` according to ``header``.

    Args:
        header: Header, or an object providing dlhn_header()
        value: Python value matching the header (see module docstring)

    Returns:
        Encoded body bytes

    Raises:
        ValueOverflowError: If a number does not fit its kind
        InvalidUtf8Error: If a string cannot be encoded as UTF-8
        TypeError: If a value has the wrong Python type for its kind
        ValueError: If a tuple length or enum index does not match the header
    """
    out = bytearray()
    _encode(resolve_header(header), value, out)
    return bytes(out)


def write_body(sink, header, value) -> int:
    """Write an encoded body to ``sink``; returns the byte count."""
    data = encode_body(header, value)
    sink.write(data)
    return len(data)


def decode_body(header, data: bytes) -> Any:
    """
    Deserialize one body from the start of ``data``.

    Raises:
        ReadError: If data is truncated or a flag byte is invalid
        InvalidUtf8Error: If string bytes are not valid UTF-8
        ValueOverflowError: If a number exceeds its kind's range, or an array or map
            of zero-size elements claims more than MAX_EMPTY_ELEMENTS entries
        UnknownCodeError: If an enum variant index is out of range
    """
    return read_body(Reader(data), header)


def read_body(reader: Reader, header) -> Any:
    """Read one body from ``reader``."""
    header = resolve_header(header)
    return _decode(header, reader)


def _encode(header: Header, value, out: bytearray) -> None:
    _ENCODERS[header.kind](header, value, out)


def _decode(header: Header, reader: Reader) -> Any:
    return _DECODERS[header.kind](header, reader)


def _check_int(header: Header, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{header.kind!s} value must be int, got {type(value).__name__}")


def _check_sequence(header: Header, value) -> None:
    if isinstance(value, (str, bytes, bytearray, memoryview, Mapping)) or not hasattr(value, "__iter__"):
        raise TypeError(f"{header.kind!s} value must be a sequence, got {type(value).__name__}")


def _is_empty(header: Header) -> bool:
    """True if every value of ``header`` encodes to zero bytes."""
    if header.kind == Kind.UNIT:
        return True
    if header.kind == Kind.TUPLE:
        return all(_is_empty(item) for item in header.items)
    return False


def _check_count(header: Header, count: int, *elements: Header) -> None:
    if count > MAX_EMPTY_ELEMENTS and all(_is_empty(e) for e in elements):
        raise ValueOverflowError(
            f"{header.kind!s} of {count} zero-size elements exceeds {MAX_EMPTY_ELEMENTS}"
        )


def _freeze(value):
    """Make a decoded map key hashable: lists become tuples, recursively."""
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    if isinstance(value, dict):
        return tuple((_freeze(k), _freeze(v)) for k, v in value.items())
    if isinstance(value, Variant):
        return Variant(value.index, _freeze(value.value))
    return value


# Unit / Boolean

def _encode_unit(header, value, out):
    if value is not None:
        raise TypeError(f"Unit value must be None, got {type(value).__name__}")


def _decode_unit(header, reader):
    return None


def _encode_boolean(header, value, out):
    if not isinstance(value, bool):
        raise TypeError(f"Boolean value must be bool, got {type(value).__name__}")
    out.append(1 if value else 0)


def _decode_boolean(header, reader):
    byte = reader.read_byte()
    if byte > 1:
        raise ReadError(f"Invalid boolean byte: 0x{byte:02x}")
    return byte == 1


# Integers

def _encode_uint8(header, value, out):
    _check_int(header, value)
    if not 0 <= value <= 0xFF:
        raise ValueOverflowError(f"UInt8 value out of range: {value}")
    out.append(value)


def _decode_uint8(header, reader):
    return reader.read_byte()


def _encode_uint(header, value, out):
    _check_int(header, value)
    bits = _UINT_BITS[header.kind]
    if not 0 <= value < (1 << bits):
        raise ValueOverflowError(f"{header.kind!s} value out of range: {value}")
    out += encode_varuint(value)


def _decode_uint(header, reader):
    return read_varuint(reader, _UINT_BITS[header.kind])


def _encode_int(header, value, out):
    _check_int(header, value)
    bits = _INT_BITS[header.kind]
    if not -(1 << (bits - 1)) <= value < (1 << (bits - 1)):
        raise ValueOverflowError(f"{header.kind!s} value out of range: {value}")
    out += encode_varint(value)


def _decode_int(header, reader):
    return read_varint(reader, _INT_BITS[header.kind])


# Floats

def _encode_float(header, value, out):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{header.kind!s} value must be float, got {type(value).__name__}")
    try:
        out += _FLOAT_FORMATS[header.kind].pack(value)
    except OverflowError:
        raise ValueOverflowError(f"{header.kind!s} value out of range: {value}") from None


def _decode_float(header, reader):
    fmt = _FLOAT_FORMATS[header.kind]
    return fmt.unpack(reader.read(fmt.size))[0]


# String / Binary

def _encode_string(header, value, out):
    if not isinstance(value, str):
        raise TypeError(f"String value must be str, got {type(value).__name__}")
    try:
        raw = value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidUtf8Error(f"String is not encodable as UTF-8: {e.reason}") from None
    out += encode_varuint(len(raw))
    out += raw


def _decode_string(header, reader):
    raw = reader.read(read_varuint(reader))
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidUtf8Error(f"Invalid UTF-8 at byte {e.start}: {e.reason}") from None


def _encode_binary(header, value, out):
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"Binary value must be bytes-like, got {type(value).__name__}")
    raw = bytes(value)
    out += encode_varuint(len(raw))
    out += raw


def _decode_binary(header, reader):
    return reader.read(read_varuint(reader))


# Containers

def _encode_optional(header, value, out):
    if value is None:
        out.append(0)
    else:
        out.append(1)
        _encode(header.items[0], value, out)


def _decode_optional(header, reader):
    flag = reader.read_byte()
    if flag == 0:
        return None
    if flag != 1:
        raise ReadError(f"Invalid optional flag: 0x{flag:02x}")
    return _decode(header.items[0], reader)


def _encode_array(header, value, out):
    _check_sequence(header, value)
    items = list(value)
    element = header.items[0]
    _check_count(header, len(items), element)
    out += encode_varuint(len(items))
    for item in items:
        _encode(element, item, out)


def _decode_array(header, reader):
    count = read_varuint(reader)
    element = header.items[0]
    _check_count(header, count, element)
    return [_decode(element, reader) for _ in range(count)]


def _encode_tuple(header, value, out):
    _check_sequence(header, value)
    items = tuple(value)
    if len(items) != len(header.items):
        raise ValueError(
            f"Tuple value has {len(items)} elements, header declares {len(header.items)}"
        )
    for element, item in zip(header.items, items):
        _encode(element, item, out)


def _decode_tuple(header, reader):
    return tuple(_decode(element, reader) for element in header.items)


def _encode_map(header, value, out):
    if not isinstance(value, Mapping):
        raise TypeError(f"Map value must be a mapping, got {type(value).__name__}")
    key_header, value_header = header.items
    _check_count(header, len(value), key_header, value_header)
    out += encode_varuint(len(value))
    for key, item in value.items():
        _encode(key_header, key, out)
        _encode(value_header, item, out)


def _decode_map(header, reader):
    count = read_varuint(reader)
    key_header, value_header = header.items
    _check_count(header, count, key_header, value_header)
    result = {}
    for _ in range(count):
        key = _freeze(_decode(key_header, reader))
        result[key] = _decode(value_header, reader)
    return result


def _encode_enum(header, value, out):
    if not isinstance(value, Variant):
        raise TypeError(f"Enum value must be a Variant, got {type(value).__name__}")
    if not 0 <= value.index < len(header.items):
        raise ValueError(
            f"Variant index {value.index} out of range for {len(header.items)} variants"
        )
    out += encode_varuint(value.index)
    _encode(header.items[value.index], value.value, out)


def _decode_enum(header, reader):
    index = read_varuint(reader, _ENUM_INDEX_BITS)
    if index >= len(header.items):
        raise UnknownCodeError(index, f"Unknown enum variant index: {index}")
    return Variant(index, _decode(header.items[index], reader))


# Extended formats

def _wrap_encoder(encode):
    def encoder(header, value, out):
        out += encode(value)
    return encoder


def _wrap_decoder(read):
    def decoder(header, reader):
        return read(reader)
    return decoder


_ENCODERS = {
    Kind.UNIT: _encode_unit,
    Kind.OPTIONAL: _encode_optional,
    Kind.BOOLEAN: _encode_boolean,
    Kind.UINT8: _encode_uint8,
    Kind.UINT16: _encode_uint,
    Kind.UINT32: _encode_uint,
    Kind.UINT64: _encode_uint,
    Kind.UINT128: _encode_uint,
    Kind.INT8: _encode_int,
    Kind.INT16: _encode_int,
    Kind.INT32: _encode_int,
    Kind.INT64: _encode_int,
    Kind.INT128: _encode_int,
    Kind.FLOAT32: _encode_float,
    Kind.FLOAT64: _encode_float,
    Kind.BIG_UINT: _wrap_encoder(formats.encode_big_uint),
    Kind.BIG_INT: _wrap_encoder(formats.encode_big_int),
    Kind.BIG_DECIMAL: _wrap_encoder(formats.encode_big_decimal),
    Kind.STRING: _encode_string,
    Kind.BINARY: _encode_binary,
    Kind.ARRAY: _encode_array,
    Kind.TUPLE: _encode_tuple,
    Kind.MAP: _encode_map,
    Kind.ENUM: _encode_enum,
    Kind.DATE: _wrap_encoder(formats.encode_date),
    Kind.DATE_TIME: _wrap_encoder(formats.encode_date_time),
}

_DECODERS = {
    Kind.UNIT: _decode_unit,
    Kind.OPTIONAL: _decode_optional,
    Kind.BOOLEAN: _decode_boolean,
    Kind.UINT8: _decode_uint8,
    Kind.UINT16: _decode_uint,
    Kind.UINT32: _decode_uint,
    Kind.UINT64: _decode_uint,
    Kind.UINT128: _decode_uint,
    Kind.INT8: _decode_int,
    Kind.INT16: _decode_int,
    Kind.INT32: _decode_int,
    Kind.INT64: _decode_int,
    Kind.INT128: _decode_int,
    Kind.FLOAT32: _decode_float,
    Kind.FLOAT64: _decode_float,
    Kind.BIG_UINT: _wrap_decoder(formats.read_big_uint),
    Kind.BIG_INT: _wrap_decoder(formats.read_big_int),
    Kind.BIG_DECIMAL: _wrap_decoder(formats.read_big_decimal),
    Kind.STRING: _decode_string,
    Kind.BINARY: _decode_binary,
    Kind.ARRAY: _decode_array,
    Kind.TUPLE: _decode_tuple,
    Kind.MAP: _decode_map,
    Kind.ENUM: _decode_enum,
    Kind.DATE: _wrap_decoder(formats.read_date),
    Kind.DATE_TIME: _wrap_decoder(formats.read_date_time),
}
