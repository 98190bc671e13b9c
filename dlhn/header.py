# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Header (type descriptor) definitions and serialization.

A header describes the shape of a body without carrying a value. Each
node is written as one kind code byte; composite kinds follow it with
their children:

    Optional, Array   code, child
    Map               code, key, value
    Tuple, Enum       code, varint count, children...

Example: Tuple[Boolean, UInt8, String] is written as 21 03 02 03 12.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple

from .errors import UnknownCodeError, ValueOverflowError
from .reader import Reader
from .varint import encode_varuint, read_varuint

# Deepest header tree accepted when decoding.
MAX_DEPTH = 256

# Tuple and enum element counts are 16-bit on the wire.
MAX_TUPLE_SIZE = 0xFFFF


class Kind(IntEnum):
    """Header kind codes. Values are part of the wire format."""
    UNIT = 0
    OPTIONAL = 1
    BOOLEAN = 2
    UINT8 = 3
    UINT16 = 4
    UINT32 = 5
    UINT64 = 6
    UINT128 = 7
    INT8 = 8
    INT16 = 9
    INT32 = 10
    INT64 = 11
    INT128 = 12
    FLOAT32 = 13
    FLOAT64 = 14
    BIG_UINT = 15
    BIG_INT = 16
    BIG_DECIMAL = 17
    STRING = 18
    BINARY = 19
    ARRAY = 20
    TUPLE = 21
    # 22 is reserved (Struct) and never emitted.
    MAP = 23
    ENUM = 24
    DATE = 25
    DATE_TIME = 26

    def __str__(self) -> str:
        return _KIND_NAMES[self]


_KIND_NAMES = {
    Kind.UNIT: "Unit",
    Kind.OPTIONAL: "Optional",
    Kind.BOOLEAN: "Boolean",
    Kind.UINT8: "UInt8",
    Kind.UINT16: "UInt16",
    Kind.UINT32: "UInt32",
    Kind.UINT64: "UInt64",
    Kind.UINT128: "UInt128",
    Kind.INT8: "Int8",
    Kind.INT16: "Int16",
    Kind.INT32: "Int32",
    Kind.INT64: "Int64",
    Kind.INT128: "Int128",
    Kind.FLOAT32: "Float32",
    Kind.FLOAT64: "Float64",
    Kind.BIG_UINT: "BigUInt",
    Kind.BIG_INT: "BigInt",
    Kind.BIG_DECIMAL: "BigDecimal",
    Kind.STRING: "String",
    Kind.BINARY: "Binary",
    Kind.ARRAY: "Array",
    Kind.TUPLE: "Tuple",
    Kind.MAP: "Map",
    Kind.ENUM: "Enum",
    Kind.DATE: "Date",
    Kind.DATE_TIME: "DateTime",
}

# Number of child headers per composite kind; None means counted on the wire.
_ARITY = {
    Kind.OPTIONAL: 1,
    Kind.ARRAY: 1,
    Kind.MAP: 2,
    Kind.TUPLE: None,
    Kind.ENUM: None,
}


@dataclass(frozen=True)
class Header:
    """Immutable node of a header tree."""
    kind: Kind
    items: Tuple["Header", ...] = ()

    def __post_init__(self):
        kind = Kind(self.kind)
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, Header):
                raise TypeError(f"Header child must be a Header, got {type(item).__name__}")
        arity = _ARITY.get(kind, 0)
        if arity is None:
            if len(items) > MAX_TUPLE_SIZE:
                raise ValueOverflowError(f"{kind!s} has more than {MAX_TUPLE_SIZE} elements")
        elif len(items) != arity:
            raise ValueError(f"{kind!s} takes {arity} child header(s), got {len(items)}")
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "items", items)

    @classmethod
    def optional(cls, inner: "Header") -> "Header":
        return cls(Kind.OPTIONAL, (inner,))

    @classmethod
    def array(cls, element: "Header") -> "Header":
        return cls(Kind.ARRAY, (element,))

    @classmethod
    def map(cls, key: "Header", value: "Header") -> "Header":
        return cls(Kind.MAP, (key, value))

    @classmethod
    def tuple(cls, *elements: "Header") -> "Header":
        return cls(Kind.TUPLE, elements)

    @classmethod
    def enum(cls, *variants: "Header") -> "Header":
        return cls(Kind.ENUM, variants)

    @property
    def inner(self) -> "Header":
        """The single child of an Optional or Array header."""
        if _ARITY.get(self.kind) != 1:
            raise AttributeError(f"{self.kind!s} header has no single inner header")
        return self.items[0]

    def __str__(self) -> str:
        if not self.items and _ARITY.get(self.kind, 0) == 0:
            return str(self.kind)
        return f"{self.kind!s}[{', '.join(str(item) for item in self.items)}]"


UNIT = Header(Kind.UNIT)
BOOLEAN = Header(Kind.BOOLEAN)
UINT8 = Header(Kind.UINT8)
UINT16 = Header(Kind.UINT16)
UINT32 = Header(Kind.UINT32)
UINT64 = Header(Kind.UINT64)
UINT128 = Header(Kind.UINT128)
INT8 = Header(Kind.INT8)
INT16 = Header(Kind.INT16)
INT32 = Header(Kind.INT32)
INT64 = Header(Kind.INT64)
INT128 = Header(Kind.INT128)
FLOAT32 = Header(Kind.FLOAT32)
FLOAT64 = Header(Kind.FLOAT64)
BIG_UINT = Header(Kind.BIG_UINT)
BIG_INT = Header(Kind.BIG_INT)
BIG_DECIMAL = Header(Kind.BIG_DECIMAL)
STRING = Header(Kind.STRING)
BINARY = Header(Kind.BINARY)
DATE = Header(Kind.DATE)
DATE_TIME = Header(Kind.DATE_TIME)


def resolve_header(obj) -> Header:
    """
    Return the header for ``obj``.

    Accepts a Header, or any class or instance exposing a ``dlhn_header()``
    classmethod/staticmethod that produces one.
    """
    if isinstance(obj, Header):
        return obj
    produce = getattr(obj, "dlhn_header", None)
    if produce is None:
        raise TypeError(f"{obj!r} is not a Header and has no dlhn_header()")
    header = produce()
    if not isinstance(header, Header):
        raise TypeError(f"dlhn_header() returned {type(header).__name__}, expected Header")
    return header


def encode_header(header: Header) -> bytes:
    """Serialize a header tree."""
    out = bytearray()
    _encode(header, out)
    return bytes(out)


def write_header(sink, header: Header) -> int:
    """Write a serialized header to ``sink``; returns the byte count."""
    data = encode_header(header)
    sink.write(data)
    return len(data)


def _encode(header: Header, out: bytearray) -> None:
    out.append(header.kind)
    if _ARITY.get(header.kind, 0) is None:
        out += encode_varuint(len(header.items))
    for item in header.items:
        _encode(item, out)


def decode_header(data: bytes) -> Header:
    """
    Deserialize a header from the start of ``data``.

    Raises:
        UnknownCodeError: If a kind code is not in the table
        ReadError: If data is truncated
        ValueOverflowError: If nesting exceeds MAX_DEPTH
    """
    return read_header(Reader(data))


def read_header(reader: Reader) -> Header:
    """Read one header tree from ``reader``."""
    return _decode(reader, 0)


def _decode(reader: Reader, depth: int) -> Header:
    if depth > MAX_DEPTH:
        raise ValueOverflowError(f"Header nesting exceeds {MAX_DEPTH} levels")

    code = reader.read_byte()
    try:
        kind = Kind(code)
    except ValueError:
        raise UnknownCodeError(code, f"Unknown header code: {code}") from None

    arity = _ARITY.get(kind, 0)
    if arity is None:
        arity = read_varuint(reader, 16)
    if arity == 0:
        return _LEAVES.get(kind) or Header(kind)
    items = tuple(_decode(reader, depth + 1) for _ in range(arity))
    return Header(kind, items)


_LEAVES = {
    header.kind: header
    for header in (
        UNIT, BOOLEAN, UINT8, UINT16, UINT32, UINT64, UINT128,
        INT8, INT16, INT32, INT64, INT128, FLOAT32, FLOAT64,
        BIG_UINT, BIG_INT, BIG_DECIMAL, STRING, BINARY, DATE, DATE_TIME,
    )
}
