# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Tests for header definitions and serialization."""

import pytest
from dlhn.errors import ReadError, UnknownCodeError, ValueOverflowError
from dlhn.header import (
    BIG_DECIMAL,
    BINARY,
    BOOLEAN,
    DATE_TIME,
    FLOAT64,
    INT32,
    MAX_DEPTH,
    MAX_TUPLE_SIZE,
    STRING,
    UINT8,
    UINT64,
    UNIT,
    Header,
    Kind,
    decode_header,
    encode_header,
    read_header,
    resolve_header,
    write_header,
)
from dlhn.reader import Reader


class TestKind:
    """Tests for the kind code table."""

    @pytest.mark.parametrize("kind,code", [
        (Kind.UNIT, 0),
        (Kind.OPTIONAL, 1),
        (Kind.BOOLEAN, 2),
        (Kind.UINT8, 3),
        (Kind.UINT128, 7),
        (Kind.INT8, 8),
        (Kind.INT128, 12),
        (Kind.FLOAT32, 13),
        (Kind.FLOAT64, 14),
        (Kind.BIG_UINT, 15),
        (Kind.BIG_DECIMAL, 17),
        (Kind.STRING, 18),
        (Kind.BINARY, 19),
        (Kind.ARRAY, 20),
        (Kind.TUPLE, 21),
        (Kind.MAP, 23),
        (Kind.ENUM, 24),
        (Kind.DATE, 25),
        (Kind.DATE_TIME, 26),
    ])
    def test_codes(self, kind, code):
        """Kind values match the wire codes."""
        assert kind == code

    def test_codes_unique(self):
        """No two kinds share a code."""
        assert len({int(k) for k in Kind}) == len(Kind)

    def test_str(self):
        """Kinds print their wire names."""
        assert str(Kind.UINT8) == "UInt8"
        assert str(Kind.DATE_TIME) == "DateTime"


class TestHeaderConstruction:
    """Tests for Header validation and helpers."""

    def test_leaf(self):
        """Leaf constants have no children."""
        assert STRING.kind == Kind.STRING
        assert STRING.items == ()

    def test_kind_from_int(self):
        """Raw codes are normalized to Kind."""
        assert Header(18) == STRING
        assert Header(18).kind is Kind.STRING

    def test_structural_equality(self):
        """Equal trees compare and hash equal."""
        a = Header.map(STRING, Header.array(UINT8))
        b = Header.map(STRING, Header.array(UINT8))
        assert a == b
        assert hash(a) == hash(b)
        assert a != Header.map(STRING, Header.array(INT32))

    def test_items_list_normalized(self):
        """A list of children becomes a tuple."""
        header = Header(Kind.TUPLE, [BOOLEAN, UINT8])
        assert header.items == (BOOLEAN, UINT8)

    @pytest.mark.parametrize("kind,items", [
        (Kind.OPTIONAL, ()),
        (Kind.ARRAY, (UINT8, UINT8)),
        (Kind.MAP, (STRING,)),
        (Kind.STRING, (UINT8,)),
    ])
    def test_wrong_arity(self, kind, items):
        """Wrong child counts raise ValueError."""
        with pytest.raises(ValueError, match="child header"):
            Header(kind, items)

    def test_child_must_be_header(self):
        """Children must be Header instances."""
        with pytest.raises(TypeError):
            Header.array(Kind.UINT8)

    def test_unknown_kind(self):
        """The reserved code is not a kind."""
        with pytest.raises(ValueError):
            Header(22)

    def test_tuple_too_large(self):
        """Tuples past the 16-bit count limit are refused."""
        with pytest.raises(ValueOverflowError):
            Header.tuple(*([UNIT] * (MAX_TUPLE_SIZE + 1)))

    def test_inner(self):
        """inner returns the single child of Optional and Array."""
        assert Header.optional(STRING).inner == STRING
        assert Header.array(UINT8).inner == UINT8
        with pytest.raises(AttributeError):
            Header.tuple(UINT8).inner

    @pytest.mark.parametrize("header,text", [
        (UINT8, "UInt8"),
        (Header.tuple(BOOLEAN, UINT8, STRING), "Tuple[Boolean, UInt8, String]"),
        (Header.optional(Header.array(FLOAT64)), "Optional[Array[Float64]]"),
        (Header.map(STRING, BINARY), "Map[String, Binary]"),
        (Header.tuple(), "Tuple[]"),
        (Header.enum(UNIT, INT32), "Enum[Unit, Int32]"),
    ])
    def test_str(self, header, text):
        """Headers render as readable descriptors."""
        assert str(header) == text


class TestResolveHeader:
    """Tests for resolve_header."""

    def test_header_passthrough(self):
        """A Header resolves to itself."""
        assert resolve_header(UINT8) is UINT8

    def test_provider(self):
        """Objects with dlhn_header() resolve through it."""

        class Point:
            @staticmethod
            def dlhn_header():
                return Header.tuple(INT32, INT32)

        assert resolve_header(Point) == Header.tuple(INT32, INT32)
        assert resolve_header(Point()) == Header.tuple(INT32, INT32)

    def test_not_a_header(self):
        """Other objects raise TypeError."""
        with pytest.raises(TypeError, match="dlhn_header"):
            resolve_header("UInt8")

    def test_provider_returns_wrong_type(self):
        """dlhn_header() must produce a Header."""

        class Broken:
            @staticmethod
            def dlhn_header():
                return 3

        with pytest.raises(TypeError, match="expected Header"):
            resolve_header(Broken)


class TestEncodeHeader:
    """Tests for header serialization."""

    @pytest.mark.parametrize("header,data", [
        (UNIT, b"\x00"),
        (BOOLEAN, b"\x02"),
        (UINT8, b"\x03"),
        (STRING, b"\x12"),
        (DATE_TIME, b"\x1a"),
        (Header.optional(BOOLEAN), b"\x01\x02"),
        (Header.array(UINT64), b"\x14\x06"),
        (Header.map(STRING, INT32), b"\x17\x12\x0a"),
        (Header.tuple(BOOLEAN, UINT8, STRING), b"\x15\x03\x02\x03\x12"),
        (Header.tuple(), b"\x15\x00"),
        (Header.enum(UNIT, STRING), b"\x18\x02\x00\x12"),
    ])
    def test_encoding(self, header, data):
        """Headers serialize to code bytes in pre-order."""
        assert encode_header(header) == data

    def test_nested(self):
        """Children are written depth-first."""
        header = Header.array(Header.tuple(Header.optional(BIG_DECIMAL), BINARY))
        assert encode_header(header) == b"\x14\x15\x02\x01\x11\x13"

    def test_large_tuple_count(self):
        """Counts above 127 use a multi-byte varint."""
        header = Header.tuple(*([UINT8] * 200))
        data = encode_header(header)
        assert data[:3] == b"\x15\xC8\x01"
        assert len(data) == 3 + 200

    def test_write_header(self):
        """write_header appends to a sink and returns the size."""
        sink = bytearray()

        class Sink:
            def write(self, data):
                sink.extend(data)

        assert write_header(Sink(), Header.optional(STRING)) == 2
        assert bytes(sink) == b"\x01\x12"


class TestDecodeHeader:
    """Tests for header deserialization."""

    def test_record(self):
        """The canonical record header decodes."""
        header = decode_header(b"\x15\x03\x02\x03\x12")
        assert header == Header.tuple(BOOLEAN, UINT8, STRING)

    def test_leaves_are_shared(self):
        """Decoded leaves are the module constants."""
        assert decode_header(b"\x12") is STRING

    def test_trailing_bytes_untouched(self):
        """Only one header is consumed."""
        reader = Reader(b"\x03\x12")
        assert read_header(reader) == UINT8
        assert reader.position == 1
        assert read_header(reader) == STRING

    @pytest.mark.parametrize("code", [22, 27, 0xFF])
    def test_unknown_code(self, code):
        """Codes outside the table raise UnknownCodeError."""
        with pytest.raises(UnknownCodeError) as exc_info:
            decode_header(bytes([code]))
        assert exc_info.value.code == code

    def test_unknown_code_nested(self):
        """An unknown child code is also rejected."""
        with pytest.raises(UnknownCodeError):
            decode_header(b"\x14\x63")

    @pytest.mark.parametrize("data", [
        b"",
        b"\x01",               # Optional with no child
        b"\x15",               # Tuple with no count
        b"\x15\x03\x02\x03",   # Tuple missing its last element
        b"\x17\x12",           # Map missing its value header
    ])
    def test_truncated(self, data):
        """Truncated headers raise ReadError."""
        with pytest.raises(ReadError):
            decode_header(data)

    def test_tuple_count_overflow(self):
        """Tuple counts beyond 16 bits raise ValueOverflowError."""
        with pytest.raises(ValueOverflowError):
            decode_header(b"\x15\x80\x80\x04")

    def test_depth_limit(self):
        """Excessive nesting raises ValueOverflowError."""
        data = b"\x14" * (MAX_DEPTH + 2) + b"\x03"
        with pytest.raises(ValueOverflowError, match="nesting"):
            decode_header(data)

    def test_depth_at_limit(self):
        """Nesting up to the limit is accepted."""
        data = b"\x14" * MAX_DEPTH + b"\x03"
        header = decode_header(data)
        assert header.kind == Kind.ARRAY

    @pytest.mark.parametrize("header", [
        Header.optional(Header.optional(UNIT)),
        Header.map(Header.tuple(STRING, INT32), Header.array(DATE_TIME)),
        Header.enum(UNIT, Header.tuple(FLOAT64, FLOAT64), STRING),
        Header.tuple(*([BOOLEAN] * 300)),
    ])
    def test_roundtrip(self, header):
        """Encode then decode returns an equal tree."""
        assert decode_header(encode_header(header)) == header
