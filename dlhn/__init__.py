# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
DLHN - compact schema-driven binary serialization.

A value is written as a header (its shape) and a body (its data). The
header can be sent once and followed by many bodies.

Example usage:
    from dlhn import Header, BOOLEAN, UINT8, STRING, encode_header, encode_body

    header = Header.tuple(BOOLEAN, UINT8, STRING)
    encode_header(header)                        # b"\\x15\\x03\\x02\\x03\\x12"
    encode_body(header, (True, 123, "test"))     # b"\\x01\\x7b\\x04test"
"""

from .errors import (
    ErrorKind,
    DlhnError,
    ReadError,
    UnknownCodeError,
    InvalidUtf8Error,
    ValueOverflowError,
    CustomError,
)
from .reader import Reader
from .varint import (
    encode_varuint,
    decode_varuint,
    read_varuint,
    encode_varint,
    decode_varint,
    read_varint,
    zigzag_encode,
    zigzag_decode,
)
from .header import (
    Kind,
    Header,
    MAX_DEPTH,
    MAX_TUPLE_SIZE,
    UNIT,
    BOOLEAN,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    UINT128,
    INT8,
    INT16,
    INT32,
    INT64,
    INT128,
    FLOAT32,
    FLOAT64,
    BIG_UINT,
    BIG_INT,
    BIG_DECIMAL,
    STRING,
    BINARY,
    DATE,
    DATE_TIME,
    resolve_header,
    encode_header,
    write_header,
    decode_header,
    read_header,
)
from .body import Variant, encode_body, write_body, decode_body, read_body
from .stream import HeaderState, StreamWriter, StreamReader

__version__ = "0.1.0"

__all__ = [
    # Errors
    "ErrorKind",
    "DlhnError",
    "ReadError",
    "UnknownCodeError",
    "InvalidUtf8Error",
    "ValueOverflowError",
    "CustomError",
    # Source
    "Reader",
    # Varint
    "encode_varuint",
    "decode_varuint",
    "read_varuint",
    "encode_varint",
    "decode_varint",
    "read_varint",
    "zigzag_encode",
    "zigzag_decode",
    # Headers
    "Kind",
    "Header",
    "MAX_DEPTH",
    "MAX_TUPLE_SIZE",
    "UNIT",
    "BOOLEAN",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "UINT128",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "INT128",
    "FLOAT32",
    "FLOAT64",
    "BIG_UINT",
    "BIG_INT",
    "BIG_DECIMAL",
    "STRING",
    "BINARY",
    "DATE",
    "DATE_TIME",
    "resolve_header",
    "encode_header",
    "write_header",
    "decode_header",
    "read_header",
    # Bodies
    "Variant",
    "encode_body",
    "write_body",
    "decode_body",
    "read_body",
    # Streams
    "HeaderState",
    "StreamWriter",
    "StreamReader",
]
