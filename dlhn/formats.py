# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Arbitrary-precision numeric and calendar formats.

Layouts:

    BigUInt      varint byte length, big-endian magnitude (zero is length 0)
    BigInt       ZigZag-folded value, written as a BigUInt
    BigDecimal   ZigZag varint scale, BigInt unscaled value
    Date         ZigZag varint days since 1970-01-01
    DateTime     Date of the UTC day, varint nanoseconds into that day
"""

import datetime
import logging
from decimal import Decimal

from .errors import ValueOverflowError
from .reader import Reader
from .varint import (
    encode_varint,
    encode_varuint,
    read_varint,
    read_varuint,
    zigzag_decode,
    zigzag_encode,
)

logger = logging.getLogger(__name__)

EPOCH = datetime.date(1970, 1, 1)
NANOS_PER_DAY = 86_400 * 1_000_000_000

_EPOCH_ORDINAL = EPOCH.toordinal()
_MIN_DAY = datetime.date.min.toordinal() - _EPOCH_ORDINAL
_MAX_DAY = datetime.date.max.toordinal() - _EPOCH_ORDINAL
_SCALE_BITS = 64


def _check_int(value, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} value must be int, got {type(value).__name__}")


def encode_big_uint(value: int) -> bytes:
    """Encode a non-negative integer of any size."""
    _check_int(value, "BigUInt")
    if value < 0:
        raise ValueOverflowError(f"BigUInt cannot hold negative value {value}")
    magnitude = value.to_bytes((value.bit_length() + 7) // 8, "big")
    return encode_varuint(len(magnitude)) + magnitude


def read_big_uint(reader: Reader) -> int:
    """Read a BigUInt."""
    size = read_varuint(reader)
    return int.from_bytes(reader.read(size), "big")


def encode_big_int(value: int) -> bytes:
    """Encode a signed integer of any size."""
    _check_int(value, "BigInt")
    return encode_big_uint(zigzag_encode(value))


def read_big_int(reader: Reader) -> int:
    """Read a BigInt."""
    return zigzag_decode(read_big_uint(reader))


def encode_big_decimal(value) -> bytes:
    """
    Encode a Decimal (or int) as scale + unscaled integer.

    The exponent is kept as-is, so Decimal("1.50") decodes as
    Decimal("1.50"), not Decimal("1.5"). The unscaled integer has no
    negative zero, so Decimal("-0.00") decodes as Decimal("0.00").

    Raises:
        ValueOverflowError: For NaN/Infinity or a scale beyond 64 bits
    """
    if isinstance(value, int) and not isinstance(value, bool):
        value = Decimal(value)
    if not isinstance(value, Decimal):
        raise TypeError(f"BigDecimal value must be Decimal or int, got {type(value).__name__}")
    if not value.is_finite():
        raise ValueOverflowError(f"Cannot encode non-finite decimal {value}")

    sign, digits, exponent = value.as_tuple()
    unscaled = int("".join(map(str, digits)) or "0")
    if sign:
        unscaled = -unscaled
    scale = -exponent
    if not -(1 << (_SCALE_BITS - 1)) <= scale < (1 << (_SCALE_BITS - 1)):
        raise ValueOverflowError(f"Decimal scale {scale} exceeds {_SCALE_BITS} bits")
    return encode_varint(scale) + encode_big_int(unscaled)


def read_big_decimal(reader: Reader) -> Decimal:
    """Read a BigDecimal."""
    scale = read_varint(reader, _SCALE_BITS)
    unscaled = read_big_int(reader)
    digits = tuple(int(d) for d in str(abs(unscaled)))
    return Decimal((1 if unscaled < 0 else 0, digits, -scale))


def encode_date(value: datetime.date) -> bytes:
    """Encode a calendar date as a day offset from EPOCH."""
    if isinstance(value, datetime.datetime) or not isinstance(value, datetime.date):
        raise TypeError(f"Date value must be datetime.date, got {type(value).__name__}")
    return encode_varint(value.toordinal() - _EPOCH_ORDINAL)


def read_date(reader: Reader) -> datetime.date:
    """Read a Date."""
    days = read_varint(reader)
    if not _MIN_DAY <= days <= _MAX_DAY:
        raise ValueOverflowError(f"Day offset {days} is outside the supported date range")
    return datetime.date.fromordinal(days + _EPOCH_ORDINAL)


def encode_date_time(value: datetime.datetime) -> bytes:
    """
    Encode a timestamp as its UTC date plus nanoseconds into that day.

    Naive datetimes are taken to be UTC already.
    """
    if not isinstance(value, datetime.datetime):
        raise TypeError(f"DateTime value must be datetime.datetime, got {type(value).__name__}")
    if value.tzinfo is not None:
        value = value.astimezone(datetime.timezone.utc)
    micros = (
        (value.hour * 3600 + value.minute * 60 + value.second) * 1_000_000
        + value.microsecond
    )
    return encode_date(value.date()) + encode_varuint(micros * 1000)


def read_date_time(reader: Reader) -> datetime.datetime:
    """
    Read a DateTime as a UTC-aware datetime.

    datetime has microsecond resolution; any remaining nanoseconds are
    dropped with a warning.
    """
    date = read_date(reader)
    nanos = read_varuint(reader)
    if nanos >= NANOS_PER_DAY:
        raise ValueOverflowError(f"Nanosecond of day {nanos} exceeds one day")
    micros, rest = divmod(nanos, 1000)
    if rest:
        logger.warning("Dropping %d ns below microsecond precision on %s", rest, date)
    start = datetime.datetime.combine(date, datetime.time.min, tzinfo=datetime.timezone.utc)
    return start + datetime.timedelta(microseconds=micros)
