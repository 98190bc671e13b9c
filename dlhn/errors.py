# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Error types raised by the header and body codecs.

The set of kinds is closed: every decode failure maps onto exactly one
ErrorKind, so callers can decide between "wait for more bytes" (READ on a
live stream) and "drop the buffer" without parsing messages.
"""

from enum import Enum


class ErrorKind(Enum):
    """Closed set of codec failure kinds."""
    READ = "read"
    UNKNOWN_CODE = "unknown_code"
    INVALID_UTF8 = "invalid_utf8"
    OVERFLOW = "overflow"
    CUSTOM = "custom"

    def __str__(self) -> str:
        return self.name


class DlhnError(Exception):
    """Base exception for codec errors."""
    kind: ErrorKind = ErrorKind.CUSTOM


class ReadError(DlhnError):
    """Source exhausted before a value was fully read."""
    kind = ErrorKind.READ


class UnknownCodeError(DlhnError):
    """A kind code or enum variant index outside the known table."""
    kind = ErrorKind.UNKNOWN_CODE

    def __init__(self, code: int, message: str = ""):
        super().__init__(message or f"Unknown code: {code}")
        self.code = code


class InvalidUtf8Error(DlhnError):
    """String bytes are not valid UTF-8."""
    kind = ErrorKind.INVALID_UTF8


class ValueOverflowError(DlhnError):
    """Value does not fit the bit width or range of its target."""
    kind = ErrorKind.OVERFLOW


class CustomError(DlhnError):
    """Failure reported by a value-mapping layer built on top of the codecs."""
    kind = ErrorKind.CUSTOM

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
