# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Serial port transport for DLHN streams.

SerialTransport is a plain byte sink/source over a pyserial port. It can
be handed to StreamWriter as a sink, or wrapped in a Reader for
StreamReader. A read that times out returns fewer bytes than asked for,
so the Reader raises ReadError and the caller decides whether to wait
for more.
"""

import logging
import time

import serial

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Base exception for transport errors."""
    pass


class SerialTransport:
    """
    Serial port byte transport.

    Can be used as a context manager:
        with SerialTransport("/dev/ttyACM0") as port:
            for value in StreamReader(port):
                print(value)
    """

    def __init__(
        self,
        port: str,
        baudrate: int = 115200,
        timeout: float = 1.0,
    ):
        """
        Open a serial port.

        Args:
            port: Serial port path (e.g., "/dev/ttyACM0")
            baudrate: Baud rate (default 115200)
            timeout: Read timeout in seconds (default 1.0)

        Raises:
            TransportError: If the port cannot be opened
        """
        try:
            self._ser = serial.Serial(port, baudrate, timeout=timeout)
        except serial.SerialException as e:
            raise TransportError(f"Cannot open {port}: {e}") from e
        time.sleep(0.1)  # Let the device settle
        logger.debug("Opened %s at %d baud", port, baudrate)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self):
        """Close the serial connection."""
        if self._ser and self._ser.is_open:
            self._ser.close()
            logger.debug("Closed %s", self._ser.port)

    @property
    def port(self) -> str:
        """Return the serial port name."""
        return self._ser.port

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes; fewer on timeout."""
        try:
            return self._ser.read(size)
        except serial.SerialException as e:
            raise TransportError(f"Read from {self.port} failed: {e}") from e

    def write(self, data: bytes) -> int:
        """Write all of ``data`` and flush."""
        try:
            written = self._ser.write(data)
            self._ser.flush()
        except serial.SerialException as e:
            raise TransportError(f"Write to {self.port} failed: {e}") from e
        return written

    def flush(self) -> None:
        self._ser.flush()
