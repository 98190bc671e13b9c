#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Inspection tool for DLHN headers and streams.

Usage:
    python dlhn_dump.py header schema.bin
    python dlhn_dump.py header --hex "15 03 02 03 12"
    python dlhn_dump.py stream --input samples.dlhn
    python dlhn_dump.py stream --port /dev/ttyACM0 --baudrate 115200

Requirements:
    pip install pyserial
"""

import argparse
import sys
from pathlib import Path

from dlhn import DlhnError, ReadError, Reader, StreamReader, read_header
from dlhn.transport import SerialTransport, TransportError


def cmd_header(data: bytes):
    """Print the descriptor of a serialized header."""
    reader = Reader(data)
    header = read_header(reader)
    print(header)
    if not reader.at_end():
        print(f"({len(data) - reader.position} trailing bytes ignored)")


def cmd_stream_file(path: Path, count=None):
    """Print every body of a stream stored in a file."""
    with path.open("rb") as f:
        stream = StreamReader(f)
        print(f"Header: {stream.header}")
        for index, value in enumerate(stream):
            if count is not None and index >= count:
                break
            print(f"[{index}] {value!r}")


def _wait_for_header(reader: Reader) -> StreamReader:
    while True:
        try:
            return StreamReader(reader)
        except ReadError:
            continue


def cmd_stream_port(transport: SerialTransport, count=None):
    """Print bodies arriving on a serial port until interrupted."""
    reader = Reader(transport)
    print(f"Waiting for header on {transport.port}... ", end="", flush=True)
    stream = _wait_for_header(reader)
    print(stream.header)

    index = 0
    while count is None or index < count:
        try:
            value = stream.read()
        except ReadError:
            # Timed out mid-body; the partial bytes are kept for the retry.
            continue
        print(f"[{index}] {value!r}")
        index += 1


def _parse_hex(text: str) -> bytes:
    try:
        return bytes.fromhex(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid hex string: {text!r}") from None


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Inspection tool for DLHN headers and streams"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # header command
    header_parser = subparsers.add_parser("header", help="Decode and print a header")
    header_source = header_parser.add_mutually_exclusive_group(required=True)
    header_source.add_argument("file", nargs="?", type=Path, help="File holding a header")
    header_source.add_argument("--hex", type=_parse_hex, help="Header bytes as hex")

    # stream command
    stream_parser = subparsers.add_parser("stream", help="Print the values of a stream")
    stream_source = stream_parser.add_mutually_exclusive_group(required=True)
    stream_source.add_argument("--input", "-i", type=Path, help="Stream file")
    stream_source.add_argument("--port", "-p", help="Serial port (e.g., /dev/ttyACM0)")
    stream_parser.add_argument("--baudrate", "-b", type=int, default=115200,
                               help="Serial baud rate")
    stream_parser.add_argument("--count", "-n", type=int, default=None,
                               help="Stop after this many values")

    args = parser.parse_args(argv)

    try:
        if args.command == "header":
            if args.file is not None:
                if not args.file.exists():
                    print(f"Error: File not found: {args.file}")
                    sys.exit(1)
                data = args.file.read_bytes()
            else:
                data = args.hex
            cmd_header(data)
        elif args.command == "stream":
            if args.input is not None:
                if not args.input.exists():
                    print(f"Error: File not found: {args.input}")
                    sys.exit(1)
                cmd_stream_file(args.input, args.count)
            else:
                with SerialTransport(args.port, args.baudrate) as transport:
                    cmd_stream_port(transport, args.count)
    except DlhnError as e:
        print(f"Error ({e.kind!s}): {e}")
        sys.exit(2)
    except TransportError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print()


if __name__ == "__main__":
    main()
