"""Command-line interface.

Usage:
    f90x-link read /dev/ttyUSB0 0xFD00 4
    f90x-link write /dev/ttyUSB0 0xFD40 0x45 --fast
    f90x-link shoot /dev/ttyUSB0
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import sessions
from .errors import CameraError
from .utils.conversion import format_bytes, parse_int


def _number(text: str) -> int:
    try:
        return parse_int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}") from None


def _byte(text: str) -> int:
    value = _number(text)
    if not 0 <= value <= 0xFF:
        raise argparse.ArgumentTypeError(f"byte value out of range: {text!r}")
    return value


def _length(text: str) -> int:
    value = _byte(text)
    if value == 0:
        raise argparse.ArgumentTypeError("length must be at least 1")
    return value


def _address(text: str) -> int:
    value = _number(text)
    if not 0 <= value <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"address out of range: {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="f90x-link",
        description="Talk to a Nikon F90x / N90s camera over its serial port.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING). DEBUG shows all bytes on the wire.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    read = subparsers.add_parser("read", help="Read camera memory.")
    read.add_argument("device", help="Serial device to use.")
    read.add_argument("address", type=_address, help="Address to read. Prefix with 0x for hex.")
    read.add_argument("length", type=_length, nargs="?", default=1, help="Number of bytes to read.")
    read.add_argument("memory_space", type=_byte, nargs="?", default=0, help="Memory space to read from.")
    read.add_argument("--fast", action="store_true", help="Transfer at 9600 baud.")

    write = subparsers.add_parser("write", help="Write camera memory.")
    write.add_argument("device", help="Serial device to use.")
    write.add_argument("address", type=_address, help="Address to write. Prefix with 0x for hex.")
    write.add_argument("values", type=_byte, nargs="+", help="Byte values to write.")
    write.add_argument("--fast", action="store_true", help="Transfer at 9600 baud.")

    focus = subparsers.add_parser("focus", help="Trigger autofocus.")
    focus.add_argument("device", help="Serial device to use.")

    shoot = subparsers.add_parser("shoot", help="Release the shutter.")
    shoot.add_argument("device", help="Serial device to use.")

    memo_info = subparsers.add_parser("read-memo-info", help="Show roll number and stored data size.")
    memo_info.add_argument("device", help="Serial device to use.")

    memo_status = subparsers.add_parser(
        "memo-status", help="Show where the shooting data is stored."
    )
    memo_status.add_argument("device", help="Serial device to use.")

    return parser


def run(arguments: argparse.Namespace) -> None:
    """Execute the parsed command and print its result."""
    if arguments.command == "read":
        data = sessions.read_memory_in_new_session(
            arguments.device,
            arguments.address,
            arguments.length,
            arguments.memory_space,
            fast=arguments.fast,
        )
        print(f"Memory value: {format_bytes(data)}")

    elif arguments.command == "write":
        sessions.write_memory_in_new_session(
            arguments.device,
            arguments.address,
            bytes(arguments.values),
            fast=arguments.fast,
        )
        print(f"Wrote {len(arguments.values)} bytes to 0x{arguments.address:04X}")

    elif arguments.command == "focus":
        sessions.autofocus_in_new_session(arguments.device)

    elif arguments.command == "shoot":
        sessions.release_shutter_in_new_session(arguments.device)

    elif arguments.command == "read-memo-info":
        info = sessions.read_memo_holder_info_in_new_session(arguments.device)
        print(f"Roll: {info.roll_id:04d}")
        print(f"Bytes to read: {info.bytes_to_read}")

    elif arguments.command == "memo-status":
        status = sessions.read_shooting_data_status_in_new_session(arguments.device)
        print(f"Ring buffer: 0x{status.ring_buffer.start:04X} - 0x{status.ring_buffer.end:04X}")
        print(f"Memo holder start: 0x{status.memo_holder.start:04X}")
        print(f"Current roll start: 0x{status.memo_holder.current_roll_start:04X}")
        print(f"Memo holder current: 0x{status.memo_holder.current:04X}")
        print(
            f"Setting: {status.setting.name.lower()} "
            f"({status.setting.bytes_per_frame} bytes per frame)"
        )
        print(f"Has data: {'yes' if status.has_data else 'no'}")


def main(argv: list[str] | None = None) -> int:
    arguments = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, arguments.log_level))

    try:
        run(arguments)
    except CameraError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
