"""Conversion helpers for raw memory contents and user supplied numbers."""

from __future__ import annotations

from ..errors import BcdError, RangeError


def read_u16_le(data: bytes, offset: int = 0) -> int:
    """Read an unsigned little-endian 16 bit value at *offset*.

    Raises:
        RangeError: If *data* does not hold two bytes starting at *offset*.
    """
    if offset < 0 or offset + 1 >= len(data):
        raise RangeError(
            f"Cannot read 16 bit value at offset {offset} from {len(data)} bytes"
        )
    return data[offset] | (data[offset + 1] << 8)


def read_4_digit_bcd(value: int) -> int:
    """Decode a 16 bit value holding four BCD digits.

    >>> read_4_digit_bcd(0x3162)
    3162

    Raises:
        BcdError: If any nibble is not a decimal digit.
    """
    result = 0
    for position in range(4):
        digit = (value >> (4 * position)) & 0x0F
        if digit > 9:
            raise BcdError(f"0x{value:04X} is not a valid 4 digit BCD value")
        result += digit * 10**position
    return result


def parse_int(text: str) -> int:
    """Parse a decimal number, or a hex number when prefixed with ``0x``."""
    text = text.strip()
    if text.lower().startswith("0x"):
        return int(text[2:], 16)
    return int(text, 10)


def format_bytes(data: bytes) -> str:
    """Format bytes as upper-case spaced hex, e.g. ``0A FF 03``."""
    return " ".join(f"{b:02X}" for b in data)
