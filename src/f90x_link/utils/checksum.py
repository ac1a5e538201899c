"""Checksum used by the camera's framed data packets."""

from __future__ import annotations

CHECKSUM_MODULUS = 0xFF


def checksum(data: bytes) -> int:
    """Sum the bytes of *data*, reducing modulo 255 after every addition.

    The result is always in 0..254; 0xFF never appears as a checksum.

    >>> checksum(bytes([0xFA, 0x0A, 0x04]))
    9
    """
    total = 0
    for byte in data:
        total = (total + byte) % CHECKSUM_MODULUS
    return total
