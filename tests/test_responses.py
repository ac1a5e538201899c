"""Tests for fixed response validation."""

import pytest

from f90x_link.errors import ValidationError
from f90x_link.protocol.responses import (
    OK_RESPONSE,
    UNIT_INQUIRY_RESPONSE,
    validate_end_of_fast_session,
    validate_ok,
    validate_unit_inquiry,
)


def test_ok_response_bytes():
    assert OK_RESPONSE == bytes([0x06, 0x00])
    validate_ok(bytes([0x06, 0x00]))


@pytest.mark.parametrize("response", [b"", b"\x06", b"\x10\x20", b"\x06\x00\x00"])
def test_ok_response_mismatch(response):
    """Anything but the exact two bytes is rejected."""
    with pytest.raises(ValidationError):
        validate_ok(response)


def test_unit_inquiry_response_bytes():
    assert UNIT_INQUIRY_RESPONSE == bytes.fromhex(
        "31 30 32 30 46 39 30 58 2F 4E 39 30 53 00 03 06"
    )
    validate_unit_inquiry(UNIT_INQUIRY_RESPONSE)


def test_unit_inquiry_any_byte_mismatch():
    """There is no partial matching."""
    for index in range(len(UNIT_INQUIRY_RESPONSE)):
        response = bytearray(UNIT_INQUIRY_RESPONSE)
        response[index] ^= 0xFF
        with pytest.raises(ValidationError):
            validate_unit_inquiry(bytes(response))


def test_end_of_fast_session():
    """The camera echoes both EOT bytes."""
    validate_end_of_fast_session(b"\x04\x04")
    with pytest.raises(ValidationError):
        validate_end_of_fast_session(b"\x04\x00")
