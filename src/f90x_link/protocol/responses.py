"""Fixed responses sent by the camera and their validation."""

from __future__ import annotations

from ..errors import ValidationError
from .commands import END_OF_TRANSMISSION

OK_RESPONSE = b"\x06\x00"

# "1020F90X/N90S", NUL, ETX, ACK
UNIT_INQUIRY_RESPONSE = b"1020F90X/N90S\x00\x03\x06"

END_OF_FAST_SESSION_RESPONSE = END_OF_TRANSMISSION


def _validate(name: str, expected: bytes, response: bytes) -> None:
    if bytes(response) != expected:
        raise ValidationError(
            f"Unexpected {name} response: got {bytes(response).hex(' ') or '(empty)'}, "
            f"expected {expected.hex(' ')}"
        )


def validate_ok(response: bytes) -> None:
    """Raise ValidationError unless *response* is the 2 byte acknowledgement."""
    _validate("OK", OK_RESPONSE, response)


def validate_unit_inquiry(response: bytes) -> None:
    """Raise ValidationError unless the camera identified itself as a F90X/N90S."""
    _validate("unit inquiry", UNIT_INQUIRY_RESPONSE, response)


def validate_end_of_fast_session(response: bytes) -> None:
    _validate("end of transmission", END_OF_FAST_SESSION_RESPONSE, response)
