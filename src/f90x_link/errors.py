"""Exceptions raised by the protocol engine.

Every failure aborts the operation that raised it. Nothing is retried, so a
caller that wants to keep talking to the camera has to start a new session.
"""

from __future__ import annotations

from enum import Enum


class CameraError(Exception):
    """Base class for all errors raised while talking to the camera."""


class TransportError(CameraError):
    """The serial port could not be opened, read, written or reconfigured."""


class FrameErrorKind(Enum):
    TOO_SHORT = "too short"
    BAD_START = "bad start byte"
    BAD_END = "bad end byte"
    BAD_CHECKSUM = "bad checksum"


class FrameError(CameraError):
    """A framed data packet was corrupted or misaligned."""

    def __init__(self, kind: FrameErrorKind, raw: bytes = b"") -> None:
        self.kind = kind
        self.raw = bytes(raw)
        detail = self.raw.hex(" ") if self.raw else "(empty)"
        super().__init__(f"Invalid data packet ({kind.value}): {detail}")


class ValidationError(CameraError):
    """A fixed response did not match what the camera is expected to send."""


class EncodingError(CameraError):
    """A command cannot be encoded. Raised before any I/O happens."""


class RangeError(CameraError):
    """A telemetry field lies outside the bytes that were read."""


class BcdError(CameraError):
    """A binary-coded decimal value contains a nibble above 9."""


class UnknownSettingError(CameraError):
    """The camera reported a memo holder setting we do not know."""


class SessionError(CameraError):
    """A command was issued in a session state that does not allow it."""
