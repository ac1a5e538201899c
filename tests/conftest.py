"""Shared fixtures: an in-memory stand-in for the serial port."""

from __future__ import annotations

import pytest

from f90x_link.camera import CameraInterface
from f90x_link.protocol.responses import UNIT_INQUIRY_RESPONSE


class FakeSerial:
    """Scripted serial port.

    ``responses`` are handed out one per ``read`` call, in order. A response
    that is an exception instance is raised instead of returned. ``fail``
    maps a method name to an exception raised on its first call. ``pending``
    is what ``clear_input`` drains, as left behind by a camera that was
    already awake. Every call is recorded in ``calls`` together with the
    settle delays.
    """

    def __init__(self, responses=None, fail=None, fail_writes=None, pending=b""):
        self.responses = list(responses or [])
        self.pending = bytes(pending)
        self.fail = dict(fail or {})
        self.fail_writes = dict(fail_writes or {})
        self.calls: list[tuple] = []
        self.baud_rate = 1200
        self.opened = False
        self.closed = False

    def _maybe_fail(self, name):
        if name in self.fail:
            raise self.fail.pop(name)

    def read(self, length):
        self.calls.append(("read", length))
        self._maybe_fail("read")
        if not self.responses:
            raise AssertionError(f"unexpected read of {length} bytes")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return bytes(response)

    def write(self, data):
        self.calls.append(("write", bytes(data)))
        self._maybe_fail("write")
        if bytes(data) in self.fail_writes:
            raise self.fail_writes.pop(bytes(data))

    def clear_input(self):
        self.calls.append(("clear_input",))
        self._maybe_fail("clear_input")
        dropped, self.pending = self.pending, b""
        return dropped

    def set_baud_rate(self, baud_rate):
        self.calls.append(("set_baud_rate", baud_rate))
        self._maybe_fail("set_baud_rate")
        self.baud_rate = baud_rate

    def sleep(self, seconds):
        self.calls.append(("sleep", seconds))

    def __enter__(self):
        self.opened = True
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True

    def written(self) -> list[bytes]:
        return [call[1] for call in self.calls if call[0] == "write"]


@pytest.fixture
def make_camera():
    """Build a camera over a FakeSerial that records settle delays as calls."""

    def _make(responses=None, **kwargs):
        serial = FakeSerial(responses, **kwargs)
        return CameraInterface(serial, sleep=serial.sleep), serial

    return _make


@pytest.fixture
def started_camera(make_camera):
    """Camera whose session has been started; later reads come from *responses*."""

    def _make(responses=None, **kwargs):
        camera, serial = make_camera([UNIT_INQUIRY_RESPONSE, *(responses or [])], **kwargs)
        camera.start_new_session()
        serial.calls.clear()
        return camera, serial

    return _make
