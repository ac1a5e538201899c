"""Session handling for the camera's serial protocol.

A session starts with a wakeup byte followed by a unit inquiry at 1200 baud.
It can then optionally be moved to 9600 baud and back::

    IDLE -> AWAKE -> IDENTIFIED -> FAST_MODE -> IDENTIFIED -> CLOSED

Every step either completes or raises; nothing is retried.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable

from .errors import SessionError, ValidationError
from .protocol.commands import (
    CameraCommand,
    EndOfTransmission,
    Focus,
    IncreaseBaudRate,
    ReadMemory,
    Shoot,
    UnitInquiry,
    Wakeup,
    WriteToMemory,
    encode,
)
from .protocol.framing import DataPacket, packet_size
from .protocol.responses import (
    END_OF_FAST_SESSION_RESPONSE,
    OK_RESPONSE,
    UNIT_INQUIRY_RESPONSE,
    validate_end_of_fast_session,
    validate_ok,
    validate_unit_inquiry,
)
from .transport.serial_connection import (
    DEFAULT_BAUD_RATE,
    FAST_BAUD_RATE,
    SerialInterface,
)
from .utils.conversion import format_bytes

logger = logging.getLogger(__name__)

# Time the camera needs after wakeup and after a speed change
SETTLE_DELAY_S = 0.2


class SessionState(Enum):
    IDLE = "idle"
    AWAKE = "awake"
    IDENTIFIED = "identified"
    FAST_MODE = "fast mode"
    CLOSED = "closed"


_READY_STATES = (SessionState.IDENTIFIED, SessionState.FAST_MODE)


class CameraInterface:
    """Drives one camera session over a :class:`SerialInterface`.

    Usage::

        camera = CameraInterface(connection)
        camera.start_new_session()
        camera.send_command(Focus())
        camera.expect_ok_response()
    """

    def __init__(
        self,
        serial: SerialInterface,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self._serial = serial
        self._sleep = sleep or time.sleep
        self._state = SessionState.IDLE

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def in_fast_mode(self) -> bool:
        return self._state is SessionState.FAST_MODE

    def _set_state(self, state: SessionState) -> None:
        logger.debug("Session state %s -> %s", self._state.value, state.value)
        self._state = state

    def _require(self, *states: SessionState) -> None:
        if self._state not in states:
            expected = ", ".join(s.value for s in states)
            raise SessionError(
                f"Camera session is {self._state.value}, expected {expected}"
            )

    def send_command(self, command: CameraCommand) -> None:
        """Encode *command* and write it to the camera."""
        logger.debug("Will send camera command: %r", command)
        self._serial.write(encode(command))

    def expect_ok_response(self) -> None:
        """Read the 2 byte acknowledgement.

        Raises:
            ValidationError: If the camera answered anything else.
        """
        validate_ok(self._serial.read(len(OK_RESPONSE)))

    def expect_data_packet(self, payload_length: int) -> DataPacket:
        """Read a data packet carrying *payload_length* bytes.

        Raises:
            FrameError: If the packet is malformed.
            ValidationError: If the payload has the wrong length.
        """
        response = self._serial.read(packet_size(payload_length))
        packet = DataPacket.deserialize(response)
        if len(packet) != payload_length:
            raise ValidationError(
                f"Expected {payload_length} payload bytes, got {len(packet)}"
            )
        return packet

    def start_new_session(self) -> None:
        """Wake the camera and check that it is a F90X/N90S.

        If the camera was already awake it may answer the wakeup byte. Those
        bytes are dropped unread before the unit inquiry goes out.
        """
        self._require(SessionState.IDLE)
        self.send_command(Wakeup())
        self._set_state(SessionState.AWAKE)
        self._sleep(SETTLE_DELAY_S)

        dropped = self._serial.clear_input()
        if dropped:
            logger.debug(
                "Dropped %d bytes after wakeup: %s", len(dropped), format_bytes(dropped)
            )

        self.send_command(UnitInquiry())
        validate_unit_inquiry(self._serial.read(len(UNIT_INQUIRY_RESPONSE)))
        self._set_state(SessionState.IDENTIFIED)
        logger.info("Camera session started")

    def upgrade_to_fast_session(self) -> None:
        """Move the running session to 9600 baud."""
        self._require(SessionState.IDENTIFIED)
        self.send_command(IncreaseBaudRate())
        self.expect_ok_response()
        self._sleep(SETTLE_DELAY_S)
        self._serial.set_baud_rate(FAST_BAUD_RATE)
        self._set_state(SessionState.FAST_MODE)
        logger.info("Camera session upgraded to %d baud", FAST_BAUD_RATE)

    def end_fast_session(self) -> None:
        """Return from 9600 baud to the default speed.

        If the camera does not echo the end-of-transmission marker the line
        speed is left untouched and the session must be considered lost.
        """
        self._require(SessionState.FAST_MODE)
        self.send_command(EndOfTransmission())
        validate_end_of_fast_session(
            self._serial.read(len(END_OF_FAST_SESSION_RESPONSE))
        )
        self._sleep(SETTLE_DELAY_S)
        self._serial.set_baud_rate(DEFAULT_BAUD_RATE)
        self._set_state(SessionState.IDENTIFIED)
        logger.info("Camera session back at %d baud", DEFAULT_BAUD_RATE)

    def request_ok(self, command: CameraCommand) -> None:
        """Send *command* and wait for the acknowledgement."""
        self._require(*_READY_STATES)
        self.send_command(command)
        self.expect_ok_response()

    def request_data(self, command: CameraCommand, payload_length: int) -> bytes:
        """Send *command* and return the payload of the packet it triggers."""
        self._require(*_READY_STATES)
        self.send_command(command)
        return self.expect_data_packet(payload_length).payload

    def autofocus(self) -> None:
        self.request_ok(Focus())

    def release_shutter(self) -> None:
        self.request_ok(Shoot())

    def read_memory(self, address: int, length: int, memory_space: int = 0) -> bytes:
        command = ReadMemory(memory_space=memory_space, address=address, length=length)
        return self.request_data(command, length)

    def write_memory(self, address: int, values: bytes) -> None:
        self.request_ok(WriteToMemory(address=address, values=values))

    def close(self) -> None:
        self._set_state(SessionState.CLOSED)

    def __enter__(self) -> CameraInterface:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
