"""Serial connection to the camera.

The camera talks 8N1 at 1200 baud after wakeup and can be switched to 9600
baud for the rest of a session. All reads block until the requested number
of bytes arrived or the port timeout elapsed.
"""

from __future__ import annotations

import logging
from typing import Protocol

import serial

from ..errors import TransportError
from ..utils.conversion import format_bytes

logger = logging.getLogger(__name__)

DEFAULT_BAUD_RATE = 1200
FAST_BAUD_RATE = 9600
SUPPORTED_BAUD_RATES = (DEFAULT_BAUD_RATE, FAST_BAUD_RATE)
DEFAULT_TIMEOUT_MS = 2000


class SerialInterface(Protocol):
    """What the protocol engine needs from a byte channel."""

    def read(self, length: int) -> bytes:
        """Read exactly *length* bytes."""

    def write(self, data: bytes) -> None:
        """Write all of *data*."""

    def clear_input(self) -> bytes:
        """Drop buffered input and return the dropped bytes."""

    def set_baud_rate(self, baud_rate: int) -> None:
        """Change the line speed."""


class SerialConnection:
    """A pyserial port speaking to the camera.

    Usage::

        with SerialConnection("/dev/ttyUSB0") as conn:
            conn.write(b"\\x00")
            response = conn.read(2)
    """

    def __init__(
        self,
        device: str,
        baud_rate: int = DEFAULT_BAUD_RATE,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ) -> None:
        self._device = device
        self._baud_rate = baud_rate
        self._timeout_ms = timeout_ms
        self._serial: serial.Serial | None = None

    @property
    def device(self) -> str:
        return self._device

    @property
    def connected(self) -> bool:
        return self._serial is not None and self._serial.is_open

    @property
    def baud_rate(self) -> int:
        return self._baud_rate

    def open(self) -> None:
        """Open the port.

        Raises:
            TransportError: If the device cannot be opened.
        """
        try:
            self._serial = serial.Serial(
                port=self._device,
                baudrate=self._baud_rate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=self._timeout_ms / 1000,
                write_timeout=self._timeout_ms / 1000,
            )
        except (serial.SerialException, ValueError) as e:
            raise TransportError(f"Could not open {self._device}: {e}") from e
        logger.info("Opened %s at %d baud", self._device, self._baud_rate)

    def close(self) -> None:
        """Close the port. Closing an already closed port does nothing."""
        if self._serial is None:
            return

        try:
            self._serial.close()
        except serial.SerialException as e:
            logger.warning("Error closing %s: %s", self._device, e)
        finally:
            self._serial = None
            logger.info("Closed %s", self._device)

    def __enter__(self) -> SerialConnection:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _port(self) -> serial.Serial:
        if self._serial is None:
            raise TransportError(f"{self._device} is not open")
        return self._serial

    def read(self, length: int) -> bytes:
        """Read exactly *length* bytes.

        Raises:
            TransportError: If the read fails or times out early.
        """
        try:
            data = self._port().read(length)
        except serial.SerialException as e:
            raise TransportError(f"Reading from {self._device} failed: {e}") from e

        if len(data) != length:
            raise TransportError(
                f"Timed out reading from {self._device}: expected {length} bytes, "
                f"got {len(data)} ({format_bytes(data) or 'nothing'})"
            )
        logger.debug("Received bytes: %s", format_bytes(data))
        return bytes(data)

    def write(self, data: bytes) -> None:
        logger.debug("Sending bytes: %s", format_bytes(data))
        try:
            self._port().write(data)
            self._port().flush()
        except serial.SerialException as e:
            raise TransportError(f"Writing to {self._device} failed: {e}") from e

    def clear_input(self) -> bytes:
        """Read and drop whatever is waiting in the input buffer.

        Returns:
            The dropped bytes, for diagnostics.
        """
        port = self._port()
        try:
            waiting = port.in_waiting
            dropped = bytes(port.read(waiting)) if waiting else b""
            port.reset_input_buffer()
        except serial.SerialException as e:
            raise TransportError(
                f"Clearing input of {self._device} failed: {e}"
            ) from e

        if dropped:
            logger.debug("Cleared bytes from input buffer: %s", format_bytes(dropped))
        logger.debug("Clearing input buffer")
        return dropped

    def set_baud_rate(self, baud_rate: int) -> None:
        """Switch the line speed.

        Raises:
            TransportError: If the rate is not one the camera supports or the
                port refuses it.
        """
        if baud_rate not in SUPPORTED_BAUD_RATES:
            raise TransportError(
                f"Unsupported baud rate {baud_rate}, expected one of "
                f"{SUPPORTED_BAUD_RATES}"
            )
        try:
            self._port().baudrate = baud_rate
        except (serial.SerialException, ValueError) as e:
            raise TransportError(
                f"Could not set {self._device} to {baud_rate} baud: {e}"
            ) from e
        self._baud_rate = baud_rate
        logger.info("Switched %s to %d baud", self._device, baud_rate)
