"""Camera commands and their wire encoding.

Apart from the wakeup byte and the unit inquiry, every command is a 9 byte
block::

    01 20 <opcode> <p1> <p2> <p3> 00 <length> 03

For memory access ``p1`` is the memory space and ``p2 p3`` the big-endian
address. A memory write is followed directly by a framed data packet
holding the bytes to write.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union

from ..errors import EncodingError
from .framing import MAX_PAYLOAD_SIZE, DataPacket

COMMAND_START = 0x01
COMMAND_DEVICE = 0x20
COMMAND_END = 0x03

WAKEUP = b"\x00"
UNIT_INQUIRY = b"S1000\x05"
END_OF_TRANSMISSION = b"\x04\x04"

# Rate code sent with CHANGE_BAUD_RATE to switch to 9600 baud
BAUD_RATE_9600 = 0x05


class Opcode(IntEnum):
    """Operation codes of the 9 byte command block."""

    READ_MEMORY = 0x80
    WRITE_MEMORY = 0x81
    SHOOT = 0x85
    FOCUS = 0x86
    CHANGE_BAUD_RATE = 0x87
    READ_MEMO_HOLDER_INFO = 0x8A


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise EncodingError(f"{name} must be 0-255, got {value}")


def _check_address(address: int) -> None:
    if not 0 <= address <= 0xFFFF:
        raise EncodingError(f"Address must be 0x0000-0xFFFF, got {address:#x}")


def _block(
    opcode: Opcode,
    memory_space: int = 0,
    address: int = 0,
    length: int = 0,
) -> bytes:
    return bytes(
        [
            COMMAND_START,
            COMMAND_DEVICE,
            opcode,
            memory_space,
            (address >> 8) & 0xFF,
            address & 0xFF,
            0x00,
            length,
            COMMAND_END,
        ]
    )


@dataclass(frozen=True)
class Wakeup:
    """Single zero byte that wakes the camera's serial interface."""

    def to_bytes(self) -> bytes:
        return WAKEUP


@dataclass(frozen=True)
class UnitInquiry:
    """Ask the camera to identify itself."""

    def to_bytes(self) -> bytes:
        return UNIT_INQUIRY


@dataclass(frozen=True)
class Focus:
    """Trigger autofocus."""

    def to_bytes(self) -> bytes:
        return _block(Opcode.FOCUS)


@dataclass(frozen=True)
class Shoot:
    """Release the shutter."""

    def to_bytes(self) -> bytes:
        return _block(Opcode.SHOOT)


@dataclass(frozen=True)
class IncreaseBaudRate:
    """Ask the camera to continue the session at 9600 baud."""

    def to_bytes(self) -> bytes:
        return _block(Opcode.CHANGE_BAUD_RATE, memory_space=BAUD_RATE_9600)


@dataclass(frozen=True)
class EndOfTransmission:
    """End a fast session. The camera echoes these bytes back."""

    def to_bytes(self) -> bytes:
        return END_OF_TRANSMISSION


@dataclass(frozen=True)
class ReadMemory:
    """Read *length* bytes from *address* in *memory_space*.

    The camera answers with a data packet holding *length* payload bytes.
    """

    memory_space: int
    address: int
    length: int

    def __post_init__(self) -> None:
        _check_byte("Memory space", self.memory_space)
        _check_address(self.address)
        _check_byte("Length", self.length)
        if self.length == 0:
            raise EncodingError("Length must be at least 1")

    def to_bytes(self) -> bytes:
        return _block(
            Opcode.READ_MEMORY,
            memory_space=self.memory_space,
            address=self.address,
            length=self.length,
        )


@dataclass(frozen=True)
class WriteToMemory:
    """Write *values* to *address*, always in memory space 0."""

    address: int
    values: bytes = field(default=b"")

    def __post_init__(self) -> None:
        _check_address(self.address)
        try:
            values = bytes(self.values)
        except ValueError as e:
            raise EncodingError(f"Values must be bytes 0-255: {e}") from e
        object.__setattr__(self, "values", values)

    def to_bytes(self) -> bytes:
        """Encode the command header followed by the framed values.

        Raises:
            EncodingError: If more than 255 values are given.
        """
        if len(self.values) > MAX_PAYLOAD_SIZE:
            raise EncodingError(
                f"Cannot write more than {MAX_PAYLOAD_SIZE} bytes at once, "
                f"got {len(self.values)}"
            )
        header = _block(
            Opcode.WRITE_MEMORY, address=self.address, length=len(self.values)
        )
        # the write header carries no end byte; the data packet supplies it
        return header[:-1] + DataPacket(self.values).serialize()


@dataclass(frozen=True)
class ReadMemoHolderInfo:
    """Ask for the roll number and size of the stored shooting data.

    The camera answers with a 4 byte data packet.
    """

    def to_bytes(self) -> bytes:
        return _block(Opcode.READ_MEMO_HOLDER_INFO)


CameraCommand = Union[
    Wakeup,
    UnitInquiry,
    Focus,
    Shoot,
    IncreaseBaudRate,
    EndOfTransmission,
    ReadMemory,
    WriteToMemory,
    ReadMemoHolderInfo,
]


def encode(command: CameraCommand) -> bytes:
    """Return the bytes to send for *command*."""
    return command.to_bytes()
