"""Data packet builder and parser.

Packet layout::

    +-------+------------------+----------+-------+
    | Start |     Payload      | Checksum |  End  |
    | 0x02  |  variable length |  1 byte  | 0x03  |
    +-------+------------------+----------+-------+

- Checksum: sum of the payload bytes modulo 255 (see :func:`checksum`)
- Payload length is not transmitted; the reader already knows it from the
  command that triggered the packet.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import EncodingError, FrameError, FrameErrorKind
from ..utils.checksum import checksum

START_BYTE = 0x02
END_BYTE = 0x03
FRAMING_OVERHEAD = 3  # start + checksum + end
MIN_PACKET_SIZE = FRAMING_OVERHEAD + 1
MAX_PAYLOAD_SIZE = 0xFF  # length is announced in a single byte


@dataclass(frozen=True)
class DataPacket:
    """A framed data packet exchanged with the camera."""

    payload: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload", bytes(self.payload))
        if len(self.payload) > MAX_PAYLOAD_SIZE:
            raise EncodingError(
                f"Data packet payload must be at most {MAX_PAYLOAD_SIZE} bytes, "
                f"got {len(self.payload)}"
            )

    def __repr__(self) -> str:
        return (
            f"DataPacket(payload="
            f"{self.payload.hex(' ') if self.payload else '(empty)'})"
        )

    def __len__(self) -> int:
        return len(self.payload)

    def serialize(self) -> bytes:
        """Return the packet as it travels over the wire."""
        return (
            bytes([START_BYTE])
            + self.payload
            + bytes([checksum(self.payload), END_BYTE])
        )

    @classmethod
    def deserialize(cls, data: bytes) -> DataPacket:
        """Parse a received packet.

        Raises:
            FrameError: If the packet is too short, is not delimited by the
                start and end bytes, or fails its checksum.
        """
        data = bytes(data)
        if len(data) < MIN_PACKET_SIZE:
            raise FrameError(FrameErrorKind.TOO_SHORT, data)
        if data[0] != START_BYTE:
            raise FrameError(FrameErrorKind.BAD_START, data)
        if data[-1] != END_BYTE:
            raise FrameError(FrameErrorKind.BAD_END, data)

        payload = data[1:-2]
        if checksum(payload) != data[-2]:
            raise FrameError(FrameErrorKind.BAD_CHECKSUM, data)

        return cls(payload=payload)


def serialize(payload: bytes) -> bytes:
    """Frame *payload* into a data packet."""
    return DataPacket(payload).serialize()


def deserialize(data: bytes) -> bytes:
    """Validate a framed packet and return its payload."""
    return DataPacket.deserialize(data).payload


def packet_size(payload_length: int) -> int:
    """Number of bytes on the wire for a payload of *payload_length* bytes."""
    return payload_length + FRAMING_OVERHEAD
