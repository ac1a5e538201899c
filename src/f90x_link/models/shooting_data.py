"""Shooting data bookkeeping read from camera memory.

The camera keeps per-frame shot records in a ring buffer and indexes them
through the memo holder. These models decode the pointers and settings that
describe where that data lives.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..errors import RangeError, UnknownSettingError
from ..utils.conversion import read_4_digit_bcd, read_u16_le

RING_BUFFER_ADDRESSES = 0xFD00
RING_BUFFER_ADDRESSES_LENGTH = 4
MEMO_HOLDER_SETTING = 0xFD40
MEMO_HOLDER_SETTING_LENGTH = 1
MEMO_HOLDER_ADDRESSES = 0xFD42
MEMO_HOLDER_ADDRESSES_LENGTH = 6
MEMO_HOLDER_INFO_LENGTH = 4

MEMO_HOLDER_ENABLED_FLAG = 0x40


def _check_length(name: str, data: bytes, expected: int) -> None:
    if len(data) != expected:
        raise RangeError(
            f"{name} must be {expected} bytes, got {len(data)}"
        )


@dataclass(frozen=True)
class RingBufferAddresses:
    """Memory bounds of the circular shot data buffer."""

    start: int
    end: int

    def __repr__(self) -> str:
        return f"RingBufferAddresses(start=0x{self.start:04X}, end=0x{self.end:04X})"

    @classmethod
    def from_bytes(cls, data: bytes) -> RingBufferAddresses:
        _check_length("Ring buffer addresses", data, RING_BUFFER_ADDRESSES_LENGTH)
        return cls(start=read_u16_le(data, 0), end=read_u16_le(data, 2))

    def to_dict(self) -> dict:
        return {"start": f"0x{self.start:04X}", "end": f"0x{self.end:04X}"}


@dataclass(frozen=True)
class MemoHolderAddresses:
    """Pointers into the memo holder area.

    The camera stores them in the order current, start, current roll start.
    """

    start: int
    current_roll_start: int
    current: int

    def __repr__(self) -> str:
        return (
            f"MemoHolderAddresses(start=0x{self.start:04X}, "
            f"current_roll_start=0x{self.current_roll_start:04X}, "
            f"current=0x{self.current:04X})"
        )

    @property
    def has_data(self) -> bool:
        return self.current != self.start

    @classmethod
    def from_bytes(cls, data: bytes) -> MemoHolderAddresses:
        _check_length("Memo holder addresses", data, MEMO_HOLDER_ADDRESSES_LENGTH)
        return cls(
            current=read_u16_le(data, 0),
            start=read_u16_le(data, 2),
            current_roll_start=read_u16_le(data, 4),
        )

    def to_dict(self) -> dict:
        return {
            "start": f"0x{self.start:04X}",
            "current_roll_start": f"0x{self.current_roll_start:04X}",
            "current": f"0x{self.current:04X}",
        }


class MemoHolderSetting(Enum):
    """How much data the camera records per frame."""

    DO_NOT_STORE = 0
    MINIMUM = 2
    INTERMEDIATE = 4
    FULL = 6

    @property
    def bytes_per_frame(self) -> int:
        return self.value

    @classmethod
    def from_byte(cls, value: int) -> MemoHolderSetting:
        """Decode the setting byte stored at 0xFD40.

        Without the enabled flag (0x40) nothing is stored, whatever the other
        bits say.

        Raises:
            UnknownSettingError: If the flag is set but the byte is not one of
                the known settings.
        """
        if not value & MEMO_HOLDER_ENABLED_FLAG:
            return cls.DO_NOT_STORE
        try:
            return _SETTING_BYTES[value]
        except KeyError:
            raise UnknownSettingError(
                f"Unknown memo holder setting 0x{value:02X}"
            ) from None

    @classmethod
    def from_bytes(cls, data: bytes) -> MemoHolderSetting:
        _check_length("Memo holder setting", data, MEMO_HOLDER_SETTING_LENGTH)
        return cls.from_byte(data[0])


_SETTING_BYTES = {
    0x45: MemoHolderSetting.MINIMUM,
    0x4E: MemoHolderSetting.INTERMEDIATE,
    0x5F: MemoHolderSetting.FULL,
}


@dataclass(frozen=True)
class MemoHolderInfo:
    """Roll number and amount of shooting data waiting to be read."""

    roll_id: int
    bytes_to_read: int

    @classmethod
    def from_bytes(cls, data: bytes) -> MemoHolderInfo:
        _check_length("Memo holder info", data, MEMO_HOLDER_INFO_LENGTH)
        return cls(
            roll_id=read_4_digit_bcd(read_u16_le(data, 0)),
            bytes_to_read=read_u16_le(data, 2),
        )

    def to_dict(self) -> dict:
        return {"roll_id": self.roll_id, "bytes_to_read": self.bytes_to_read}


@dataclass(frozen=True)
class ShootingDataStatus:
    """Everything needed to locate the stored shooting data."""

    ring_buffer: RingBufferAddresses
    memo_holder: MemoHolderAddresses
    setting: MemoHolderSetting

    @property
    def has_data(self) -> bool:
        return self.memo_holder.has_data

    def to_dict(self) -> dict:
        return {
            "ring_buffer": self.ring_buffer.to_dict(),
            "memo_holder": self.memo_holder.to_dict(),
            "setting": self.setting.name.lower(),
            "bytes_per_frame": self.setting.bytes_per_frame,
            "has_data": self.has_data,
        }
