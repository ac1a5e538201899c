"""Data models for values decoded from camera memory."""

from .shooting_data import (
    MemoHolderAddresses,
    MemoHolderInfo,
    MemoHolderSetting,
    RingBufferAddresses,
    ShootingDataStatus,
)
