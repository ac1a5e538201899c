"""Queries that locate the shooting data stored in the camera.

All functions expect a camera whose session has already been started.
"""

from __future__ import annotations

import logging

from .camera import CameraInterface
from .models.shooting_data import (
    MEMO_HOLDER_ADDRESSES,
    MEMO_HOLDER_ADDRESSES_LENGTH,
    MEMO_HOLDER_INFO_LENGTH,
    MEMO_HOLDER_SETTING,
    MEMO_HOLDER_SETTING_LENGTH,
    RING_BUFFER_ADDRESSES,
    RING_BUFFER_ADDRESSES_LENGTH,
    MemoHolderAddresses,
    MemoHolderInfo,
    MemoHolderSetting,
    RingBufferAddresses,
    ShootingDataStatus,
)
from .protocol.commands import ReadMemoHolderInfo

logger = logging.getLogger(__name__)


def get_ring_buffer_addresses(camera: CameraInterface) -> RingBufferAddresses:
    data = camera.read_memory(RING_BUFFER_ADDRESSES, RING_BUFFER_ADDRESSES_LENGTH)
    return RingBufferAddresses.from_bytes(data)


def get_memo_holder_addresses(camera: CameraInterface) -> MemoHolderAddresses:
    data = camera.read_memory(MEMO_HOLDER_ADDRESSES, MEMO_HOLDER_ADDRESSES_LENGTH)
    return MemoHolderAddresses.from_bytes(data)


def get_memo_holder_setting(camera: CameraInterface) -> MemoHolderSetting:
    data = camera.read_memory(MEMO_HOLDER_SETTING, MEMO_HOLDER_SETTING_LENGTH)
    return MemoHolderSetting.from_bytes(data)


def get_memo_holder_info(camera: CameraInterface) -> MemoHolderInfo:
    data = camera.request_data(ReadMemoHolderInfo(), MEMO_HOLDER_INFO_LENGTH)
    return MemoHolderInfo.from_bytes(data)


def get_shooting_data_status(camera: CameraInterface) -> ShootingDataStatus:
    """Read ring buffer bounds, memo holder pointers and the memo setting."""
    status = ShootingDataStatus(
        ring_buffer=get_ring_buffer_addresses(camera),
        memo_holder=get_memo_holder_addresses(camera),
        setting=get_memo_holder_setting(camera),
    )
    logger.debug("Shooting data status: %r", status)
    return status
