"""One-call camera operations.

Each function opens the serial device, runs a complete session and closes
the device again, whether the operation succeeded or not.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from .camera import CameraInterface
from .models.shooting_data import MemoHolderInfo, ShootingDataStatus
from .protocol.commands import ReadMemory, WriteToMemory, encode
from .shooting_data import get_memo_holder_info, get_shooting_data_status
from .transport.serial_connection import SerialConnection

logger = logging.getLogger(__name__)


@contextmanager
def camera_session(device: str, fast: bool = False) -> Iterator[CameraInterface]:
    """Open *device* and yield a camera with a started session.

    With *fast* the session is moved to 9600 baud before the body runs and
    returned to 1200 baud afterwards. The fast session is only ended when
    the body succeeded; after a failure the camera state is unknown anyway.
    """
    with SerialConnection(device) as connection:
        with CameraInterface(connection) as camera:
            camera.start_new_session()
            if fast:
                camera.upgrade_to_fast_session()
            yield camera
            if camera.in_fast_mode:
                camera.end_fast_session()


def read_memory_in_new_session(
    device: str,
    address: int,
    length: int = 1,
    memory_space: int = 0,
    fast: bool = False,
) -> bytes:
    # Built up front so bad arguments fail before the port is touched
    command = ReadMemory(memory_space=memory_space, address=address, length=length)
    with camera_session(device, fast=fast) as camera:
        data = camera.request_data(command, length)
    logger.info("Read %d bytes from 0x%04X", len(data), address)
    return data


def write_memory_in_new_session(
    device: str,
    address: int,
    values: bytes,
    fast: bool = False,
) -> None:
    # Encode first so an oversized write fails before the port is touched
    command = WriteToMemory(address=address, values=values)
    encode(command)
    with camera_session(device, fast=fast) as camera:
        camera.request_ok(command)
    logger.info("Wrote %d bytes to 0x%04X", len(command.values), address)


def autofocus_in_new_session(device: str) -> None:
    with camera_session(device) as camera:
        camera.autofocus()


def release_shutter_in_new_session(device: str) -> None:
    with camera_session(device) as camera:
        camera.release_shutter()


def read_memo_holder_info_in_new_session(device: str) -> MemoHolderInfo:
    with camera_session(device) as camera:
        return get_memo_holder_info(camera)


def read_shooting_data_status_in_new_session(device: str) -> ShootingDataStatus:
    with camera_session(device) as camera:
        return get_shooting_data_status(camera)
