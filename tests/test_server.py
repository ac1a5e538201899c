"""Tests for the MCP tool wrappers."""

from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

from f90x_link.errors import FrameError, FrameErrorKind, TransportError
from f90x_link.models.shooting_data import (
    MemoHolderAddresses,
    MemoHolderInfo,
    MemoHolderSetting,
    RingBufferAddresses,
    ShootingDataStatus,
)


def _get_server_module():
    """Import server module with FastMCP mocked to avoid init issues."""
    mock_fastmcp_cls = MagicMock()
    mock_fastmcp_instance = MagicMock()
    # Make the @mcp.tool() decorator a no-op that returns the function unchanged
    mock_fastmcp_instance.tool.return_value = lambda fn: fn
    mock_fastmcp_cls.return_value = mock_fastmcp_instance

    with patch.dict(sys.modules, {}):
        with patch("mcp.server.fastmcp.FastMCP", mock_fastmcp_cls):
            # Remove cached server module so it re-imports with our mock
            sys.modules.pop("f90x_link.server", None)
            import f90x_link.server as server_mod

    return server_mod


def test_read_memory_tool():
    """Bytes come back as hex text and as a list of ints."""
    server = _get_server_module()
    with patch.object(server, "read_memory_in_new_session", return_value=b"\xab\xcd") as op:
        result = server.read_memory("/dev/ttyUSB0", "0xFD00", length=2)

    op.assert_called_once_with("/dev/ttyUSB0", 0xFD00, 2, 0, fast=False)
    assert result == {
        "address": "0xFD00",
        "length": 2,
        "hex": "AB CD",
        "values": [0xAB, 0xCD],
    }


def test_read_memory_tool_bad_address():
    """An unparsable address is reported without touching the camera."""
    server = _get_server_module()
    with patch.object(server, "read_memory_in_new_session") as op:
        result = server.read_memory("/dev/ttyUSB0", "nowhere")
    assert "error" in result
    op.assert_not_called()


def test_read_memory_tool_reports_frame_error():
    """Frame errors are returned with their type name."""
    server = _get_server_module()
    error = FrameError(FrameErrorKind.BAD_CHECKSUM, b"\x02\x07\x06\x03")
    with patch.object(server, "read_memory_in_new_session", side_effect=error):
        result = server.read_memory("/dev/ttyUSB0", "16")
    assert result["error_type"] == "FrameError"
    assert "checksum" in result["error"]


def test_read_memory_tool_zero_length():
    """A zero byte read is reported as an encoding error."""
    server = _get_server_module()
    result = server.read_memory("/dev/ttyUSB0", "0x10", length=0)
    assert result["error_type"] == "EncodingError"


def test_write_memory_tool():
    """Values are passed on as bytes."""
    server = _get_server_module()
    with patch.object(server, "write_memory_in_new_session") as op:
        result = server.write_memory("/dev/ttyUSB0", "0xAABB", [12, 13, 14], fast=True)
    op.assert_called_once_with("/dev/ttyUSB0", 0xAABB, b"\x0c\x0d\x0e", fast=True)
    assert result == {"address": "0xAABB", "written": 3}


def test_write_memory_tool_rejects_bad_values():
    """Values above 255 never reach the camera."""
    server = _get_server_module()
    with patch.object(server, "write_memory_in_new_session") as op:
        result = server.write_memory("/dev/ttyUSB0", "0", [300])
    assert "error" in result
    op.assert_not_called()


def test_camera_control_tools():
    """Focus reports success, a failed shot reports the error."""
    server = _get_server_module()
    with patch.object(server, "autofocus_in_new_session"):
        assert server.autofocus("/dev/ttyUSB0") == {"focused": True}
    with patch.object(server, "release_shutter_in_new_session", side_effect=TransportError("gone")):
        result = server.release_shutter("/dev/ttyUSB0")
    assert result["error_type"] == "TransportError"


def test_read_memo_holder_info_tool():
    server = _get_server_module()
    info = MemoHolderInfo(roll_id=3162, bytes_to_read=288)
    with patch.object(server, "read_memo_holder_info_in_new_session", return_value=info):
        assert server.read_memo_holder_info("/dev/ttyUSB0") == {
            "roll_id": 3162,
            "bytes_to_read": 288,
        }


def test_get_shooting_data_status_tool():
    """The combined status is returned as a plain dict."""
    server = _get_server_module()
    status = ShootingDataStatus(
        ring_buffer=RingBufferAddresses(start=0x8000, end=0xF000),
        memo_holder=MemoHolderAddresses(start=0x8000, current_roll_start=0x8000, current=0x8000),
        setting=MemoHolderSetting.MINIMUM,
    )
    with patch.object(
        server, "read_shooting_data_status_in_new_session", return_value=status
    ) as op:
        result = server.get_shooting_data_status("/dev/ttyUSB0")

    op.assert_called_once_with("/dev/ttyUSB0")
    assert result == status.to_dict()
    assert result["setting"] == "minimum"
    assert result["has_data"] is False


def test_get_shooting_data_status_tool_reports_error():
    """A failed status query is reported, not raised."""
    server = _get_server_module()
    with patch.object(
        server, "read_shooting_data_status_in_new_session", side_effect=TransportError("timeout")
    ):
        result = server.get_shooting_data_status("/dev/ttyUSB0")
    assert result == {"error": "timeout", "error_type": "TransportError"}
