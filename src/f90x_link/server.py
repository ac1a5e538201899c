"""MCP server entry point for the F90x serial link.

Exposes the camera operations as tools via the Model Context Protocol using
the official Python MCP SDK with stdio transport. Every tool call runs a
complete session of its own; no connection is kept between calls.
"""

from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .errors import CameraError
from .sessions import (
    autofocus_in_new_session,
    read_memo_holder_info_in_new_session,
    read_memory_in_new_session,
    read_shooting_data_status_in_new_session,
    release_shutter_in_new_session,
    write_memory_in_new_session,
)
from .utils.conversion import format_bytes, parse_int

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "f90x-link",
    instructions="MCP server for Nikon F90x / N90s cameras on a serial port",
)


def _error(e: Exception) -> dict[str, Any]:
    logger.warning("Camera operation failed: %s", e)
    return {"error": str(e), "error_type": type(e).__name__}


# ─── MEMORY TOOLS ────────────────────────────────────────────────────

@mcp.tool()
def read_memory(
    device: str,
    address: str,
    length: int = 1,
    memory_space: int = 0,
    fast: bool = False,
) -> dict[str, Any]:
    """Read bytes from camera memory.

    Args:
        device: Serial device path, e.g. /dev/ttyUSB0.
        address: Start address, decimal or 0x-prefixed hex (0x0000-0xFFFF).
        length: Number of bytes to read (1-255).
        memory_space: Memory space to read from (default 0).
        fast: Transfer at 9600 baud instead of 1200.
    """
    try:
        start = parse_int(address)
    except ValueError:
        return {"error": f"Invalid address {address!r}"}

    try:
        data = read_memory_in_new_session(
            device, start, length, memory_space, fast=fast
        )
    except CameraError as e:
        return _error(e)

    return {
        "address": f"0x{start:04X}",
        "length": len(data),
        "hex": format_bytes(data),
        "values": list(data),
    }


@mcp.tool()
def write_memory(
    device: str,
    address: str,
    values: list[int],
    fast: bool = False,
) -> dict[str, Any]:
    """Write bytes to camera memory.

    Args:
        device: Serial device path.
        address: Start address, decimal or 0x-prefixed hex.
        values: Byte values 0-255, at most 255 of them.
        fast: Transfer at 9600 baud instead of 1200.
    """
    try:
        start = parse_int(address)
    except ValueError:
        return {"error": f"Invalid address {address!r}"}
    if not all(0 <= v <= 0xFF for v in values):
        return {"error": "Values must be 0-255"}

    try:
        write_memory_in_new_session(device, start, bytes(values), fast=fast)
    except CameraError as e:
        return _error(e)

    return {"address": f"0x{start:04X}", "written": len(values)}


# ─── CAMERA CONTROL TOOLS ────────────────────────────────────────────

@mcp.tool()
def autofocus(device: str) -> dict[str, Any]:
    """Trigger the camera's autofocus."""
    try:
        autofocus_in_new_session(device)
    except CameraError as e:
        return _error(e)
    return {"focused": True}


@mcp.tool()
def release_shutter(device: str) -> dict[str, Any]:
    """Release the shutter and take a picture."""
    try:
        release_shutter_in_new_session(device)
    except CameraError as e:
        return _error(e)
    return {"released": True}


# ─── SHOOTING DATA TOOLS ─────────────────────────────────────────────

@mcp.tool()
def read_memo_holder_info(device: str) -> dict[str, Any]:
    """Read the roll number and how many bytes of shooting data are stored."""
    try:
        info = read_memo_holder_info_in_new_session(device)
    except CameraError as e:
        return _error(e)
    return info.to_dict()


@mcp.tool()
def get_shooting_data_status(device: str) -> dict[str, Any]:
    """Report ring buffer bounds, memo holder pointers and the memo setting."""
    try:
        status = read_shooting_data_status_in_new_session(device)
    except CameraError as e:
        return _error(e)
    return status.to_dict()


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
