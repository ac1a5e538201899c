"""Byte-level transports the camera protocol runs over."""

from .serial_connection import SerialConnection, SerialInterface
