#!/usr/bin/env python3
"""
HID control-transfer layer for the Minimaid arcade I/O board.

The board exposes two HID interfaces (0 = input, 1 = lights) and is driven
entirely through class-specific control transfers on endpoint 0:
GET_REPORT to read a report back, SET_REPORT to push one.

The ``UsbControlTransport`` ABC abstracts the raw USB I/O so that:
  • Tests can inject a mock transport (no real hardware needed).
  • ``PyUsbControlTransport`` provides real USB via pyusb (libusb backend).

Transfer failures are not raised.  A failed read returns an empty payload
and a failed write returns 0, matching the board's permissive wire contract:
callers see zeroed reports rather than exceptions.

Linux dependency:
  • pyusb:  ``pip install pyusb``  (needs libusb1: ``apt install libusb-1.0-0``)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import usb.core

from .constants import (
    CONTROL_REQUEST_TYPE_IN,
    CONTROL_REQUEST_TYPE_OUT,
    IO_TIMEOUT_MS,
)

log = logging.getLogger(__name__)


# =========================================================================
# Abstract control transport
# =========================================================================

class UsbControlTransport(ABC):
    """Abstract HID class control transport, mockable for testing."""

    @abstractmethod
    def control_in(self, request: int, value: int, index: int, length: int,
                   timeout: int = IO_TIMEOUT_MS) -> bytes:
        """Device-to-host class request.  Returns the bytes received."""

    @abstractmethod
    def control_out(self, request: int, value: int, index: int, data: bytes,
                    timeout: int = IO_TIMEOUT_MS) -> int:
        """Host-to-device class request.  Returns bytes transferred."""


# =========================================================================
# Real transport: PyUSB  (libusb backend)
# =========================================================================

class PyUsbControlTransport(UsbControlTransport):
    """Control transport over an already-opened pyusb device.

    The device handle is owned by the session; this class never claims,
    releases or disposes of it.

    Requires: ``pip install pyusb`` + ``apt install libusb-1.0-0``
    """

    def __init__(self, device: Any):
        self._device = device

    def control_in(self, request: int, value: int, index: int, length: int,
                   timeout: int = IO_TIMEOUT_MS) -> bytes:
        """GET-style transfer.

        libusb equivalent::

            libusb_control_transfer(handle, 0xA1, request, value, index,
                                    buf, length, timeout);
        """
        try:
            data = self._device.ctrl_transfer(
                CONTROL_REQUEST_TYPE_IN, request, value, index, length, timeout,
            )
        except usb.core.USBError as e:
            log.debug("control_in req=0x%02x wValue=0x%04x wIndex=%d failed: %s",
                      request, value, index, e)
            return b''
        payload = bytes(data)
        if len(payload) < length:
            log.debug("control_in wIndex=%d short read: %d/%d bytes",
                      index, len(payload), length)
        return payload

    def control_out(self, request: int, value: int, index: int, data: bytes,
                    timeout: int = IO_TIMEOUT_MS) -> int:
        """SET-style transfer.

        libusb equivalent::

            libusb_control_transfer(handle, 0x21, request, value, index,
                                    data, len(data), timeout);
        """
        try:
            written = self._device.ctrl_transfer(
                CONTROL_REQUEST_TYPE_OUT, request, value, index, bytes(data), timeout,
            )
        except usb.core.USBError as e:
            log.debug("control_out req=0x%02x wValue=0x%04x wIndex=%d failed: %s",
                      request, value, index, e)
            return 0
        return int(written)

    @property
    def device(self) -> Any:
        """Raw pyusb device handle (for diagnostics)."""
        return self._device
