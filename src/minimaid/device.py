#!/usr/bin/env python3
"""
Session manager for the Minimaid board.

``open_connection()`` finds the board, detaches any kernel HID driver from
both interfaces, claims them and switches every light off.  The returned
``Minimaid`` session owns the libusb handle until ``close()``, which switches
the lights off again, hands the interfaces back to the kernel and disposes
of the handle.

Usage::

    from minimaid import open_connection, PadLight

    mm = open_connection()
    if mm is not None:
        with mm:
            lights = mm.get_lights_state()
            lights.set_pad_light_enabled(PadLight.P1_UP, True)
            mm.set_lights_state(lights)
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

import usb.core
import usb.util

from .constants import (
    INPUT_INTERFACE,
    LIGHTS_INTERFACE,
    MM_PRODUCT_ID,
    MM_VENDOR_ID,
)
from .device_hid import PyUsbControlTransport, UsbControlTransport
from .inputs import InputState, read_keyfield
from .lights import LightsState, read_lights_state, write_lights_state

log = logging.getLogger(__name__)

_INTERFACES = (INPUT_INTERFACE, LIGHTS_INTERFACE)


# =========================================================================
# Session
# =========================================================================

class Minimaid:
    """One claimed Minimaid board.

    Not thread-safe: the handle and both interface claims are shared,
    unsynchronized resources.
    """

    def __init__(self, device: Any, transport: Optional[UsbControlTransport] = None,
                 detached: Iterable[int] = ()):
        self._device = device
        # Interfaces whose kernel driver we detached and must hand back
        self._detached = tuple(detached)
        self.transport = transport if transport is not None else PyUsbControlTransport(device)
        self.device_ready = True

    # -- Lights -----------------------------------------------------------

    def get_lights_state(self) -> LightsState:
        return read_lights_state(self.transport)

    def set_lights_state(self, state: LightsState) -> bool:
        return write_lights_state(self.transport, state)

    def reset_lights(self) -> bool:
        """Read the light report, clear every light and write it back."""
        lights = self.get_lights_state()
        lights.set_all_lights_enabled(False)
        return self.set_lights_state(lights)

    # -- Input ------------------------------------------------------------

    def get_current_keyfield(self) -> int:
        return read_keyfield(self.transport)

    def get_input_state(self) -> InputState:
        return InputState(self.get_current_keyfield())

    # -- Teardown ---------------------------------------------------------

    def close(self) -> None:
        """Lights off, release interfaces, reattach kernel drivers, dispose."""
        if self._device is None:
            return

        try:
            if not self.reset_lights():
                log.warning("Could not turn lights off before closing")
        except Exception as e:
            log.warning("Could not turn lights off before closing: %s", e)

        _teardown(self._device, self._detached)
        self._device = None
        self.device_ready = False
        log.info("Minimaid connection closed")

    @property
    def device(self) -> Any:
        """Raw pyusb device handle (for diagnostics)."""
        return self._device

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


# =========================================================================
# Best-effort helpers
# =========================================================================

def _detach_kernel_driver(device: Any, interface: int) -> bool:
    """Detach the kernel driver from *interface*.  Returns True if one was detached."""
    try:
        if not device.is_kernel_driver_active(interface):
            return False
        device.detach_kernel_driver(interface)
    except NotImplementedError:
        log.debug("Kernel driver detach not supported on this platform")
        return False
    except usb.core.USBError as e:
        log.warning("detach_kernel_driver(%d) libusb error: %s", interface, e)
        return False
    log.debug("Detached kernel driver from interface %d", interface)
    return True


def _attach_kernel_driver(device: Any, interface: int) -> None:
    try:
        device.attach_kernel_driver(interface)
        log.debug("Reattached kernel driver to interface %d", interface)
    except NotImplementedError:
        log.debug("Kernel driver attach not supported on this platform")
    except usb.core.USBError as e:
        log.warning("attach_kernel_driver(%d) libusb error: %s", interface, e)


def _teardown(device: Any, detached: Iterable[int] = ()) -> None:
    """Release both interfaces, hand *detached* back to the kernel, free the handle.

    Interfaces are released before reattaching: libusb refuses to attach a
    kernel driver to an interface that is still claimed.
    """
    for interface in _INTERFACES:
        try:
            usb.util.release_interface(device, interface)
        except usb.core.USBError as e:
            log.debug("release_interface(%d) libusb error: %s", interface, e)

    for interface in detached:
        _attach_kernel_driver(device, interface)

    try:
        usb.util.dispose_resources(device)
    except usb.core.USBError as e:
        log.debug("dispose_resources libusb error: %s", e)


# =========================================================================
# Public API
# =========================================================================

def find_device() -> Optional[Any]:
    """Locate the board without claiming it.

    Returns the pyusb device, or None if it is absent or libusb is missing.
    """
    try:
        return usb.core.find(idVendor=MM_VENDOR_ID, idProduct=MM_PRODUCT_ID)
    except usb.core.NoBackendError as e:
        log.error("find_device libusb error: %s", e)
        return None


def open_connection() -> Optional[Minimaid]:
    """Open and claim the board, leaving every light off.

    Returns:
        A ready ``Minimaid`` session, or None if libusb is unavailable,
        the board is not plugged in, or an interface cannot be claimed.
    """
    device = find_device()
    if device is None:
        log.error("Couldn't find device %04x:%04x (plugged in?)",
                  MM_VENDOR_ID, MM_PRODUCT_ID)
        return None

    # Some platforms have no kernel HID driver bound; not fatal
    detached = tuple(i for i in _INTERFACES if _detach_kernel_driver(device, i))

    try:
        usb.util.claim_interface(device, LIGHTS_INTERFACE)
        usb.util.claim_interface(device, INPUT_INTERFACE)
    except usb.core.USBError as e:
        log.error("open_connection claim_interface libusb error: %s", e)
        log.error("Could not open device")
        _teardown(device, detached)
        return None

    session = Minimaid(device, detached=detached)
    try:
        session.reset_lights()
    except BaseException:
        # Interrupted or failed mid-transfer: give the board back before propagating
        _teardown(device, detached)
        raise
    log.info("Minimaid connected (%04x:%04x)", MM_VENDOR_ID, MM_PRODUCT_ID)
    return session


def close_connection(session: Minimaid) -> None:
    session.close()


def get_lights_state(session: Minimaid) -> LightsState:
    return session.get_lights_state()


def set_lights_state(session: Minimaid, state: LightsState) -> bool:
    return session.set_lights_state(state)


def get_current_keyfield(session: Minimaid) -> int:
    return session.get_current_keyfield()


def get_input_state(session: Minimaid) -> InputState:
    return session.get_input_state()
