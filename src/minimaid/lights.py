#!/usr/bin/env python3
"""
Light report codec for the Minimaid board.

A ``LightsState`` is a detached 32-byte snapshot of the light report.  It is
never synchronized with the device on its own: read one with
``read_lights_state()``, flip lights through the logical setters, then push
it back with ``write_lights_state()``.

Wire quirks kept as-is:
  • The report is read back with report type *Input* (0x01) even though it is
    written with report type *Output* (0x02).
  • Reads never check the transfer length; untransferred bytes stay zero.
  • A write only reports failure when zero bytes were accepted.
"""

from __future__ import annotations

import logging
from typing import Optional

from .constants import (
    HID_GET_REPORT,
    HID_REPORT_TYPE_INPUT,
    HID_REPORT_TYPE_OUTPUT,
    HID_SET_REPORT,
    IO_TIMEOUT_MS,
    KEEP_ALIVE_BITS,
    LIGHTS_INTERFACE,
    LIGHTS_REPORT_SIZE,
    report_value,
)
from .device_hid import UsbControlTransport
from .mappings import (
    CABINET_LIGHT_MAPPINGS,
    PAD_LIGHT_MAPPINGS,
    CabinetLight,
    LightMapping,
    PadLight,
    as_member,
)

log = logging.getLogger(__name__)


class LightsState:
    """Owned copy of the 32-byte light report."""

    def __init__(self, raw: Optional[bytes] = None):
        buf = bytearray(LIGHTS_REPORT_SIZE)
        if raw is not None:
            if len(raw) > LIGHTS_REPORT_SIZE:
                raise ValueError(
                    f"Light report is {LIGHTS_REPORT_SIZE} bytes, got {len(raw)}"
                )
            buf[:len(raw)] = raw
        self.raw = buf

    def __repr__(self) -> str:
        return f"LightsState({self.raw.hex()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LightsState):
            return NotImplemented
        return self.raw == other.raw

    def copy(self) -> LightsState:
        return LightsState(bytes(self.raw))

    # -- Bit access -------------------------------------------------------

    def _set_bit(self, mapping: LightMapping, enabled: bool) -> None:
        if enabled:
            self.raw[mapping.index] |= mapping.mask
        else:
            self.raw[mapping.index] &= ~mapping.mask & 0xFF

    def _get_bit(self, mapping: LightMapping) -> bool:
        return bool(self.raw[mapping.index] & mapping.mask)

    # -- Logical lights ---------------------------------------------------

    def set_pad_light_enabled(self, light: PadLight, enabled: bool) -> None:
        self._set_bit(PAD_LIGHT_MAPPINGS[as_member(PadLight, light)], enabled)

    def set_cabinet_light_enabled(self, light: CabinetLight, enabled: bool) -> None:
        self._set_bit(CABINET_LIGHT_MAPPINGS[as_member(CabinetLight, light)], enabled)

    def get_pad_light_enabled(self, light: PadLight) -> bool:
        return self._get_bit(PAD_LIGHT_MAPPINGS[as_member(PadLight, light)])

    def get_cabinet_light_enabled(self, light: CabinetLight) -> bool:
        return self._get_bit(CABINET_LIGHT_MAPPINGS[as_member(CabinetLight, light)])

    def set_all_lights_enabled(self, enabled: bool) -> None:
        """Switch every cabinet light, then every pad light.

        Keep-alive bits are not light mappings and stay as they are.
        """
        for cabinet_light in CabinetLight:
            self.set_cabinet_light_enabled(cabinet_light, enabled)
        for pad_light in PadLight:
            self.set_pad_light_enabled(pad_light, enabled)

    def apply_keep_alive(self) -> None:
        """Force the bits the board needs to accept a light report."""
        for index, mask in KEEP_ALIVE_BITS:
            self.raw[index] |= mask


# =========================================================================
# Functional API
# =========================================================================

def set_pad_light_enabled(state: LightsState, light: PadLight, enabled: bool) -> None:
    state.set_pad_light_enabled(light, enabled)


def set_cabinet_light_enabled(state: LightsState, light: CabinetLight,
                              enabled: bool) -> None:
    state.set_cabinet_light_enabled(light, enabled)


def get_pad_light_enabled(state: LightsState, light: PadLight) -> bool:
    return state.get_pad_light_enabled(light)


def get_cabinet_light_enabled(state: LightsState, light: CabinetLight) -> bool:
    return state.get_cabinet_light_enabled(light)


def set_all_lights_enabled(state: LightsState, enabled: bool) -> None:
    state.set_all_lights_enabled(enabled)


# =========================================================================
# Transfers
# =========================================================================

def read_lights_state(transport: UsbControlTransport) -> LightsState:
    """GET_REPORT on the lights interface.

    Always returns a 32-byte state; a failed or short transfer leaves the
    missing bytes at zero.
    """
    data = transport.control_in(
        HID_GET_REPORT,
        report_value(HID_REPORT_TYPE_INPUT),
        LIGHTS_INTERFACE,
        LIGHTS_REPORT_SIZE,
        IO_TIMEOUT_MS,
    )
    return LightsState(bytes(data[:LIGHTS_REPORT_SIZE]))


def write_lights_state(transport: UsbControlTransport, state: LightsState) -> bool:
    """Force keep-alive bits into *state*, then SET_REPORT it.

    Returns True if the transport accepted more than zero bytes.
    """
    state.apply_keep_alive()
    transferred = transport.control_out(
        HID_SET_REPORT,
        report_value(HID_REPORT_TYPE_OUTPUT),
        LIGHTS_INTERFACE,
        bytes(state.raw),
        IO_TIMEOUT_MS,
    )
    if transferred <= 0:
        log.debug("Light report write transferred nothing")
    return transferred > 0
