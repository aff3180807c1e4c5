"""Input report decoding for the Minimaid board.

The 8-byte input report is copied straight into a 64-bit keyfield in host
byte order, the same as a raw memory copy, so bit offsets in
``mappings.INPUT_OFFSETS`` line up with what the board sends.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import List

from .constants import (
    HID_GET_REPORT,
    HID_REPORT_TYPE_INPUT,
    INPUT_INTERFACE,
    INPUT_REPORT_SIZE,
    IO_TIMEOUT_MS,
    report_value,
)
from .device_hid import UsbControlTransport
from .mappings import Input, input_mask

log = logging.getLogger(__name__)

_KEYFIELD = struct.Struct('=Q')


@dataclass(frozen=True)
class InputState:
    """One instantaneous snapshot of the keyfield."""
    keyfield: int = 0

    def input_enabled(self, inp: Input) -> bool:
        return bool(self.keyfield & input_mask(inp))

    def pressed(self) -> List[Input]:
        """All active inputs, in enum order."""
        return [inp for inp in Input if self.input_enabled(inp)]


def keyfield_from_report(data: bytes) -> int:
    """Copy up to 8 report bytes into a 64-bit value (missing bytes are 0)."""
    buf = bytes(data[:INPUT_REPORT_SIZE]).ljust(INPUT_REPORT_SIZE, b'\x00')
    return _KEYFIELD.unpack(buf)[0]


def read_keyfield(transport: UsbControlTransport) -> int:
    """GET_REPORT on the input interface, returned as a 64-bit integer."""
    data = transport.control_in(
        HID_GET_REPORT,
        report_value(HID_REPORT_TYPE_INPUT),
        INPUT_INTERFACE,
        INPUT_REPORT_SIZE,
        IO_TIMEOUT_MS,
    )
    return keyfield_from_report(data)


def get_input_enabled(state: InputState, inp: Input) -> bool:
    return state.input_enabled(inp)
