"""
Minimaid - userspace driver for the Minimaid arcade I/O board

Talks to the board (VID 0xBEEF, PID 0x5730) over HID class control
transfers through pyusb/libusb, and exposes logical lights and inputs
instead of raw report bytes.

Usage:
    # As a library
    from minimaid import open_connection, PadLight, Input

    mm = open_connection()
    with mm:
        lights = mm.get_lights_state()
        lights.set_pad_light_enabled(PadLight.P1_UP, True)
        mm.set_lights_state(lights)

        if mm.get_input_state().input_enabled(Input.P1_UP):
            ...

    # Command line
    minimaid cycle        # Cycle the marquee lights
    minimaid random       # Randomize 1P pad lights
    minimaid input        # Mirror pad input to pad lights
"""

from minimaid.__version__ import __version__

from minimaid.device import (
    Minimaid,
    close_connection,
    get_current_keyfield,
    get_input_state,
    get_lights_state,
    open_connection,
    set_lights_state,
)
from minimaid.inputs import InputState, get_input_enabled
from minimaid.lights import (
    LightsState,
    get_cabinet_light_enabled,
    get_pad_light_enabled,
    set_all_lights_enabled,
    set_cabinet_light_enabled,
    set_pad_light_enabled,
)
from minimaid.mappings import CabinetLight, Input, PadLight

__all__ = [
    # Version
    "__version__",
    # Session
    "Minimaid",
    "open_connection",
    "close_connection",
    # Lights
    "LightsState",
    "get_lights_state",
    "set_lights_state",
    "set_pad_light_enabled",
    "set_cabinet_light_enabled",
    "set_all_lights_enabled",
    "get_pad_light_enabled",
    "get_cabinet_light_enabled",
    # Input
    "InputState",
    "get_current_keyfield",
    "get_input_state",
    "get_input_enabled",
    # Identifiers
    "PadLight",
    "CabinetLight",
    "Input",
]
