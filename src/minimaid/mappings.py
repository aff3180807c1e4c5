"""Logical light / input identifiers and their report locations.

Light report (32 bytes)::

    byte 1  bit 2..7   menu-left, menu-right, marquee BR, TR, BL, TL
    byte 2  bit 0..3   P1 up, down, left, right
    byte 3  bit 0..3   P2 up, down, left, right
    byte 4  bit 0      bass lights

Input report (8 bytes read as one 64-bit keyfield)::

    bit 24/25  P1/P2 menu-select     bit 32/33  P1/P2 right
    bit 26/27  P1/P2 up              bit 36/37  P1/P2 menu-left
    bit 28/29  P1/P2 down            bit 38/39  P1/P2 menu-right
    bit 30/31  P1/P2 left

Even keyfield bits belong to player 1, odd bits to player 2.
"""

from enum import Enum, IntEnum
from typing import Dict, NamedTuple, Type, TypeVar

_E = TypeVar("_E", bound=IntEnum)


class PadLight(IntEnum):
    P1_UP = 0
    P1_DOWN = 1
    P1_LEFT = 2
    P1_RIGHT = 3

    P2_UP = 4
    P2_DOWN = 5
    P2_LEFT = 6
    P2_RIGHT = 7


class CabinetLight(IntEnum):
    MENU_LEFT = 0
    MENU_RIGHT = 1

    MARQUEE_BR = 2  # bottom right
    MARQUEE_TR = 3  # top right
    MARQUEE_BL = 4  # bottom left
    MARQUEE_TL = 5  # top left

    BASS_LIGHTS = 6


class Input(IntEnum):
    P1_UP = 0
    P1_DOWN = 1
    P1_LEFT = 2
    P1_RIGHT = 3

    P1_MENU_LEFT = 4
    P1_MENU_SELECT = 5
    P1_MENU_RIGHT = 6

    P2_UP = 7
    P2_DOWN = 8
    P2_LEFT = 9
    P2_RIGHT = 10

    P2_MENU_LEFT = 11
    P2_MENU_SELECT = 12
    P2_MENU_RIGHT = 13


class LightMapping(NamedTuple):
    """Location of one light bit inside the light report."""
    index: int
    mask: int


PAD_LIGHT_MAPPINGS: Dict[PadLight, LightMapping] = {
    PadLight.P1_UP:    LightMapping(2, 1 << 0),
    PadLight.P1_DOWN:  LightMapping(2, 1 << 1),
    PadLight.P1_LEFT:  LightMapping(2, 1 << 2),
    PadLight.P1_RIGHT: LightMapping(2, 1 << 3),

    PadLight.P2_UP:    LightMapping(3, 1 << 0),
    PadLight.P2_DOWN:  LightMapping(3, 1 << 1),
    PadLight.P2_LEFT:  LightMapping(3, 1 << 2),
    PadLight.P2_RIGHT: LightMapping(3, 1 << 3),
}

CABINET_LIGHT_MAPPINGS: Dict[CabinetLight, LightMapping] = {
    CabinetLight.MENU_LEFT:   LightMapping(1, 1 << 2),
    CabinetLight.MENU_RIGHT:  LightMapping(1, 1 << 3),

    CabinetLight.MARQUEE_BR:  LightMapping(1, 1 << 4),
    CabinetLight.MARQUEE_TR:  LightMapping(1, 1 << 5),
    CabinetLight.MARQUEE_BL:  LightMapping(1, 1 << 6),
    CabinetLight.MARQUEE_TL:  LightMapping(1, 1 << 7),

    CabinetLight.BASS_LIGHTS: LightMapping(4, 1 << 0),
}

# Input → bit offset in the 64-bit keyfield
INPUT_OFFSETS: Dict[Input, int] = {
    Input.P1_UP:          26,
    Input.P1_DOWN:        28,
    Input.P1_LEFT:        30,
    Input.P1_RIGHT:       32,

    Input.P1_MENU_LEFT:   36,
    Input.P1_MENU_SELECT: 24,
    Input.P1_MENU_RIGHT:  38,

    Input.P2_UP:          27,
    Input.P2_DOWN:        29,
    Input.P2_LEFT:        31,
    Input.P2_RIGHT:       33,

    Input.P2_MENU_LEFT:   37,
    Input.P2_MENU_SELECT: 25,
    Input.P2_MENU_RIGHT:  39,
}

# Panel inputs → the pad light under the same panel
INPUT_TO_PAD_LIGHT: Dict[Input, PadLight] = {
    Input.P1_UP:    PadLight.P1_UP,
    Input.P1_DOWN:  PadLight.P1_DOWN,
    Input.P1_LEFT:  PadLight.P1_LEFT,
    Input.P1_RIGHT: PadLight.P1_RIGHT,

    Input.P2_UP:    PadLight.P2_UP,
    Input.P2_DOWN:  PadLight.P2_DOWN,
    Input.P2_LEFT:  PadLight.P2_LEFT,
    Input.P2_RIGHT: PadLight.P2_RIGHT,
}


def as_member(enum_cls: Type[_E], value) -> _E:
    """Convert *value* to a member of *enum_cls*.

    Plain ints are looked up by value.  Members of another enum are rejected
    even when their value is in range.
    """
    if isinstance(value, Enum) and not isinstance(value, enum_cls):
        raise ValueError(f"{value!r} is not a {enum_cls.__name__}")
    return enum_cls(value)


def input_mask(inp: Input) -> int:
    """Keyfield bit mask for *inp*."""
    return 1 << INPUT_OFFSETS[as_member(Input, inp)]
