"""Shared constants for the Minimaid controller.

USB identifiers, HID class request codes and report geometry.
Request codes and report types come from the USB HID 1.11 class definition.
"""

# USB IDs
MM_VENDOR_ID = 0xBEEF
MM_PRODUCT_ID = 0x5730

# Interface numbers
INPUT_INTERFACE = 0
LIGHTS_INTERFACE = 1

# =========================================================================
# HID class requests (HID 1.11, section 7.2)
# =========================================================================

HID_GET_REPORT = 0x01
HID_SET_REPORT = 0x09

HID_REPORT_TYPE_INPUT = 0x01
HID_REPORT_TYPE_OUTPUT = 0x02

# bmRequestType: direction | type (class) | recipient (interface)
#   IN  = 0x80 | 0x20 | 0x01 = 0xA1
#   OUT = 0x00 | 0x20 | 0x01 = 0x21
CONTROL_REQUEST_TYPE_IN = 0xA1
CONTROL_REQUEST_TYPE_OUT = 0x21

# Both reports use report ID 0
REPORT_ID = 0x00

# Blocking timeout for every control transfer (ms)
IO_TIMEOUT_MS = 5000

# =========================================================================
# Report geometry
# =========================================================================

LIGHTS_REPORT_SIZE = 32
INPUT_REPORT_SIZE = 8

# (byte index, mask) pairs forced on every light write
KEEP_ALIVE_BITS = (
    (2, 0x10),
    (3, 0x10),
    (6, 0x10),
)


def report_value(report_type: int, report_id: int = REPORT_ID) -> int:
    """Build the wValue field for GET_REPORT / SET_REPORT."""
    return (report_type << 8) | report_id
