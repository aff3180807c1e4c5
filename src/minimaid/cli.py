#!/usr/bin/env python3
"""
Minimaid - Command Line Interface

Demo tools that drive the board through the public session API, plus
device detection and udev setup.
"""

import argparse
import logging
import os
import random
import signal
import subprocess
import sys
import threading

from minimaid.__version__ import __version__
from minimaid.constants import MM_PRODUCT_ID, MM_VENDOR_ID
from minimaid.mappings import INPUT_TO_PAD_LIGHT, CabinetLight, PadLight

log = logging.getLogger(__name__)

TOOLS = ('cycle', 'random', 'input')

UDEV_RULES_PATH = "/etc/udev/rules.d/99-minimaid.rules"

# Marquee lights in the order the cycle tool walks them
MARQUEE_CYCLE = (
    CabinetLight.MARQUEE_BR,
    CabinetLight.MARQUEE_TR,
    CabinetLight.MARQUEE_BL,
    CabinetLight.MARQUEE_TL,
)

P1_PAD_LIGHTS = (
    PadLight.P1_UP,
    PadLight.P1_DOWN,
    PadLight.P1_LEFT,
    PadLight.P1_RIGHT,
)


def _setup_logging(verbose=0):
    if verbose >= 2:
        logging.basicConfig(level=logging.DEBUG, format='[%(levelname)s] %(name)s: %(message)s')
        logging.getLogger('usb').setLevel(logging.WARNING)
    elif verbose == 1:
        logging.basicConfig(level=logging.INFO, format='[%(levelname)s] %(message)s')
    else:
        logging.basicConfig(level=logging.WARNING, format='[%(levelname)s] %(message)s')


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="minimaid",
        description="Minimaid arcade I/O board tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Tools:
    cycle    - cycles through all cabinet marquee lights
    random   - randomizes lights on 1P side
    input    - turns on lights for panels that are stepped on

Other commands:
    detect       Check whether the board is plugged in
    setup-udev   Install udev rules for non-root access
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v, -vv)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    cycle_parser = subparsers.add_parser("cycle", help="Cycle the marquee lights")
    random_parser = subparsers.add_parser("random", help="Randomize 1P pad lights")
    input_parser = subparsers.add_parser("input", help="Mirror pad input to pad lights")
    for tool_parser in (cycle_parser, random_parser, input_parser):
        tool_parser.add_argument(
            "--interval", "-i", type=float,
            help="Seconds between updates (default: from config)"
        )

    subparsers.add_parser("detect", help="Check whether the board is plugged in")

    udev_parser = subparsers.add_parser("setup-udev", help="Install udev rules for board access")
    udev_parser.add_argument("--dry-run", action="store_true", help="Print rules without installing")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_usage()
        return 1

    _setup_logging(args.verbose)

    if args.command in TOOLS:
        return run_tool(args.command, interval=args.interval)
    elif args.command == "detect":
        return detect()
    elif args.command == "setup-udev":
        return setup_udev(dry_run=args.dry_run)

    return 0


# =========================================================================
# Demo tools
# =========================================================================

def cycle_cabinet_lights(mm, stop, interval):
    """Light one marquee lamp at a time, walking BR → TR → BL → TL."""
    lights = mm.get_lights_state()

    i = 0
    current = MARQUEE_CYCLE[0]
    while not stop.is_set():
        lights.set_cabinet_light_enabled(current, False)
        current = MARQUEE_CYCLE[i]
        lights.set_cabinet_light_enabled(current, True)
        mm.set_lights_state(lights)

        i = (i + 1) % len(MARQUEE_CYCLE)
        stop.wait(interval)


def random_pad_lights(mm, stop, interval, rng=random):
    """Light one random 1P pad lamp at a time."""
    lights = mm.get_lights_state()

    current = PadLight.P1_UP
    while not stop.is_set():
        lights.set_pad_light_enabled(current, False)
        current = rng.choice(P1_PAD_LIGHTS)
        lights.set_pad_light_enabled(current, True)
        mm.set_lights_state(lights)

        stop.wait(interval)


def input_to_lights(mm, stop, interval):
    """Turn on the pad lamp under every panel that is stepped on."""
    lights = mm.get_lights_state()
    lights.set_all_lights_enabled(False)

    while not stop.is_set():
        state = mm.get_input_state()
        for inp, pad_light in INPUT_TO_PAD_LIGHT.items():
            lights.set_pad_light_enabled(pad_light, state.input_enabled(inp))
        mm.set_lights_state(lights)

        stop.wait(interval)


_TOOL_FUNCS = {
    'cycle': cycle_cabinet_lights,
    'random': random_pad_lights,
    'input': input_to_lights,
}


def _install_stop_handlers(stop):
    """Route SIGINT/SIGTERM to *stop* so the tool loop exits cleanly.

    Returns the previous handlers, keyed by signal number.
    """
    def _handler(signum, frame):
        log.info("Signal %d received, stopping", signum)
        stop.set()

    return {
        signum: signal.signal(signum, _handler)
        for signum in (signal.SIGINT, signal.SIGTERM)
    }


def _restore_stop_handlers(previous):
    for signum, handler in previous.items():
        # None means the old handler was not installed from Python
        if handler is not None:
            signal.signal(signum, handler)


def run_tool(tool, interval=None, stop=None):
    """Open the board, run *tool* until stopped, then close the session."""
    from minimaid.conf import get_tool_interval
    from minimaid.device import open_connection

    if interval is None:
        interval = get_tool_interval(tool)
    elif interval <= 0:
        print(f"Error: interval must be positive, got {interval}", file=sys.stderr)
        return 1

    # Handlers go in before the board is opened so Ctrl+C during open only sets *stop*
    previous = {}
    if stop is None:
        stop = threading.Event()
        previous = _install_stop_handlers(stop)

    try:
        mm = open_connection()
        if mm is None:
            print("Couldn't get device", file=sys.stderr)
            return 1

        log.info("Running %s every %gs, press Ctrl+C to stop", tool, interval)
        try:
            _TOOL_FUNCS[tool](mm, stop, interval)
        finally:
            mm.close()
    finally:
        _restore_stop_handlers(previous)
    return 0


# =========================================================================
# Device commands
# =========================================================================

def detect():
    """Report whether the board is plugged in (does not claim it)."""
    from minimaid.device import find_device

    dev = find_device()
    if dev is None:
        print(f"No Minimaid board detected [{MM_VENDOR_ID:04x}:{MM_PRODUCT_ID:04x}].")
        return 1

    bus = getattr(dev, 'bus', None)
    address = getattr(dev, 'address', None)
    print(f"Minimaid [{MM_VENDOR_ID:04x}:{MM_PRODUCT_ID:04x}] on bus {bus} address {address}")
    return 0


def setup_udev(dry_run=False):
    """Generate and install a udev rule granting user access to the board."""
    rules_content = (
        "# Minimaid arcade I/O board, auto-generated by minimaid setup-udev\n"
        f'SUBSYSTEM=="usb", '
        f'ATTRS{{idVendor}}=="{MM_VENDOR_ID:04x}", '
        f'ATTRS{{idProduct}}=="{MM_PRODUCT_ID:04x}", '
        f'MODE="0666", TAG+="uaccess"\n'
    )

    if dry_run:
        print(rules_content)
        print(f"# Would write to {UDEV_RULES_PATH}")
        return 0

    if os.geteuid() != 0:
        print("Error: root required. Run with:")
        print("  sudo minimaid setup-udev")
        print("\nOr preview first:")
        print("  minimaid setup-udev --dry-run")
        return 1

    try:
        with open(UDEV_RULES_PATH, "w") as f:
            f.write(rules_content)
    except OSError as e:
        print(f"Error: {e}")
        return 1
    print(f"Wrote {UDEV_RULES_PATH}")

    subprocess.run(["udevadm", "control", "--reload-rules"], check=False)
    subprocess.run(["udevadm", "trigger"], check=False)
    print("\nDone. Replug the board for changes to take effect.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
