"""User settings for the minimaid command-line tools.

Config is stored at ~/.config/minimaid/config.json (XDG-compliant).

Usage:
    from minimaid.conf import get_tool_interval, save_tool_interval

    get_tool_interval('cycle')        # 1.0 unless overridden
    save_tool_interval('input', 0.001)

    # Low-level config access
    from minimaid.conf import load_config, save_config
"""
from __future__ import annotations

import json
import logging
import os

log = logging.getLogger(__name__)

# =========================================================================
# Config file location (XDG-compliant)
# =========================================================================

_XDG_CONFIG = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
CONFIG_DIR = os.path.join(_XDG_CONFIG, 'minimaid')
CONFIG_PATH = os.path.join(CONFIG_DIR, 'config.json')

# Poll interval per tool, in seconds
DEFAULT_TOOL_INTERVALS = {
    'cycle': 1.0,
    'random': 0.1,
    'input': 0.0005,
}


# =========================================================================
# Low-level config persistence
# =========================================================================

def load_config() -> dict:
    """Load user config from disk. Returns empty dict on missing/corrupt file."""
    try:
        with open(CONFIG_PATH, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        return {}
    except (json.JSONDecodeError, OSError) as e:
        log.warning("Ignoring unreadable config %s: %s", CONFIG_PATH, e)
        return {}
    return config if isinstance(config, dict) else {}


def save_config(config: dict):
    """Save user config to disk."""
    os.makedirs(CONFIG_DIR, exist_ok=True)
    with open(CONFIG_PATH, 'w') as f:
        json.dump(config, f, indent=2)


# =========================================================================
# Tool intervals
# =========================================================================

def _check_tool(tool: str) -> None:
    if tool not in DEFAULT_TOOL_INTERVALS:
        raise ValueError(
            f"Unknown tool '{tool}' (expected one of {', '.join(DEFAULT_TOOL_INTERVALS)})"
        )


def get_tool_interval(tool: str) -> float:
    """Poll interval for *tool*, falling back to the built-in default."""
    _check_tool(tool)
    intervals = load_config().get('intervals')
    saved = intervals.get(tool) if isinstance(intervals, dict) else None
    try:
        value = float(saved)
    except (TypeError, ValueError):
        return DEFAULT_TOOL_INTERVALS[tool]
    if value <= 0:
        log.warning("Ignoring non-positive %s interval in config: %s", tool, saved)
        return DEFAULT_TOOL_INTERVALS[tool]
    return value


def save_tool_interval(tool: str, seconds: float):
    """Persist a poll interval for *tool*."""
    _check_tool(tool)
    if seconds <= 0:
        raise ValueError(f"Interval must be positive, got {seconds}")
    config = load_config()
    intervals = config.get('intervals')
    if not isinstance(intervals, dict):
        intervals = {}
    intervals[tool] = float(seconds)
    config['intervals'] = intervals
    save_config(config)
