"""Minimaid version information."""

__version__ = "1.0.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 1.0.0 - Initial release: session lifecycle, light/input report codec,
#         cycle/random/input demo tools, detect and setup-udev commands
