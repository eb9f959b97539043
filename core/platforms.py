from __future__ import annotations

"""Target platforms for application export.

Platform names match the ones used on the command line and in library
export lists: "windows", "macosx", "linux".
"""

import struct
import sys
from enum import Enum


class Platform(Enum):
    OTHER = 0
    WINDOWS = 1
    MACOSX = 2
    LINUX = 3

    @property
    def label(self) -> str:
        return _NAMES[self]


_NAMES = {
    Platform.OTHER: "other",
    Platform.WINDOWS: "windows",
    Platform.MACOSX: "macosx",
    Platform.LINUX: "linux",
}

# Only these may be named with --platform.
EXPORT_PLATFORMS = {
    "windows": Platform.WINDOWS,
    "macosx": Platform.MACOSX,
    "linux": Platform.LINUX,
}


def platform_from_name(name: str) -> Platform | None:
    """Map a platform name to a Platform, or None when unknown.

    Lookup is exact: "Linux" is not "linux".
    """
    return EXPORT_PLATFORMS.get(name)


def current_platform() -> Platform:
    if sys.platform.startswith("win"):
        return Platform.WINDOWS
    if sys.platform == "darwin":
        return Platform.MACOSX
    if sys.platform.startswith("linux"):
        return Platform.LINUX
    return Platform.OTHER


def native_bits() -> int:
    # Pointer size of the running interpreter.
    return struct.calcsize("P") * 8
