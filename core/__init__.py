"""Core package exports.

Exports configuration and platform helpers. The runtime bootstrap lives in
core.runtime and is imported from there, since it pulls in the pipeline.
"""

from .config import VERSION_NAME, AppConfig
from .platforms import Platform, current_platform, native_bits, platform_from_name

__all__ = [
    "VERSION_NAME",
    "AppConfig",
    "Platform",
    "current_platform",
    "native_bits",
    "platform_from_name",
]
