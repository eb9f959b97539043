from __future__ import annotations

"""Application configuration bootstrap.

Why this module exists:
- Keep all env variables in one place.
- Provide safe defaults for local runs.
- Avoid hardcoding toolchain commands or file paths in the commander.

Example .env:
    SKETCH_BUILD_COMMAND=sketch-javac
    SKETCH_RUN_COMMAND=sketch-run
    SKETCH_EXPORT_COMMAND=sketch-export
    LOG_FILE=logs/commander.log
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Automatically load .env (if present) for local runs.
# Shell variables still have priority by default.
load_dotenv()

LOGGER = logging.getLogger("commander.config")

VERSION_NAME = "1.0.0"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _read_bool_env(name: str, default: bool) -> bool:
    """Read boolean env var with fallback + warning on invalid values.

    Example:
    - SKETCH_VERBOSE=no    -> False
    - SKETCH_VERBOSE=maybe -> warning + default
    """
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    cleaned = raw_value.strip().lower()
    if cleaned in _TRUE_VALUES:
        return True
    if cleaned in _FALSE_VALUES:
        return False
    LOGGER.warning("Invalid boolean %s=%r. Using default=%s.", name, raw_value, default)
    return default


def _read_paths_env(name: str) -> tuple[str, ...]:
    raw_value = os.getenv(name, "")
    return tuple(part for part in raw_value.split(os.pathsep) if part.strip())


@dataclass(frozen=True)
class AppConfig:
    """Immutable runtime configuration used by the command line entrypoint."""

    # Logging settings. Empty log_file means stderr.
    log_level: str
    log_file: str

    # Preferences and sketchbook.
    preferences_file: str
    sketchbook_path: str
    libraries_paths: tuple[str, ...]

    # External toolchain command lines.
    build_command: str
    run_command: str
    export_command: str

    # Passed through to the compile step.
    verbose: bool = True

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build configuration from environment variables."""
        config = cls(
            log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
            log_file=os.getenv("LOG_FILE", ""),
            preferences_file=os.getenv("SKETCH_PREFERENCES_FILE", ""),
            sketchbook_path=os.getenv("SKETCHBOOK_PATH", ""),
            libraries_paths=_read_paths_env("SKETCH_LIBRARIES_PATH"),
            build_command=os.getenv("SKETCH_BUILD_COMMAND", ""),
            run_command=os.getenv("SKETCH_RUN_COMMAND", ""),
            export_command=os.getenv("SKETCH_EXPORT_COMMAND", ""),
            verbose=_read_bool_env("SKETCH_VERBOSE", True),
        )

        LOGGER.debug(
            "Config loaded: log_file=%s preferences_file=%s sketchbook=%s build=%s run=%s export=%s verbose=%s",
            config.log_file or "<stderr>",
            config.preferences_file or "<none>",
            config.sketchbook_path or "<default>",
            config.build_command or "<unset>",
            config.run_command or "<unset>",
            config.export_command or "<unset>",
            config.verbose,
        )
        return config
