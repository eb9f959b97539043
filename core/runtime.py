from __future__ import annotations

"""Runtime composition helpers.

This module wires together:
- logging,
- platform detection and requirement checks,
- preferences and sketchbook location,
- the build pipeline collaborators.

Everything here runs once, before any command line argument is
interpreted, and ends up in one Environment value.
"""

import logging
import shutil
import shlex
import sys
from dataclasses import dataclass
from pathlib import Path

from core.config import AppConfig
from core.platforms import Platform, current_platform, native_bits
from pipeline.libraries import LibraryRegistry
from pipeline.protocols import BuilderFactory, LauncherProtocol, LibraryRegistryProtocol, SketchLoaderProtocol
from pipeline.sketch import Sketch, SketchLoader
from pipeline.toolchain import ToolchainBuilder, ToolchainLauncher
from stores.preferences import PreferencesStore

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(config: AppConfig) -> None:
    """Initialize logging according to AppConfig.

    Without LOG_FILE, records go to stderr. stdout is reserved for help text.
    """
    if config.log_file:
        log_path = Path(config.log_file)
        # Example: logs/commander.log -> create logs/ if missing.
        if log_path.parent != Path("."):
            log_path.parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            level=config.log_level,
            format=LOG_FORMAT,
            filename=config.log_file,
            encoding="utf-8",
        )
    else:
        logging.basicConfig(level=config.log_level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("commander.runtime").info(
        "Logging configured: file=%s level=%s",
        config.log_file or "<stderr>",
        config.log_level,
    )


@dataclass(frozen=True)
class Environment:
    """Process-wide state gathered at startup and passed around explicitly."""

    config: AppConfig
    platform: Platform
    native_bits: int
    preferences: PreferencesStore
    sketchbook: Path
    loader: SketchLoaderProtocol
    builder_factory: BuilderFactory
    libraries: LibraryRegistryProtocol
    launcher: LauncherProtocol


def locate_sketchbook(config: AppConfig, preferences: PreferencesStore) -> Path:
    """Sketchbook folder: env override, then preferences, then ~/sketchbook."""
    if config.sketchbook_path:
        return Path(config.sketchbook_path).expanduser()
    from_preferences = preferences.get_path("sketchbook.path")
    if from_preferences is not None:
        return from_preferences
    return Path.home() / "sketchbook"


def check_requirements(config: AppConfig) -> list[str]:
    """Return the names of configured toolchain commands missing from PATH."""
    logger = logging.getLogger("commander.runtime")
    missing: list[str] = []
    for name, command in (
        ("SKETCH_BUILD_COMMAND", config.build_command),
        ("SKETCH_RUN_COMMAND", config.run_command),
        ("SKETCH_EXPORT_COMMAND", config.export_command),
    ):
        parts = shlex.split(command)
        if not parts:
            logger.debug("%s is not set", name)
            continue
        if shutil.which(parts[0]) is None:
            logger.warning("%s points to %r, which was not found.", name, parts[0])
            missing.append(name)
    return missing


def bootstrap(config: AppConfig) -> Environment:
    """Build the Environment once per process.

    Example:
        env = bootstrap(AppConfig.from_env())
        sketch = env.loader.load("/s/MySketch/MySketch.pde")
    """
    logger = logging.getLogger("commander.runtime")

    platform = current_platform()
    bits = native_bits()
    logger.info("Platform detected: %s (%s-bit)", platform.label, bits)

    check_requirements(config)

    preferences = PreferencesStore(config.preferences_file or None)
    sketchbook = locate_sketchbook(config, preferences)
    logger.info("Sketchbook folder: %s", sketchbook)

    library_roots = [sketchbook / "libraries", *(Path(path) for path in config.libraries_paths)]
    registry = LibraryRegistry.discover(library_roots)

    def builder_factory(sketch: Sketch) -> ToolchainBuilder:
        return ToolchainBuilder(
            sketch,
            registry=registry,
            build_command=config.build_command,
            export_command=config.export_command,
        )

    return Environment(
        config=config,
        platform=platform,
        native_bits=bits,
        preferences=preferences,
        sketchbook=sketchbook,
        loader=SketchLoader(),
        builder_factory=builder_factory,
        libraries=registry,
        launcher=ToolchainLauncher(config.run_command),
    )
