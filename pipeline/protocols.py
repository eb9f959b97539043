from __future__ import annotations

"""Contracts for the external build pipeline.

The commander only talks to these shapes. The default implementations live
in pipeline/sketch.py, pipeline/libraries.py and pipeline/toolchain.py;
tests inject fakes.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from core.platforms import Platform
from pipeline.errors import SketchException
from pipeline.libraries import Library
from pipeline.sketch import Sketch


class SketchLoaderProtocol(Protocol):
    def load(self, main_file: str | Path) -> Sketch:
        """Load a sketch from its main file. Raises SketchLoadError."""
        ...


class BuilderProtocol(Protocol):
    # Bound to one sketch.
    sketch: Sketch

    def compile(self, output_dir: Path, verbose: bool) -> str | None:
        """Compile into output_dir; return the main class name or None."""
        ...

    def export_application(self, output_dir: Path, platform: Platform, bits: int) -> bool:
        ...

    def imported_libraries(self) -> set[Library]:
        ...


class BuilderFactory(Protocol):
    def __call__(self, sketch: Sketch) -> BuilderProtocol:
        ...


class LibraryRegistryProtocol(Protocol):
    def has_multiple_arch(self, platform: Platform, libraries: Iterable[Library]) -> bool:
        ...


class RunnerListener(Protocol):
    """Receives progress from a running sketch.

    The launcher polls is_halted(); returning True asks it to stop.
    """

    def notify(self, message: str) -> None:
        ...

    def notify_error(self, error: str | SketchException) -> None:
        ...

    def is_halted(self) -> bool:
        ...


class LauncherProtocol(Protocol):
    def launch(self, build: BuilderProtocol, listener: RunnerListener, fullscreen: bool) -> None:
        """Start the compiled sketch and return without waiting for it."""
        ...
