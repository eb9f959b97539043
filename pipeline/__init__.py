"""Build pipeline package exports.

The commander drives these collaborators but does not implement
preprocessing or compilation itself.
"""

from .errors import (
    BuildError,
    GenericError,
    SketchException,
    SketchLoadError,
    StructuredError,
    ToolchainError,
)
from .libraries import Library, LibraryProperties, LibraryRegistry
from .sketch import Sketch, SketchCode, SketchLoader, main_file_for
from .toolchain import ToolchainBuilder, ToolchainLauncher

__all__ = [
    "BuildError",
    "GenericError",
    "Library",
    "LibraryProperties",
    "LibraryRegistry",
    "Sketch",
    "SketchCode",
    "SketchException",
    "SketchLoadError",
    "SketchLoader",
    "StructuredError",
    "ToolchainBuilder",
    "ToolchainError",
    "ToolchainLauncher",
    "main_file_for",
]
