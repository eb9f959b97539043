from __future__ import annotations

"""Errors raised by the build pipeline.

A build failure is one of two shapes, told apart by `kind`:
- StructuredError: points at a source file, line and (maybe) column.
- GenericError: anything else, optionally carrying the original exception.
"""

from dataclasses import dataclass
from typing import Literal, Union

UNKNOWN_COLUMN = -1


@dataclass(frozen=True)
class StructuredError:
    file: str
    line: int
    column: int | None
    message: str
    kind: Literal["structured"] = "structured"


@dataclass(frozen=True)
class GenericError:
    message: str
    cause: BaseException | None = None
    kind: Literal["generic"] = "generic"


BuildError = Union[StructuredError, GenericError]


class SketchException(Exception):
    """Checked build failure raised by the compiler, exporter or runner."""

    def __init__(self, error: BuildError) -> None:
        super().__init__(error.message)
        self.error = error

    @classmethod
    def at(cls, file: str, line: int, column: int | None, message: str) -> "SketchException":
        return cls(StructuredError(file=file, line=line, column=column, message=message))

    @classmethod
    def generic(cls, message: str, cause: BaseException | None = None) -> "SketchException":
        return cls(GenericError(message=message, cause=cause))


class SketchLoadError(OSError):
    """The sketch folder could not be read."""


class ToolchainError(OSError):
    """An external toolchain command is missing or could not be started."""
