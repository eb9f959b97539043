from __future__ import annotations

"""Help text and error output.

Two output channels with fixed roles:
- stdout: help text, and only when --help (or no task) was asked for.
- stderr: usage text + message for fatal errors, one-line diagnostics for
  build errors, full traceback dumps for anything unclassified.

Build errors use the editor-friendly shape

    MySketch.pde:4:0:4:0: expecting SEMI, found 'ellipse'

with file/line/column repeated as a start and end position. Unknown columns
are written as 0.
"""

import sys
import traceback
from typing import TextIO

from core.config import VERSION_NAME
from pipeline.errors import UNKNOWN_COLUMN, BuildError, StructuredError

USAGE_LINES = (
    f"Command line edition for Processing sketches {VERSION_NAME}",
    "",
    "--help               Show this help text. Congratulations.",
    "",
    "--sketch=<name>      Specify the sketch folder (required)",
    "--output=<name>      Specify the output folder (required and",
    "                     cannot be the same as the sketch folder.)",
    "--force              The sketch will not build if the output",
    "                     folder already exists, because the contents",
    "                     will be replaced. This option overrides.",
    "",
    "--preprocess         Preprocess a sketch into .java files.",
    "--build              Preprocess and compile a sketch into .class files.",
    "--run                Preprocess, compile, and run a sketch.",
    "--present            Preprocess, compile, and run a sketch full screen.",
    "",
    "--export-application Export an application.",
    "--platform=<name>    Specify the platform (export to application only).",
    "                     Should be one of 'windows', 'macosx', or 'linux'.",
    "--bits=<n>           Must be specified if libraries are used that are",
    "                     32- or 64-bit specific such as the OpenGL library.",
    "                     Otherwise leave it out.",
)


def format_structured(error: StructuredError) -> str:
    column = error.column
    if column is None or column == UNKNOWN_COLUMN:
        column = 0
    position = f"{error.line}:{column}"
    return f"{error.file}:{position}:{position}: {error.message}"


class DiagnosticReporter:
    """Writes help, usage errors and build diagnostics.

    Streams default to the current sys.stdout / sys.stderr at write time.
    """

    def __init__(self, stdout: TextIO | None = None, stderr: TextIO | None = None) -> None:
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr or sys.stderr

    @staticmethod
    def print_usage(stream: TextIO) -> None:
        for line in USAGE_LINES:
            print(line, file=stream)

    def show_help(self) -> None:
        self.print_usage(self.stdout)

    def complain(self, message: str) -> None:
        self.print_usage(self.stderr)
        print(message, file=self.stderr)

    def notice(self, message: str) -> None:
        print(message, file=self.stderr)

    def report(self, error: BuildError) -> None:
        if error.kind == "structured":
            print(format_structured(error), file=self.stderr)
            return
        if error.cause is not None:
            traceback.print_exception(
                type(error.cause), error.cause, error.cause.__traceback__, file=self.stderr
            )
        else:
            print(error.message, file=self.stderr)
