from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from core.platforms import Platform


class TaskKind(Enum):
    HELP = "help"
    # Accepted on the command line but currently disabled in dispatch.
    PREPROCESS = "preprocess"
    BUILD = "build"
    RUN = "run"
    PRESENT = "present"
    EXPORT_APPLICATION = "export-application"


@dataclass
class Task:
    """What one command line invocation asked for.

    Filled in by the argument parser, last flag wins for every field.
    """

    platform: Platform
    kind: TaskKind = TaskKind.HELP
    # Absolute path of the sketch's main file.
    sketch_path: str | None = None
    sketch_folder: Path | None = None
    # Raw --output value; checked and created by the validator.
    output_path: str | None = None
    force: bool = False
    # 0 means unspecified.
    platform_bits: int = 0

    @property
    def output_folder(self) -> Path | None:
        return Path(self.output_path) if self.output_path else None
