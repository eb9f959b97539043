from __future__ import annotations

"""Sketch model and loader.

A sketch is a folder named like its main file:

    MySketch/
        MySketch.pde     <- main file
        Helpers.pde
        Particle.java
        data/
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from pipeline.errors import SketchLoadError

MAIN_EXTENSION = ".pde"
CODE_EXTENSIONS = (".pde", ".java")

# import processing.opengl.*;  /  import java.util.List;  /  import static java.lang.Math.PI;
_IMPORT_RE = re.compile(r"^\s*import\s+(static\s+)?([A-Za-z_][\w.]*?)(\.\*)?\s*;", re.MULTILINE)


def main_file_for(folder: Path) -> Path:
    """Main file implied by a sketch folder: <folder>/<folder name>.pde."""
    return folder / (folder.name + MAIN_EXTENSION)


@dataclass(frozen=True)
class SketchCode:
    path: Path

    @property
    def file_name(self) -> str:
        return self.path.name

    def read(self) -> str:
        return self.path.read_text(encoding="utf-8", errors="replace")


@dataclass(frozen=True)
class Sketch:
    name: str
    folder: Path
    code: tuple[SketchCode, ...] = field(default_factory=tuple)

    @property
    def main_file(self) -> Path:
        return self.code[0].path

    @property
    def data_folder(self) -> Path:
        return self.folder / "data"

    @property
    def code_folder(self) -> Path:
        return self.folder / "code"

    def code_by_name(self, file_name: str) -> SketchCode | None:
        for code in self.code:
            if code.file_name == file_name:
                return code
        return None

    def imports(self) -> list[str]:
        """Package names imported by the sketch, in first-seen order.

        `import a.b.*;` yields "a.b"; `import a.b.C;` yields "a.b". Static imports
        name a class member, so `import static a.b.C.m;` and
        `import static a.b.C.*;` both yield "a.b".
        """
        packages: list[str] = []
        for code in self.code:
            for match in _IMPORT_RE.finditer(code.read()):
                static, name, wildcard = match.groups()
                package = name if wildcard else name.rpartition(".")[0]
                if static:
                    package = package.rpartition(".")[0]
                if package and package not in packages:
                    packages.append(package)
        return packages


class SketchLoader:
    def __init__(self) -> None:
        self._logger = logging.getLogger("commander.pipeline.sketch")

    def load(self, main_file: str | Path) -> Sketch:
        main_path = Path(main_file)
        folder = main_path.parent
        try:
            others = sorted(
                entry
                for entry in folder.iterdir()
                if entry.is_file() and entry.suffix.lower() in CODE_EXTENSIONS and entry != main_path
            )
        except OSError as exc:
            raise SketchLoadError(f"Could not read sketch folder {folder}: {exc}") from exc
        if not main_path.is_file():
            raise SketchLoadError(f"{main_path} does not exist.")

        sketch = Sketch(
            name=main_path.stem,
            folder=folder,
            code=tuple(SketchCode(path) for path in [main_path, *others]),
        )
        self._logger.info("Sketch loaded: name=%s files=%s", sketch.name, len(sketch.code))
        return sketch
