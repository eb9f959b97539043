from __future__ import annotations

"""Contributed libraries and their architecture-specific exports.

Library layout on disk:

    libraries/
        VideoLib/
            library.properties
            library/
                VideoLib.jar
                export.txt        (optional)
                windows32/        (optional native folders)
                windows64/

A library is "multi-arch" on a platform when it ships both a 32-bit and a
64-bit variant for it. Exporting such a sketch needs an explicit --bits.
"""

import logging
import zipfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.platforms import Platform


class LibraryProperties(BaseModel):
    """Normalized contents of library.properties."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = None
    version: int | None = None
    pretty_version: str | None = Field(default=None, alias="prettyVersion")
    authors: str | None = None
    url: str | None = None
    category: str | None = None
    sentence: str | None = None
    paragraph: str | None = None
    min_revision: int = Field(default=0, alias="minRevision")
    max_revision: int = Field(default=0, alias="maxRevision")


def read_key_value_file(path: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if sep and key.strip():
            values[key.strip()] = value.strip()
    return values


def jar_packages(jar: Path) -> set[str]:
    """Package names of every class inside a jar."""
    packages: set[str] = set()
    with zipfile.ZipFile(jar) as archive:
        for entry in archive.namelist():
            if not entry.endswith(".class") or "/" not in entry:
                continue
            packages.add(entry.rpartition("/")[0].replace("/", "."))
    return packages


@dataclass(eq=False)
class Library:
    folder: Path
    properties: LibraryProperties
    packages: set[str] = field(default_factory=set)
    export_list: dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.properties.name or self.folder.name

    @property
    def library_path(self) -> Path:
        return self.folder / "library"

    def supports_arch(self, platform: Platform, bits: int) -> bool:
        variant = f"{platform.label}{bits}"
        if f"application.{variant}" in self.export_list:
            return True
        return (self.library_path / variant).is_dir()

    def has_multiple_arch(self, platform: Platform) -> bool:
        return self.supports_arch(platform, 32) and self.supports_arch(platform, 64)

    @classmethod
    def from_folder(cls, folder: Path) -> "Library":
        logger = logging.getLogger("commander.pipeline.libraries")

        raw_properties: dict[str, str] = {}
        properties_file = folder / "library.properties"
        if properties_file.is_file():
            raw_properties = read_key_value_file(properties_file)
        try:
            properties = LibraryProperties.model_validate(raw_properties)
        except ValidationError as exc:
            logger.warning("Invalid library.properties in %s: %s", folder, exc.errors())
            properties = LibraryProperties()

        library_path = folder / "library"
        export_file = library_path / "export.txt"
        export_list = read_key_value_file(export_file) if export_file.is_file() else {}

        packages: set[str] = set()
        for jar in sorted(library_path.glob("*.jar")):
            try:
                packages |= jar_packages(jar)
            except zipfile.BadZipFile:
                logger.warning("Skipping unreadable jar: %s", jar)
        return cls(folder=folder, properties=properties, packages=packages, export_list=export_list)


class LibraryRegistry:
    """All libraries found in the configured library folders."""

    def __init__(self, libraries: Iterable[Library]) -> None:
        self._logger = logging.getLogger("commander.pipeline.libraries")
        self._libraries = list(libraries)
        # First library wins when two export the same package.
        self._by_package: dict[str, Library] = {}
        for library in self._libraries:
            for package in sorted(library.packages):
                self._by_package.setdefault(package, library)
        self._logger.info(
            "LibraryRegistry initialized with libraries=%s",
            [library.name for library in self._libraries],
        )

    @classmethod
    def discover(cls, roots: Iterable[Path]) -> "LibraryRegistry":
        libraries: list[Library] = []
        for root in roots:
            if not root.is_dir():
                continue
            for folder in sorted(root.iterdir()):
                if (folder / "library").is_dir():
                    libraries.append(Library.from_folder(folder))
        return cls(libraries)

    @property
    def libraries(self) -> list[Library]:
        return list(self._libraries)

    def library_for_package(self, package: str) -> Library | None:
        return self._by_package.get(package)

    def libraries_for_imports(self, packages: Iterable[str]) -> set[Library]:
        found: set[Library] = set()
        for package in packages:
            library = self.library_for_package(package)
            if library is not None:
                found.add(library)
        return found

    @staticmethod
    def has_multiple_arch(platform: Platform, libraries: Iterable[Library]) -> bool:
        return any(library.has_multiple_arch(platform) for library in libraries)
