import zipfile
from pathlib import Path

from core.platforms import Platform
from pipeline.libraries import Library, LibraryProperties, LibraryRegistry, jar_packages


def _make_library(
    root: Path,
    name: str,
    classes: list[str],
    export_lines: list[str] | None = None,
    native_folders: list[str] | None = None,
    properties: str = "",
) -> Path:
    folder = root / name
    library_path = folder / "library"
    library_path.mkdir(parents=True)
    with zipfile.ZipFile(library_path / f"{name}.jar", "w") as archive:
        for entry in classes:
            archive.writestr(entry, b"\xca\xfe\xba\xbe")
        archive.writestr("META-INF/MANIFEST.MF", "Manifest-Version: 1.0\n")
    if export_lines is not None:
        (library_path / "export.txt").write_text("\n".join(export_lines), encoding="utf-8")
    for native in native_folders or []:
        (library_path / native).mkdir()
    if properties:
        (folder / "library.properties").write_text(properties, encoding="utf-8")
    return folder


def test_jar_packages_lists_class_packages(tmp_path: Path) -> None:
    folder = _make_library(tmp_path, "Net", ["processing/net/Client.class", "processing/net/Server.class", "Loose.class"])
    assert jar_packages(folder / "library" / "Net.jar") == {"processing.net"}


def test_properties_are_normalized(tmp_path: Path) -> None:
    folder = _make_library(
        tmp_path,
        "Video",
        ["processing/video/Movie.class"],
        properties="name=Video\nversion=3\nprettyVersion=2.0\nminRevision=228\n# comment\nauthors=The Team\n",
    )
    library = Library.from_folder(folder)

    assert library.name == "Video"
    assert library.properties.version == 3
    assert library.properties.pretty_version == "2.0"
    assert library.properties.min_revision == 228
    assert library.properties.max_revision == 0


def test_invalid_properties_fall_back_to_folder_name(tmp_path: Path) -> None:
    folder = _make_library(tmp_path, "Serial", ["processing/serial/Serial.class"], properties="version=not-a-number\n")
    library = Library.from_folder(folder)

    assert library.properties == LibraryProperties()
    assert library.name == "Serial"


def test_multi_arch_from_export_list(tmp_path: Path) -> None:
    folder = _make_library(
        tmp_path,
        "OpenGL",
        ["processing/opengl/PGraphicsOpenGL.class"],
        export_lines=[
            "application.windows32=OpenGL.jar,windows32",
            "application.windows64=OpenGL.jar,windows64",
            "application.linux64=OpenGL.jar,linux64",
        ],
    )
    library = Library.from_folder(folder)

    assert library.has_multiple_arch(Platform.WINDOWS) is True
    assert library.has_multiple_arch(Platform.LINUX) is False
    assert library.has_multiple_arch(Platform.MACOSX) is False


def test_multi_arch_from_native_folders(tmp_path: Path) -> None:
    folder = _make_library(tmp_path, "Sound", ["processing/sound/Sound.class"], native_folders=["linux32", "linux64"])
    assert Library.from_folder(folder).has_multiple_arch(Platform.LINUX) is True


def test_registry_maps_imports_to_libraries(tmp_path: Path) -> None:
    root = tmp_path / "libraries"
    _make_library(root, "Net", ["processing/net/Client.class"])
    _make_library(
        root,
        "OpenGL",
        ["processing/opengl/PGL.class"],
        export_lines=["application.macosx32=a", "application.macosx64=b"],
    )
    (root / "not-a-library").mkdir()

    registry = LibraryRegistry.discover([root, tmp_path / "missing"])

    assert sorted(library.name for library in registry.libraries) == ["Net", "OpenGL"]
    assert registry.library_for_package("processing.net").name == "Net"
    assert registry.library_for_package("java.util") is None

    imported = registry.libraries_for_imports(["processing.net", "java.util", "processing.net"])
    assert [library.name for library in imported] == ["Net"]
    assert registry.has_multiple_arch(Platform.MACOSX, imported) is False

    imported = registry.libraries_for_imports(["processing.opengl", "processing.net"])
    assert registry.has_multiple_arch(Platform.MACOSX, imported) is True


def test_has_multiple_arch_with_no_libraries() -> None:
    assert LibraryRegistry([]).has_multiple_arch(Platform.WINDOWS, set()) is False
