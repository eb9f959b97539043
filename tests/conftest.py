"""Shared fixtures: a sketch on disk and an Environment wired to fakes.

No external toolchain is needed for these tests.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import AppConfig
from core.platforms import Platform
from core.runtime import Environment
from pipeline.libraries import Library
from pipeline.sketch import Sketch, SketchLoader
from stores.preferences import PreferencesStore


class FakeBuilder:
    def __init__(self, sketch: Sketch, owner: "FakePipeline") -> None:
        self.sketch = sketch
        self._owner = owner

    def compile(self, output_dir: Path, verbose: bool) -> str | None:
        self._owner.calls.append(("compile", output_dir, verbose))
        if self._owner.compile_error is not None:
            raise self._owner.compile_error
        return self._owner.main_class

    def export_application(self, output_dir: Path, platform: Platform, bits: int) -> bool:
        self._owner.calls.append(("export", output_dir, platform, bits))
        return self._owner.export_result

    def imported_libraries(self) -> set[Library]:
        return set(self._owner.libraries)


class FakePipeline:
    """Records every call the dispatcher makes."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.main_class: str | None = "MySketch"
        self.compile_error: BaseException | None = None
        self.export_result = True
        self.libraries: list[Library] = []
        self.multiple_arch = False

    def builder(self, sketch: Sketch) -> FakeBuilder:
        return FakeBuilder(sketch, self)

    def has_multiple_arch(self, platform: Platform, libraries) -> bool:
        self.calls.append(("has_multiple_arch", platform, len(list(libraries))))
        return self.multiple_arch

    def launch(self, build, listener, fullscreen: bool) -> None:
        self.calls.append(("launch", build.sketch.name, fullscreen, listener.is_halted()))

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]


def make_config(**overrides) -> AppConfig:
    values = dict(
        log_level="WARNING",
        log_file="",
        preferences_file="",
        sketchbook_path="",
        libraries_paths=(),
        build_command="",
        run_command="",
        export_command="",
        verbose=True,
    )
    values.update(overrides)
    return AppConfig(**values)


@pytest.fixture
def config_factory():
    return make_config


@pytest.fixture
def pipeline() -> FakePipeline:
    return FakePipeline()


@pytest.fixture
def env(pipeline: FakePipeline, tmp_path: Path) -> Environment:
    return Environment(
        config=make_config(),
        platform=Platform.LINUX,
        native_bits=64,
        preferences=PreferencesStore(None),
        sketchbook=tmp_path / "sketchbook",
        loader=SketchLoader(),
        builder_factory=pipeline.builder,
        libraries=pipeline,
        launcher=pipeline,
    )


@pytest.fixture
def sketch_dir(tmp_path: Path) -> Path:
    folder = tmp_path / "sketches" / "MySketch"
    folder.mkdir(parents=True)
    (folder / "MySketch.pde").write_text("void setup() {\n  size(200, 200);\n}\n", encoding="utf-8")
    return folder
