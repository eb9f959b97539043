import shlex
import sys
from pathlib import Path

from core.platforms import Platform
from core.runtime import bootstrap, check_requirements, locate_sketchbook
from pipeline.sketch import SketchLoader
from pipeline.toolchain import ToolchainBuilder, ToolchainLauncher
from stores.preferences import PreferencesStore


def test_sketchbook_from_env_wins(config_factory, tmp_path: Path) -> None:
    prefs_file = tmp_path / "preferences.txt"
    prefs_file.write_text(f"sketchbook.path={tmp_path / 'from-prefs'}\n", encoding="utf-8")
    preferences = PreferencesStore(prefs_file)

    config = config_factory(sketchbook_path=str(tmp_path / "from-env"))
    assert locate_sketchbook(config, preferences) == tmp_path / "from-env"

    assert locate_sketchbook(config_factory(), preferences) == tmp_path / "from-prefs"
    assert locate_sketchbook(config_factory(), PreferencesStore(None)) == Path.home() / "sketchbook"


def test_check_requirements_reports_missing_commands(config_factory) -> None:
    config = config_factory(
        build_command=shlex.join([sys.executable, "-c", "pass"]),
        run_command="definitely-not-a-real-sketch-runner --fast",
    )
    assert check_requirements(config) == ["SKETCH_RUN_COMMAND"]


def test_bootstrap_wires_the_toolchain(config_factory, tmp_path: Path, sketch_dir: Path) -> None:
    library = tmp_path / "sketchbook" / "libraries" / "Empty" / "library"
    library.mkdir(parents=True)
    config = config_factory(sketchbook_path=str(tmp_path / "sketchbook"), build_command="javac")

    env = bootstrap(config)

    assert env.config is config
    assert isinstance(env.platform, Platform)
    assert env.native_bits in (32, 64)
    assert env.sketchbook == tmp_path / "sketchbook"
    assert [lib.name for lib in env.libraries.libraries] == ["Empty"]
    assert isinstance(env.launcher, ToolchainLauncher)

    sketch = SketchLoader().load(sketch_dir / "MySketch.pde")
    builder = env.builder_factory(sketch)
    assert isinstance(builder, ToolchainBuilder)
    assert builder.sketch is sketch
