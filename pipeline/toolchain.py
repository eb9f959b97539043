from __future__ import annotations

"""Default build pipeline backed by external commands.

Commands come from AppConfig (SKETCH_BUILD_COMMAND, SKETCH_RUN_COMMAND,
SKETCH_EXPORT_COMMAND) and are called like:

    <build>  --sketch=<folder> --output=<dir> [--verbose]
    <export> --sketch=<folder> --classes=<dir> --main=<class> --output=<dir>
             --platform=<name> --bits=<n>
    <run>    --classes=<dir> --main=<class> [--present]

Compiler diagnostics are expected in the usual one-line shape:

    MySketch.pde:12:5: unexpected token: }
"""

import logging
import re
import shlex
import subprocess
import threading
import time
from collections.abc import Callable
from pathlib import Path
from typing import IO

from core.platforms import Platform
from pipeline.errors import SketchException, ToolchainError
from pipeline.libraries import Library, LibraryRegistry
from pipeline.protocols import RunnerListener
from pipeline.sketch import Sketch

_DIAGNOSTIC_RE = re.compile(
    r"^(?P<file>[^:\s][^:]*):(?P<line>\d+)(?::(?P<column>\d+))?:\s*(?P<message>.+)$"
)


def parse_diagnostic(text: str) -> SketchException | None:
    """Turn the first `file:line[:column]: message` line into a SketchException."""
    for raw_line in text.splitlines():
        match = _DIAGNOSTIC_RE.match(raw_line.strip())
        if match is None:
            continue
        column = match.group("column")
        return SketchException.at(
            file=Path(match.group("file")).name,
            line=int(match.group("line")),
            column=int(column) if column is not None else None,
            message=match.group("message").strip(),
        )
    return None


def _split_command(name: str, command: str) -> list[str]:
    parts = shlex.split(command)
    if not parts:
        raise ToolchainError(f"{name} is not set. Configure it in the environment or .env.")
    return parts


class ToolchainBuilder:
    """Builder bound to one sketch, driving the external compiler and exporter."""

    def __init__(
        self,
        sketch: Sketch,
        registry: LibraryRegistry,
        build_command: str,
        export_command: str,
    ) -> None:
        self.sketch = sketch
        self.output_dir: Path | None = None
        self.main_class_name: str | None = None
        self._registry = registry
        self._build_command = build_command
        self._export_command = export_command
        self._logger = logging.getLogger("commander.pipeline.toolchain")

    def compile(self, output_dir: Path, verbose: bool) -> str | None:
        command = _split_command("SKETCH_BUILD_COMMAND", self._build_command)
        command += [f"--sketch={self.sketch.folder}", f"--output={output_dir}"]
        if verbose:
            command.append("--verbose")

        result = self._run(command)
        if result.returncode != 0:
            diagnostic = parse_diagnostic(result.stderr)
            if diagnostic is not None:
                raise diagnostic
            if result.stderr.strip():
                raise SketchException.generic(result.stderr.strip())
            self._logger.warning("Compiler exited with status=%s and no output", result.returncode)
            return None

        if verbose and result.stdout.strip():
            self._logger.info("Compiler output:\n%s", result.stdout.rstrip())
        self.output_dir = output_dir
        self.main_class_name = self.sketch.name
        return self.main_class_name

    def export_application(self, output_dir: Path, platform: Platform, bits: int) -> bool:
        if self.output_dir is None:
            raise ToolchainError(f"{self.sketch.name} must be compiled before it can be exported.")
        command = _split_command("SKETCH_EXPORT_COMMAND", self._export_command)
        command += [
            f"--sketch={self.sketch.folder}",
            f"--classes={self.output_dir}",
            f"--main={self.main_class_name}",
            f"--output={output_dir}",
            f"--platform={platform.label}",
            f"--bits={bits}",
        ]
        result = self._run(command)
        if result.returncode != 0:
            diagnostic = parse_diagnostic(result.stderr)
            if diagnostic is not None:
                raise diagnostic
            self._logger.warning("Exporter failed: status=%s stderr=%s", result.returncode, result.stderr.strip())
            return False
        return True

    def imported_libraries(self) -> set[Library]:
        return self._registry.libraries_for_imports(self.sketch.imports())

    def _run(self, command: list[str]) -> subprocess.CompletedProcess[str]:
        self._logger.info("Toolchain command: %s", shlex.join(command))
        try:
            result = subprocess.run(command, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise ToolchainError(f"Could not start {command[0]}: {exc}") from exc
        self._logger.info("Toolchain command finished: status=%s", result.returncode)
        return result


class ToolchainLauncher:
    """Starts the compiled sketch and relays its output to a listener.

    launch() returns once the process has started. Relay threads are not
    daemons, so the interpreter stays up until the sketch exits.
    """

    def __init__(self, run_command: str, poll_interval: float = 0.25) -> None:
        self._run_command = run_command
        self._poll_interval = poll_interval
        self._logger = logging.getLogger("commander.pipeline.launcher")

    def launch(self, build: ToolchainBuilder, listener: RunnerListener, fullscreen: bool) -> None:
        command = _split_command("SKETCH_RUN_COMMAND", self._run_command)
        command += [f"--classes={build.output_dir}", f"--main={build.main_class_name}"]
        if fullscreen:
            command.append("--present")

        self._logger.info("Launching sketch: %s", shlex.join(command))
        try:
            process = subprocess.Popen(command, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)
        except OSError as exc:
            raise ToolchainError(f"Could not start {command[0]}: {exc}") from exc

        threads = [
            threading.Thread(target=_relay, args=(process.stdout, listener.notify), name="sketch-stdout"),
            threading.Thread(
                target=_relay,
                args=(process.stderr, lambda line: listener.notify_error(parse_diagnostic(line) or line)),
                name="sketch-stderr",
            ),
            threading.Thread(
                target=self._watch,
                args=(process, listener),
                name="sketch-watch",
            ),
        ]
        for thread in threads:
            thread.start()

    def _watch(self, process: subprocess.Popen[str], listener: RunnerListener) -> None:
        while process.poll() is None:
            if listener.is_halted():
                self._logger.info("Halt requested, terminating sketch pid=%s", process.pid)
                process.terminate()
                break
            time.sleep(self._poll_interval)
        status = process.wait()
        self._logger.info("Sketch exited: status=%s", status)


def _relay(stream: IO[str] | None, deliver: Callable[[str], None]) -> None:
    if stream is None:
        return
    with stream:
        for line in stream:
            deliver(line.rstrip("\n"))
