from __future__ import annotations

"""Runs a validated Task against the build pipeline.

Result handling:
- the pipeline's answer becomes a bool (True = success);
- SketchException is reported through DiagnosticReporter; a generic one
  with no cause is dumped with its own traceback;
- OSError is logged with its traceback;
- UsageError (export bits ambiguity) propagates to the entrypoint.
"""

import logging
import tempfile
from pathlib import Path

from commander.errors import UsageError
from commander.reporter import DiagnosticReporter
from commander.task import Task, TaskKind
from core.runtime import Environment
from pipeline.errors import GenericError, SketchException
from pipeline.protocols import BuilderProtocol
from pipeline.sketch import Sketch


class ConsoleListener:
    """Relays messages from a running sketch to stderr. Never halts it."""

    def __init__(self, reporter: DiagnosticReporter) -> None:
        self._reporter = reporter

    def notify(self, message: str) -> None:
        self._reporter.notice(message)

    def notify_error(self, error: str | SketchException) -> None:
        if isinstance(error, SketchException):
            self._reporter.report(error.error)
        else:
            self._reporter.notice(error)

    def is_halted(self) -> bool:
        return False


class TaskDispatcher:
    def __init__(self, environment: Environment, reporter: DiagnosticReporter) -> None:
        self._env = environment
        self._reporter = reporter
        self._logger = logging.getLogger("commander.dispatcher")

    def dispatch(self, task: Task) -> bool:
        self._logger.info("Dispatching task: kind=%s sketch=%s", task.kind.value, task.sketch_path)
        try:
            sketch = self._env.loader.load(task.sketch_path)
            success = self._run_task(task, sketch)
        except SketchException as exc:
            self._logger.info("Build failed: %s", exc)
            error = exc.error
            if error.kind == "generic" and error.cause is None:
                # No location and no underlying exception: dump the SketchException itself.
                error = GenericError(message=error.message, cause=exc)
            self._reporter.report(error)
            return False
        except OSError:
            self._logger.exception("I/O failure while running task %s", task.kind.value)
            return False
        self._logger.info("Task finished: kind=%s success=%s", task.kind.value, success)
        return success

    def _run_task(self, task: Task, sketch: Sketch) -> bool:
        if task.kind is TaskKind.BUILD:
            return self._compile(sketch, task.output_folder) is not None

        if task.kind in (TaskKind.RUN, TaskKind.PRESENT):
            return self._run(task, sketch)

        if task.kind is TaskKind.EXPORT_APPLICATION:
            return self._export_application(task, sketch)

        # Preprocess has a flag but no pipeline step in this version.
        self._logger.warning("Task %s is not available in this version", task.kind.value)
        return False

    def _compile(self, sketch: Sketch, output_dir: Path) -> BuilderProtocol | None:
        build = self._env.builder_factory(sketch)
        main_class = build.compile(output_dir, self._env.config.verbose)
        if not main_class:
            return None
        self._logger.info("Compiled sketch %s: main class=%s", sketch.name, main_class)
        return build

    def _run(self, task: Task, sketch: Sketch) -> bool:
        build = self._compile(sketch, task.output_folder)
        if build is None:
            return False
        fullscreen = task.kind is TaskKind.PRESENT
        self._env.launcher.launch(build, ConsoleListener(self._reporter), fullscreen)
        # The sketch keeps running on its own; launching it is the success.
        return True

    def _export_application(self, task: Task, sketch: Sketch) -> bool:
        # Compile into a scratch folder; the export writes into the output folder.
        with tempfile.TemporaryDirectory(prefix=f"{sketch.name}-") as scratch:
            build = self._compile(sketch, Path(scratch))
            if build is None:
                return False
            if task.platform_bits == 0 and self._env.libraries.has_multiple_arch(
                task.platform, build.imported_libraries()
            ):
                raise UsageError("This sketch can be exported for 32- or 64-bit, please specify one.")
            self._logger.info(
                "Exporting application: platform=%s bits=%s output=%s",
                task.platform.label,
                task.platform_bits,
                task.output_path,
            )
            return build.export_application(task.output_folder, task.platform, task.platform_bits)
