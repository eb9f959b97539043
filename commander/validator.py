from __future__ import annotations

"""Cross-field checks run after parsing and before dispatch.

The first failing check raises UsageError. Creating the output folder is
the only filesystem change made here, and it is attempted once.
"""

import logging
from pathlib import Path

from commander.errors import UsageError
from commander.reporter import DiagnosticReporter
from commander.task import Task, TaskKind
from pipeline.sketch import MAIN_EXTENSION

LOGGER = logging.getLogger("commander.validator")


def validate(task: Task, reporter: DiagnosticReporter) -> bool:
    """Check the task; return False when there is nothing left to dispatch.

    Help prints usage to stdout and skips every other check.
    """
    if task.kind is TaskKind.HELP:
        reporter.show_help()
        return False

    if not task.output_path:
        raise UsageError("An output path must be specified.")

    # Checked before touching the output folder: the main file always exists,
    # so creating the folder first would hide this case behind a folder error.
    if task.sketch_path and str(Path(task.output_path).resolve()) == task.sketch_path:
        raise UsageError("The sketch path and output path cannot be identical.")

    _prepare_output_folder(task)

    if not task.sketch_path:
        raise UsageError("No sketch path specified.")

    if not task.sketch_path.lower().endswith(MAIN_EXTENSION):
        raise UsageError(f"Sketch path must point to the main {MAIN_EXTENSION} file.")

    LOGGER.info("Task validated: kind=%s output=%s", task.kind.value, task.output_path)
    return True


def _prepare_output_folder(task: Task) -> None:
    folder = task.output_folder
    if folder.exists() and not task.force:
        raise UsageError("The output folder already exists. Use --force to overwrite it.")
    try:
        folder.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        LOGGER.info("Could not create output folder %s: %s", folder, exc)
        raise UsageError("Could not create the output folder.") from exc
    LOGGER.info("Output folder ready: %s", folder)
