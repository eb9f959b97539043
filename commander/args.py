from __future__ import annotations

"""Command line parsing.

Tokens are read left to right. Every flag overwrites whatever an earlier
flag of the same kind set, so `--build --run` runs and `--sketch=a
--sketch=b` uses b. No conflict is reported in either case.

argparse is not used here: its prefix matching, `--flag value` forms and
error messages do not match the flag grammar below.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from commander.errors import UsageError
from commander.task import Task, TaskKind
from core.platforms import platform_from_name
from core.runtime import Environment
from pipeline.sketch import main_file_for

HELP_FLAG = "--help"
TASK_FLAGS = {
    "--preprocess": TaskKind.PREPROCESS,
    "--build": TaskKind.BUILD,
    "--run": TaskKind.RUN,
    "--present": TaskKind.PRESENT,
    "--export-application": TaskKind.EXPORT_APPLICATION,
}

FORCE_FLAG = "--force"
SKETCH_PREFIX = "--sketch="
OUTPUT_PREFIX = "--output="
PLATFORM_PREFIX = "--platform="
BITS_PREFIX = "--bits="

_BITS = {"32": 32, "64": 64}

LOGGER = logging.getLogger("commander.args")


def parse_args(tokens: Iterable[str], environment: Environment) -> Task:
    """Turn raw arguments into a Task, or raise UsageError.

    Example:
        task = parse_args(["--build", "--sketch=/s/Blink", "--output=/tmp/out"], env)
        task.kind  -> TaskKind.BUILD
    """
    task = Task(platform=environment.platform)
    for token in tokens:
        _apply(task, token)
    LOGGER.info(
        "Parsed task: kind=%s sketch=%s output=%s force=%s platform=%s bits=%s",
        task.kind.value,
        task.sketch_path,
        task.output_path,
        task.force,
        task.platform.label,
        task.platform_bits,
    )
    return task


def _apply(task: Task, token: str) -> None:
    if not token:
        # Empty strings come from wrapper scripts expanding unset variables.
        return

    if token == HELP_FLAG:
        # Help is the default kind; an explicit --help never overrides a task flag.
        return

    if token in TASK_FLAGS:
        task.kind = TASK_FLAGS[token]

    elif token == FORCE_FLAG:
        task.force = True

    elif token.startswith(PLATFORM_PREFIX):
        name = token[len(PLATFORM_PREFIX):]
        platform = platform_from_name(name)
        if platform is None:
            raise UsageError(f"{name} should instead be 'windows', 'macosx', or 'linux'.")
        task.platform = platform

    elif token.startswith(BITS_PREFIX):
        value = token[len(BITS_PREFIX):]
        if value not in _BITS:
            raise UsageError(f"Bits should be either 32 or 64, not {value}.")
        task.platform_bits = _BITS[value]

    elif token.startswith(SKETCH_PREFIX):
        value = token[len(SKETCH_PREFIX):]
        folder = Path(value)
        if not folder.exists():
            raise UsageError(f"{value} does not exist.")
        main_file = main_file_for(folder)
        if not main_file.exists():
            raise UsageError(f"Not a valid sketch folder. {main_file} does not exist.")
        task.sketch_folder = folder
        task.sketch_path = str(main_file.resolve())

    elif token.startswith(OUTPUT_PREFIX):
        task.output_path = token[len(OUTPUT_PREFIX):]

    else:
        raise UsageError(f"I don't know anything about {token}.")
