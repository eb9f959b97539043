"""Command line commander package exports.

Parsing, validation, dispatch and reporting for one invocation.
"""

from .args import parse_args
from .dispatcher import ConsoleListener, TaskDispatcher
from .errors import UsageError
from .reporter import DiagnosticReporter
from .status import ExitStatus
from .task import Task, TaskKind
from .validator import validate

__all__ = [
    "ConsoleListener",
    "DiagnosticReporter",
    "ExitStatus",
    "Task",
    "TaskDispatcher",
    "TaskKind",
    "UsageError",
    "parse_args",
    "validate",
]
