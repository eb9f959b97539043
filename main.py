from __future__ import annotations

import sys

from commander import DiagnosticReporter, ExitStatus, TaskDispatcher, UsageError, parse_args, validate
from core.config import AppConfig
from core.runtime import Environment, bootstrap, configure_logging


def main(argv: list[str] | None = None, environment: Environment | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    if environment is None:
        # Platform, preferences and toolchain are set up before any argument is read.
        config = AppConfig.from_env()
        configure_logging(config)
        environment = bootstrap(config)

    reporter = DiagnosticReporter()
    try:
        task = parse_args(args, environment)
        if not validate(task, reporter):
            return ExitStatus.SUCCESS
        success = TaskDispatcher(environment, reporter).dispatch(task)
    except UsageError as exc:
        reporter.complain(exc.message)
        return ExitStatus.FAILURE
    return ExitStatus.from_success(success)


if __name__ == "__main__":
    raise SystemExit(main())
