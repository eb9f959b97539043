"""Small task runner for common project commands.

This keeps usage consistent across machines without requiring Make/Just.
"""

import argparse
import subprocess
import sys


def _run(command: list[str]) -> None:
    subprocess.run(command, check=True)


def main() -> None:
    parser = argparse.ArgumentParser(description="Project task runner")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("test", help="Run unit tests")
    subparsers.add_parser("lint", help="Run basic syntax checks")
    run_cli = subparsers.add_parser("run-cli", help="Run the commander with the given flags")
    run_cli.add_argument("flags", nargs=argparse.REMAINDER, help="Commander flags, e.g. --build --sketch=...")

    args = parser.parse_args()
    if args.command == "test":
        _run([sys.executable, "-m", "pytest", "-q"])
        return

    if args.command == "lint":
        _run([sys.executable, "-m", "compileall", "-q", "main.py", "commander", "core", "pipeline", "stores"])
        return

    if args.command == "run-cli":
        flags = args.flags if args.flags else ["--help"]
        _run([sys.executable, "main.py", *flags])
        return

    parser.error(f"Unknown command: {args.command}")


if __name__ == "__main__":
    main()
