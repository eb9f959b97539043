from __future__ import annotations


class UsageError(Exception):
    """Fatal command line problem.

    Reported as usage text followed by the message on stderr, exit status 1.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
