from __future__ import annotations

from enum import IntEnum


class ExitStatus(IntEnum):
    """The only two ways the commander ends."""

    SUCCESS = 0
    FAILURE = 1

    @classmethod
    def from_success(cls, success: bool) -> "ExitStatus":
        return cls.SUCCESS if success else cls.FAILURE
