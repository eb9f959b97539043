from __future__ import annotations

"""Read-only preferences file.

Format is one `key=value` pair per line:

    sketchbook.path=/home/me/sketchbook
    export.application.fullscreen=false

Lines starting with `#`, blank lines and lines without `=` are ignored.
The commander never writes preferences back.
"""

import logging
from pathlib import Path

from pipeline.libraries import read_key_value_file

_TRUE_VALUES = {"true", "1", "yes", "on"}


class PreferencesStore:
    """Key/value preferences loaded once from a text file."""

    def __init__(self, path: str | Path | None) -> None:
        self._path = Path(path) if path else None
        self._logger = logging.getLogger("commander.preferences")
        self._values = self._load()
        self._logger.info(
            "PreferencesStore initialized: path=%s keys=%s",
            self._path,
            len(self._values),
        )

    @property
    def path(self) -> Path | None:
        return self._path

    def _load(self) -> dict[str, str]:
        if self._path is None:
            return {}
        if not self._path.exists():
            self._logger.warning("Preferences file not found: %s", self._path)
            return {}
        try:
            return read_key_value_file(self._path)
        except OSError as exc:
            self._logger.warning("Failed to read preferences file: %s", exc)
            return {}

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._values.get(key, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._values.get(key)
        if value is None:
            return default
        return value.lower() in _TRUE_VALUES

    def get_path(self, key: str) -> Path | None:
        value = self._values.get(key)
        if not value:
            return None
        return Path(value).expanduser()
