"""Small persisted key-value records shared across status line invocations."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class StateStore:
    """A JSON object stored in a single file.

    Reads are lenient: a missing or corrupt file is an empty record. Writes
    go through a temp file and ``os.replace`` so a killed process never leaves
    a half-written record behind.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text())
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable state file %s: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("State file %s does not hold an object", self._path)
            return {}
        return data

    def save(self, data: dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp.write_text(json.dumps(data, default=str))
            os.replace(tmp, self._path)
        except OSError as exc:
            logger.warning("Could not write state file %s: %s", self._path, exc)

    def update(self, **values: Any) -> dict[str, Any]:
        """Merge *values* into the record and persist it."""
        data = self.load()
        data.update(values)
        self.save(data)
        return data
