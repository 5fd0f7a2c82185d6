"""Key-value storage backends: in-memory and a single JSON file."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """String-to-string durable storage.

    ``write`` may raise OSError; callers treat that as a lost write, not a
    fatal error.
    """

    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Process-local storage. Survives session objects, not the process."""

    __slots__ = ("_data",)

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage:
    """All keys kept in one JSON object on disk, rewritten on every write.

    An unreadable file on startup is logged and treated as empty, so a
    corrupted save degrades to a first visit.
    """

    __slots__ = ("_path", "_data")

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._data: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable save file %s: %s", self._path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring save file %s: top level is not an object", self._path)
            return {}
        return {k: v for k, v in raw.items() if isinstance(v, str)}

    def read(self, key: str) -> str | None:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
        os.replace(tmp, self._path)
